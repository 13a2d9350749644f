"""
Pure domain services for the builder wizard.

- step_sequencer: ordered steps per artifact type
- step_validation: per-step completion rules
- block_store / week_plan_store: container mutations
- starter_templates: template catalog and starter blocks
"""

from domain.services.block_store import BlockStore, BlockStoreError
from domain.services.step_sequencer import clamp_step_index, sequence
from domain.services.step_validation import (
    describe_errors,
    get_step_errors,
    is_step_complete,
)
from domain.services.week_plan_store import WeekPlanError, WeekPlanStore

__all__ = [
    "BlockStore",
    "BlockStoreError",
    "WeekPlanStore",
    "WeekPlanError",
    "sequence",
    "clamp_step_index",
    "get_step_errors",
    "is_step_complete",
    "describe_errors",
]
