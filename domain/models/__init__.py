"""
Domain models for the workout builder.

These models represent the core concepts of the builder wizard:
- Exercise: a prescribed exercise inside a block
- Block: an ordered group of exercises sharing a flow (circuit, EMOM, ...)
- FlatBlocks / DayBlocks: the two block containers (single vs weekly)
- WeekPlanEntry: one week of a monthly plan
- WorkflowState: the wizard's accumulated state

Usage:
    >>> from domain.models import Block, Exercise, FlatBlocks, WorkflowState

    >>> state = WorkflowState(
    ...     block_state=FlatBlocks(
    ...         blocks=[Block(name="Main", exercises=[Exercise(name="Back Squat")])]
    ...     )
    ... )
    >>> state.total_exercises
    1
"""

from domain.models.artifact import (
    ArtifactCollection,
    ArtifactMetadata,
    ArtifactType,
    SaveAction,
    Weekday,
)
from domain.models.block import Block, BlockCategory, BlockFlow
from domain.models.block_container import BlockContainer, DayBlocks, FlatBlocks
from domain.models.exercise import Exercise, new_id
from domain.models.week_plan import WeekPlanEntry
from domain.models.workflow_state import (
    DEFAULT_PLAN_WEEKS,
    MAX_PLAN_WEEKS,
    StepDescriptor,
    StepId,
    WorkflowState,
    default_week_plan,
    empty_container,
)

__all__ = [
    # Entities
    "Exercise",
    "Block",
    "WeekPlanEntry",
    "ArtifactMetadata",
    "WorkflowState",
    "StepDescriptor",
    # Containers
    "BlockContainer",
    "FlatBlocks",
    "DayBlocks",
    # Enums
    "ArtifactType",
    "ArtifactCollection",
    "SaveAction",
    "Weekday",
    "BlockCategory",
    "BlockFlow",
    "StepId",
    # Helpers
    "new_id",
    "default_week_plan",
    "empty_container",
    "DEFAULT_PLAN_WEEKS",
    "MAX_PLAN_WEEKS",
]
