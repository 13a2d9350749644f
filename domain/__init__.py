"""
Domain layer for the workout builder.

This package contains pure domain models and logic that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ArtifactType,
    Block,
    DayBlocks,
    Exercise,
    FlatBlocks,
    WeekPlanEntry,
    WorkflowState,
)

__all__ = [
    "ArtifactType",
    "Block",
    "DayBlocks",
    "Exercise",
    "FlatBlocks",
    "WeekPlanEntry",
    "WorkflowState",
]
