"""
Wizard step descriptors and the in-progress workflow state.

WorkflowState is the single source of truth a WorkflowController mutates.
It is created fresh when the wizard opens (or rebuilt from a stored artifact
in edit mode) and discarded when the wizard closes.
"""

from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from domain.models.artifact import ArtifactCollection, ArtifactMetadata, ArtifactType
from domain.models.block import Block
from domain.models.block_container import BlockContainer, DayBlocks, FlatBlocks
from domain.models.week_plan import WeekPlanEntry

DEFAULT_PLAN_WEEKS = 4
MAX_PLAN_WEEKS = 6


class StepId(str, Enum):
    """Identity of a wizard step, independent of its position."""

    TEMPLATE = "template"
    BLOCKS = "blocks"
    EXERCISES = "exercises"
    SCHEDULE = "schedule"
    WEEKLY_BUILDER = "weekly_builder"
    NAME_SCHEDULE = "name_schedule"
    ATHLETES = "athletes"


class StepDescriptor(BaseModel):
    """A step as shown in the step indicator."""

    id: StepId
    title: str
    short_title: str
    description: str = ""

    model_config = {"frozen": True}


def default_week_plan(weeks: int = DEFAULT_PLAN_WEEKS) -> List[WeekPlanEntry]:
    return [WeekPlanEntry(week_number=n) for n in range(1, weeks + 1)]


def empty_container(artifact_type: ArtifactType) -> BlockContainer:
    """Fresh block container matching the artifact type."""
    if artifact_type is ArtifactType.WEEKLY:
        return DayBlocks()
    return FlatBlocks()


class WorkflowState(BaseModel):
    """Everything the wizard has accumulated so far."""

    artifact_type: ArtifactType = ArtifactType.SINGLE
    current_step_index: int = Field(default=0, ge=0)
    completed_step_indices: Set[int] = Field(default_factory=set)

    metadata: ArtifactMetadata = Field(default_factory=ArtifactMetadata)
    template_choice: Optional[str] = Field(
        default=None, description="Starter template id, or 'scratch'"
    )

    block_state: BlockContainer = Field(default_factory=FlatBlocks)
    week_plan: List[WeekPlanEntry] = Field(default_factory=default_week_plan)
    selected_athlete_ids: Set[str] = Field(default_factory=set)

    # Edit mode
    edit_target_id: Optional[str] = None
    edit_collection: Optional[ArtifactCollection] = None

    @property
    def is_editing(self) -> bool:
        return self.edit_target_id is not None

    def all_blocks(self) -> List[Block]:
        """Every block of the active container, in day order for weekly plans."""
        return self.block_state.all_blocks()

    @property
    def total_exercises(self) -> int:
        return sum(block.exercise_count for block in self.all_blocks())

    def reset_for(self, artifact_type: ArtifactType, plan_weeks: int = DEFAULT_PLAN_WEEKS) -> None:
        """Switch artifact type, discarding type-specific content."""
        self.artifact_type = artifact_type
        self.template_choice = None
        self.block_state = empty_container(artifact_type)
        self.week_plan = default_week_plan(plan_weeks)
        self.completed_step_indices = set()
