"""
Pydantic models for the builder wizard API.

Requests drive one WorkflowController per session; every response carries
the session snapshot plus the notices the request produced.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from application.wizard import Notice, WorkflowController
from domain.models import (
    ArtifactCollection,
    ArtifactMetadata,
    ArtifactType,
    Block,
    BlockContainer,
    SaveAction,
    WeekPlanEntry,
    Weekday,
)


# =============================================================================
# Requests
# =============================================================================


class CreateSessionRequest(BaseModel):
    """Open a new wizard, or an existing artifact when ``edit_id`` is set."""
    artifact_type: ArtifactType = ArtifactType.SINGLE
    edit_id: Optional[str] = None
    collection: Optional[ArtifactCollection] = Field(
        default=None,
        description="Collection of edit_id when known; both are searched otherwise",
    )


class ArtifactTypeRequest(BaseModel):
    artifact_type: ArtifactType


class TemplateRequest(BaseModel):
    template_id: str = Field(..., min_length=1, description="Starter template id or 'scratch'")


class MetadataUpdateRequest(BaseModel):
    """Partial update; only fields present in the request change."""
    name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    is_template: Optional[bool] = None


class BlocksUpdateRequest(BaseModel):
    blocks: List[Block]
    day: Optional[Weekday] = Field(
        default=None,
        description="Weekly plans only; defaults to the currently selected day",
    )


class CopyDayRequest(BaseModel):
    from_day: Weekday
    to_day: Weekday


class WeekUpdateRequest(BaseModel):
    """Partial week update; ``is_rest_week`` is applied after ``workout_id``."""
    workout_id: Optional[str] = None
    is_rest_week: Optional[bool] = None


class AthletesRequest(BaseModel):
    athlete_ids: List[str] = []


class JumpRequest(BaseModel):
    index: int = Field(..., ge=0)


class SaveRequest(BaseModel):
    action: SaveAction = SaveAction.SAVE


# =============================================================================
# Responses
# =============================================================================


class NoticeResponse(BaseModel):
    level: str
    title: str
    message: str = ""

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeResponse":
        return cls(level=notice.level.value, title=notice.title, message=notice.message)


class StepResponse(BaseModel):
    index: int
    id: str
    title: str
    short_title: str
    description: str = ""
    completed: bool = False
    accessible: bool = False


class SessionResponse(BaseModel):
    """Snapshot of one wizard session."""
    session_id: str
    artifact_type: ArtifactType
    role: Optional[str] = None
    steps: List[StepResponse]
    current_step_index: int
    current_errors: List[str] = []
    template_choice: Optional[str] = None
    metadata: ArtifactMetadata
    block_state: BlockContainer
    week_plan: List[WeekPlanEntry] = []
    selected_athlete_ids: List[str] = []
    is_editing: bool = False
    edit_target_id: Optional[str] = None
    edit_collection: Optional[ArtifactCollection] = None
    completed: bool = False
    notices: List[NoticeResponse] = []

    @classmethod
    def from_controller(
        cls,
        session_id: str,
        controller: WorkflowController,
        notices: Optional[List[Notice]] = None,
    ) -> "SessionResponse":
        state = controller.state
        steps = [
            StepResponse(
                index=index,
                id=step.id.value,
                title=step.title,
                short_title=step.short_title,
                description=step.description,
                completed=index in state.completed_step_indices,
                accessible=controller.is_step_accessible(index),
            )
            for index, step in enumerate(controller.steps)
        ]
        return cls(
            session_id=session_id,
            artifact_type=state.artifact_type,
            role=controller.role,
            steps=steps,
            current_step_index=state.current_step_index,
            current_errors=controller.current_errors(),
            template_choice=state.template_choice,
            metadata=state.metadata,
            block_state=state.block_state,
            week_plan=sorted(state.week_plan, key=lambda w: w.week_number),
            selected_athlete_ids=sorted(state.selected_athlete_ids),
            is_editing=state.is_editing,
            edit_target_id=state.edit_target_id,
            edit_collection=state.edit_collection,
            completed=controller.completed,
            notices=[NoticeResponse.from_notice(n) for n in notices or []],
        )


class ActionResponse(BaseModel):
    """Result of a step action (navigation, copy, week edit, ...)."""
    ok: bool
    session: SessionResponse


class NavigationResponse(BaseModel):
    advanced: bool
    session: SessionResponse


class SaveResponse(BaseModel):
    success: bool
    artifact_id: Optional[str] = None
    collection: Optional[ArtifactCollection] = None
    is_update: bool = False
    is_draft: bool = False
    error: Optional[str] = None
    warnings: List[str] = []
    session: SessionResponse


class WeeklyTemplatesResponse(BaseModel):
    templates: List[Dict[str, Any]]
    count: int
