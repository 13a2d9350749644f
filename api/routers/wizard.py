"""
Wizard router for the step-by-step workout builder.

Each wizard session wraps one WorkflowController held in the in-memory
session store. Endpoints mutate the session and return its snapshot along
with the notices the request produced.

This router contains endpoints for:
- /wizard/sessions - Open a wizard (new artifact, or an existing one for editing)
- /wizard/sessions/{session_id} - Get or cancel a session
- /wizard/sessions/{session_id}/artifact-type, /template - Template step
- /wizard/sessions/{session_id}/metadata, /athletes - Schedule and athletes
- /wizard/sessions/{session_id}/blocks, /days/... - Block editing
- /wizard/sessions/{session_id}/weeks/... - Monthly week plan
- /wizard/sessions/{session_id}/next, /previous, /jump - Navigation
- /wizard/sessions/{session_id}/save - Final save (or draft)
- /wizard/weekly-templates - Weekly workouts usable in monthly plans
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from api.deps import (
    CurrentUser,
    get_current_user,
    get_list_weekly_templates_use_case,
    get_load_artifact_use_case,
    get_save_artifact_use_case,
    get_session_store,
    get_settings,
)
from api.schemas.wizard import (
    ActionResponse,
    ArtifactTypeRequest,
    AthletesRequest,
    BlocksUpdateRequest,
    CopyDayRequest,
    CreateSessionRequest,
    JumpRequest,
    MetadataUpdateRequest,
    NavigationResponse,
    SaveRequest,
    SaveResponse,
    SessionResponse,
    TemplateRequest,
    WeekUpdateRequest,
    WeeklyTemplatesResponse,
)
from application.exceptions import (
    ArtifactLoadError,
    ArtifactNotFoundError,
    SaveInProgressError,
    SaveNotAllowedError,
)
from application.use_cases import (
    ListWeeklyTemplatesUseCase,
    LoadArtifactUseCase,
    SaveArtifactUseCase,
)
from application.wizard import Notice, WizardSession, WizardSessionStore, WorkflowController
from backend.settings import Settings
from domain.models import WorkflowState, Weekday, default_week_plan
from domain.services.week_plan_store import REST_WEEK_FIELD, WORKOUT_ID_FIELD

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/wizard",
    tags=["Wizard"],
)


# =============================================================================
# Helper Functions
# =============================================================================


def _get_session(
    session_id: str,
    user: CurrentUser,
    store: WizardSessionStore,
) -> WizardSession:
    session = store.get(session_id, user.user_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Wizard session not found or expired")
    return session


@contextmanager
def _collect_notices(controller: WorkflowController) -> Iterator[List[Notice]]:
    """Capture the notices a controller publishes while the block runs."""
    collected: List[Notice] = []
    unsubscribe = controller.notices.subscribe(collected.append)
    try:
        yield collected
    finally:
        unsubscribe()


def _snapshot(session: WizardSession, notices: List[Notice]) -> SessionResponse:
    return SessionResponse.from_controller(session.session_id, session.controller, notices)


def _action(session: WizardSession, notices: List[Notice], ok: bool) -> ActionResponse:
    return ActionResponse(ok=ok, session=_snapshot(session, notices))


# =============================================================================
# Sessions
# =============================================================================


@router.post("/sessions", response_model=SessionResponse, status_code=201)
def create_session(
    request: CreateSessionRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
    save_use_case: SaveArtifactUseCase = Depends(get_save_artifact_use_case),
    load_use_case: LoadArtifactUseCase = Depends(get_load_artifact_use_case),
):
    """
    Open a wizard session.

    With ``edit_id`` the artifact is loaded first; a failed load opens no
    session (404 when the id is unknown, 502 when the lookup itself failed).
    """
    options = dict(
        role=user.role,
        user_id=user.user_id,
        max_plan_weeks=settings.max_plan_weeks,
        default_plan_weeks=settings.default_plan_weeks,
    )

    if request.edit_id:
        try:
            state = load_use_case.execute(request.edit_id, request.collection)
        except ArtifactNotFoundError as e:
            raise HTTPException(status_code=404, detail=e.message)
        except ArtifactLoadError as e:
            raise HTTPException(status_code=502, detail="Could not load workout data for editing.") from e
        controller = WorkflowController.from_loaded_state(state, save_use_case, **options)
    else:
        state = WorkflowState(week_plan=default_week_plan(settings.default_plan_weeks))
        controller = WorkflowController(save_use_case, state=state, **options)
        controller.select_artifact_type(request.artifact_type)

    session = store.create(controller, user.user_id)
    return _snapshot(session, controller.notices.history)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    return _snapshot(session, session.controller.notices.history)


@router.delete("/sessions/{session_id}")
def cancel_session(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    """Close the wizard, discarding unsaved state."""
    if not store.remove(session_id, user.user_id):
        raise HTTPException(status_code=404, detail="Wizard session not found or expired")
    return {"success": True, "session_id": session_id}


# =============================================================================
# Template Step
# =============================================================================


@router.post("/sessions/{session_id}/artifact-type", response_model=ActionResponse)
def select_artifact_type(
    session_id: str,
    request: ArtifactTypeRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        ok = session.controller.select_artifact_type(request.artifact_type)
    return _action(session, notices, ok)


@router.post("/sessions/{session_id}/template", response_model=ActionResponse)
def select_template(
    session_id: str,
    request: TemplateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        ok = session.controller.select_template(request.template_id)
    return _action(session, notices, ok)


# =============================================================================
# Schedule and Athletes
# =============================================================================


@router.patch("/sessions/{session_id}/metadata", response_model=SessionResponse)
def update_metadata(
    session_id: str,
    request: MetadataUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    try:
        session.controller.update_metadata(**request.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    return _snapshot(session, [])


@router.put("/sessions/{session_id}/athletes", response_model=SessionResponse)
def set_athletes(
    session_id: str,
    request: AthletesRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    session.controller.set_athletes(request.athlete_ids)
    return _snapshot(session, [])


# =============================================================================
# Blocks and Days
# =============================================================================


@router.put("/sessions/{session_id}/blocks", response_model=SessionResponse)
def update_blocks(
    session_id: str,
    request: BlocksUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    """Replace the block list (or one day's blocks for weekly plans)."""
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        session.controller.update_blocks(request.blocks, request.day)
    return _snapshot(session, notices)


@router.post("/sessions/{session_id}/days/copy", response_model=ActionResponse)
def copy_day(
    session_id: str,
    request: CopyDayRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        copied = session.controller.copy_day(request.from_day, request.to_day)
    return _action(session, notices, copied > 0)


@router.post("/sessions/{session_id}/days/{day}/rest", response_model=ActionResponse)
def toggle_rest_day(
    session_id: str,
    day: Weekday,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        is_rest = session.controller.toggle_rest_day(day)
    return _action(session, notices, is_rest is not None)


@router.post("/sessions/{session_id}/days/{day}/select", response_model=ActionResponse)
def select_day(
    session_id: str,
    day: Weekday,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        ok = session.controller.select_day(day)
    return _action(session, notices, ok)


# =============================================================================
# Monthly Weeks
# =============================================================================


@router.patch("/sessions/{session_id}/weeks/{week_number}", response_model=ActionResponse)
def update_week(
    session_id: str,
    week_number: int,
    request: WeekUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    controller = session.controller
    ok = True
    with _collect_notices(controller) as notices:
        if request.workout_id is not None:
            ok = controller.update_week(week_number, WORKOUT_ID_FIELD, request.workout_id) is not None
        if ok and request.is_rest_week is not None:
            ok = controller.update_week(week_number, REST_WEEK_FIELD, request.is_rest_week) is not None
    return _action(session, notices, ok)


@router.post("/sessions/{session_id}/weeks", response_model=ActionResponse)
def add_week(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        week = session.controller.add_week()
    return _action(session, notices, week is not None)


@router.delete("/sessions/{session_id}/weeks/{week_number}", response_model=ActionResponse)
def remove_week(
    session_id: str,
    week_number: int,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        ok = session.controller.remove_week(week_number)
    return _action(session, notices, ok)


# =============================================================================
# Navigation
# =============================================================================


@router.post("/sessions/{session_id}/next", response_model=NavigationResponse)
def next_step(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    """Advance if the current step is complete; otherwise report what is missing."""
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        advanced = session.controller.next()
    return NavigationResponse(advanced=advanced, session=_snapshot(session, notices))


@router.post("/sessions/{session_id}/previous", response_model=NavigationResponse)
def previous_step(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    moved = session.controller.previous()
    return NavigationResponse(advanced=moved, session=_snapshot(session, []))


@router.post("/sessions/{session_id}/jump", response_model=NavigationResponse)
def jump_to_step(
    session_id: str,
    request: JumpRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, user, store)
    moved = session.controller.jump_to(request.index)
    return NavigationResponse(advanced=moved, session=_snapshot(session, []))


# =============================================================================
# Save
# =============================================================================


@router.post("/sessions/{session_id}/save", response_model=SaveResponse)
def save(
    session_id: str,
    request: SaveRequest,
    user: CurrentUser = Depends(get_current_user),
    store: WizardSessionStore = Depends(get_session_store),
    save_use_case: SaveArtifactUseCase = Depends(get_save_artifact_use_case),
):
    """
    Save the artifact (or a draft).

    A successful final save closes the session. A failed save keeps it open
    with its state intact and returns ``success: false``. Saving with an
    incomplete step, or while another save of the session is running, is
    a 409.
    """
    session = _get_session(session_id, user, store)
    with _collect_notices(session.controller) as notices:
        try:
            result = session.controller.save(request.action, save_use_case)
        except (SaveNotAllowedError, SaveInProgressError) as e:
            raise HTTPException(status_code=409, detail=str(e))

    response = SaveResponse(
        success=result.success,
        artifact_id=result.artifact_id,
        collection=result.collection,
        is_update=result.is_update,
        is_draft=result.is_draft,
        error=result.error,
        warnings=result.warnings,
        session=_snapshot(session, notices),
    )
    if result.success and not result.is_draft:
        store.remove(session_id, user.user_id)
        logger.info(f"Wizard session {session_id} closed after save")
    return response


# =============================================================================
# Weekly Templates
# =============================================================================


@router.get("/weekly-templates", response_model=WeeklyTemplatesResponse)
def list_weekly_templates(
    user: CurrentUser = Depends(get_current_user),
    use_case: ListWeeklyTemplatesUseCase = Depends(get_list_weekly_templates_use_case),
):
    """Weekly workouts the current user can place in a monthly plan."""
    result = use_case.execute(user.user_id)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error)
    return WeeklyTemplatesResponse(templates=result.templates, count=result.count)
