"""
Persistence mapper: WorkflowState -> save payload.

Reduces the wizard's accumulated state into one of three payload shapes:

- single  -> ``workouts``: flat block list plus flattened exercises
- weekly  -> ``workouts``: seven-day block map, no flattened exercises
- monthly -> ``training_plans``: week list referencing weekly workouts

All functions are pure; deciding create vs update and issuing the calls is
the job of SaveArtifactUseCase.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models import (
    ArtifactCollection,
    ArtifactType,
    Block,
    DayBlocks,
    FlatBlocks,
    SaveAction,
    WorkflowState,
)

BLOCK_VERSION = 1
DEFAULT_SETS = "3"
DEFAULT_REPS = "10"
DEFAULT_REST_SECONDS = 60


class ArtifactPayload(BaseModel):
    """A body ready to be written to one collection."""

    collection: ArtifactCollection
    body: Dict[str, Any]


class AssignmentRequest(BaseModel):
    """Everything needed to assign a freshly saved artifact to athletes."""

    assignment_type: ArtifactType
    athlete_ids: List[str]
    start_date: str
    end_date: str
    exercise_block: Dict[str, Any] = Field(default_factory=dict)
    total_items: int = 0


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def describe_workout(artifact_type: ArtifactType, blocks: List[Block], *, draft: bool = False) -> str:
    """Auto-generated summary, e.g. 'Single workout with 1 block and 3 exercises'."""
    exercises = sum(block.exercise_count for block in blocks)
    prefix = "Draft " if draft else ""
    return (
        f"{prefix}{artifact_type.label} workout with "
        f"{_plural(len(blocks), 'block')} and {_plural(exercises, 'exercise')}"
    )


def describe_monthly_plan(state: WorkflowState) -> str:
    training_weeks = sum(1 for week in state.week_plan if not week.is_rest_week)
    return f"Monthly training plan with {training_weeks} training weeks"


def flatten_exercises(blocks: List[Block]) -> List[Dict[str, Any]]:
    """
    Flatten block exercises into the list stored alongside single workouts.

    Missing prescriptions fall back to 3 x 10 and the block's rest between
    sets (60 s when unset); category falls back to the block category.
    """
    flattened: List[Dict[str, Any]] = []
    for block in blocks:
        block_rest = block.rest_between_sets or DEFAULT_REST_SECONDS
        for ex in block.exercises:
            flattened.append({
                "id": ex.id,
                "name": ex.name,
                "category": ex.category or block.category.value,
                "description": ex.description or "",
                "sets": ex.sets or DEFAULT_SETS,
                "reps": ex.reps or DEFAULT_REPS,
                "weight": ex.weight or "",
                "distance": ex.distance or "",
                "rest": ex.rest or str(block_rest),
                "rpe": ex.rpe or "",
                "notes": ex.notes or "",
                "contacts": ex.contacts or "",
                "intensity": ex.intensity or "",
                "direction": ex.direction or "",
                "movement_notes": ex.movement_notes or "",
                "timed_duration": ex.timed_duration or 0,
            })
    return flattened


def _require_container(state: WorkflowState):
    container = state.block_state
    if state.artifact_type is ArtifactType.WEEKLY and not isinstance(container, DayBlocks):
        raise ValueError("Weekly workouts must hold a day-keyed block map")
    if state.artifact_type is ArtifactType.SINGLE and not isinstance(container, FlatBlocks):
        raise ValueError("Single workouts must hold a flat block list")
    return container


def _build_workout_body(state: WorkflowState, action: SaveAction) -> Dict[str, Any]:
    container = _require_container(state)
    meta = state.metadata
    artifact_type = state.artifact_type
    is_template = meta.is_template or action is SaveAction.SAVE_TEMPLATE
    blocks = container.all_blocks()

    def scheduled(value: Optional[str]) -> Optional[str]:
        # Templates are not tied to a date or place
        return None if is_template else value

    body: Dict[str, Any] = {
        "name": meta.name.strip(),
        "type": artifact_type.value,
        "template_type": artifact_type.value,
        "date": scheduled(meta.date),
        "time": scheduled(meta.time),
        "duration": scheduled(meta.duration),
        "location": scheduled(meta.location),
        "is_template": is_template,
        "is_block_based": True,
        "block_version": BLOCK_VERSION,
        "blocks": container.to_row(),
        "description": describe_workout(
            artifact_type, blocks, draft=action is SaveAction.SAVE_DRAFT
        ),
        "exercises": [],
    }

    if isinstance(container, FlatBlocks):
        body["exercises"] = flatten_exercises(blocks)
    else:
        body["rest_days"] = container.rest_days_row()
    return body


def _build_monthly_body(state: WorkflowState, today: date) -> Dict[str, Any]:
    meta = state.metadata
    plan_date = meta.schedule_date() or today
    weeks = sorted(state.week_plan, key=lambda w: w.week_number)
    return {
        "name": meta.name.strip(),
        "description": describe_monthly_plan(state),
        "month": plan_date.month,
        "year": plan_date.year,
        "start_date": meta.date,
        "weeks": [
            {
                "week_number": week.week_number,
                "workout_id": week.effective_workout_id,
                "is_rest_week": week.is_rest_week,
            }
            for week in weeks
        ],
    }


def build_payload(
    state: WorkflowState,
    action: SaveAction = SaveAction.SAVE,
    today: Optional[date] = None,
) -> ArtifactPayload:
    """
    Build the save payload for the artifact in ``state``.

    Args:
        state: Wizard state to persist
        action: Save action; SAVE_TEMPLATE forces ``is_template``
        today: Reference date for monthly plans without a chosen date

    Returns:
        ArtifactPayload naming the target collection and body

    Raises:
        ValueError: if the block container does not match the artifact type,
            or a monthly plan is saved as a draft
    """
    if state.artifact_type is ArtifactType.MONTHLY:
        if action is SaveAction.SAVE_DRAFT:
            raise ValueError("Monthly plans cannot be saved as drafts")
        return ArtifactPayload(
            collection=ArtifactCollection.TRAINING_PLANS,
            body=_build_monthly_body(state, today or date.today()),
        )

    return ArtifactPayload(
        collection=ArtifactCollection.WORKOUTS,
        body=_build_workout_body(state, action),
    )


def template_workout_ids(state: WorkflowState) -> List[str]:
    """Weekly workouts a monthly plan references (to be flagged as templates)."""
    if state.artifact_type is not ArtifactType.MONTHLY:
        return []
    ids: List[str] = []
    for week in sorted(state.week_plan, key=lambda w: w.week_number):
        workout_id = week.effective_workout_id
        if workout_id and workout_id not in ids:
            ids.append(workout_id)
    return ids


def build_assignment_request(
    state: WorkflowState,
    payload: ArtifactPayload,
    today: Optional[date] = None,
) -> Optional[AssignmentRequest]:
    """
    Describe the athlete assignment for a saved artifact.

    The assignment window starts on the scheduled date (today when unset)
    and lasts one day for single workouts, a week for weekly plans and
    one week per plan week for monthly plans.

    Returns:
        AssignmentRequest, or None when no athletes are selected
    """
    if not state.selected_athlete_ids:
        return None

    start = state.metadata.schedule_date() or today or date.today()
    body = payload.body
    artifact_type = state.artifact_type

    if artifact_type is ArtifactType.MONTHLY:
        end = start + timedelta(weeks=len(state.week_plan))
        exercise_block = {
            "plan_name": body["name"],
            "description": body["description"],
            "duration_weeks": len(state.week_plan),
            "weekly_structure": body["weeks"],
        }
        total_items = sum(1 for week in state.week_plan if not week.is_rest_week)
    elif artifact_type is ArtifactType.WEEKLY:
        end = start + timedelta(days=7)
        exercise_block = {
            "plan_name": body["name"],
            "description": body["description"],
            "daily_workouts": body["blocks"],
        }
        total_items = state.total_exercises
    else:
        end = start
        blocks = state.all_blocks()
        exercise_block = {
            "workout_name": body["name"],
            "description": body["description"],
            "estimated_duration": body["duration"],
            "location": body["location"],
            "workout_type": blocks[0].category.value if blocks else "strength",
            "exercises": body["exercises"],
        }
        total_items = len(body["exercises"])

    return AssignmentRequest(
        assignment_type=artifact_type,
        athlete_ids=sorted(state.selected_athlete_ids),
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        exercise_block=exercise_block,
        total_items=total_items,
    )
