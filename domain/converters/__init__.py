"""
Domain converters between wizard state and stored artifacts.

- build_payload: WorkflowState -> save payload (single / weekly / monthly)
- workout_row_to_state: workouts row -> WorkflowState
- training_plan_row_to_state: training_plans row -> WorkflowState

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import build_payload, workout_row_to_state
    >>> payload = build_payload(state)
    >>> payload.collection
    <ArtifactCollection.WORKOUTS: 'workouts'>
    >>> state = workout_row_to_state({"id": "w-1", **payload.body})
"""

from domain.converters.db_converters import (
    entries_to_weeks_structure,
    training_plan_row_to_state,
    weeks_structure_to_entries,
    workout_row_to_state,
)
from domain.converters.payload_mapper import (
    ArtifactPayload,
    AssignmentRequest,
    build_assignment_request,
    build_payload,
    describe_workout,
    flatten_exercises,
    template_workout_ids,
)

__all__ = [
    "ArtifactPayload",
    "AssignmentRequest",
    "build_payload",
    "build_assignment_request",
    "describe_workout",
    "flatten_exercises",
    "template_workout_ids",
    "workout_row_to_state",
    "training_plan_row_to_state",
    "weeks_structure_to_entries",
    "entries_to_weeks_structure",
]
