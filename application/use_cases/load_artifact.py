"""
LoadArtifact Use Case.

Rebuilds wizard state from a stored artifact so it can be edited.

The id's collection is resolved explicitly: when the caller knows it, only
that collection is queried; otherwise the workouts collection is probed
first and the training-plans collection second. Repositories report a
missing row as None and raise on every other failure, so "not found" can
never be confused with an outage.
"""

import logging
from typing import Optional

from application.exceptions import ArtifactLoadError, ArtifactNotFoundError
from application.ports import AssignmentRepository, MonthlyPlanRepository, WorkoutRepository
from domain.converters import training_plan_row_to_state, workout_row_to_state
from domain.models import ArtifactCollection, WorkflowState

logger = logging.getLogger(__name__)


class LoadArtifactUseCase:
    """
    Use case for opening an existing artifact in the wizard.

    Usage:
        >>> use_case = LoadArtifactUseCase(workout_repo, plan_repo, assignment_repo)
        >>> state = use_case.execute("3f1c...")
        >>> state.is_editing
        True
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        plan_repo: MonthlyPlanRepository,
        assignment_repo: AssignmentRepository,
    ) -> None:
        self._workout_repo = workout_repo
        self._plan_repo = plan_repo
        self._assignment_repo = assignment_repo

    def execute(
        self,
        artifact_id: str,
        collection: Optional[ArtifactCollection] = None,
    ) -> WorkflowState:
        """
        Load an artifact into a fresh WorkflowState.

        Args:
            artifact_id: Id of a workout or training plan
            collection: Collection the id belongs to, when known

        Returns:
            Populated WorkflowState in edit mode

        Raises:
            ArtifactNotFoundError: no row with this id in the searched collections
            ArtifactLoadError: lookup failed or the stored row is unreadable
        """
        try:
            state = self._lookup(artifact_id, collection)
        except ArtifactLoadError:
            raise
        except Exception as e:
            logger.exception(f"Failed to load artifact {artifact_id}: {e}")
            raise ArtifactLoadError(f"Could not load artifact {artifact_id}: {e}", artifact_id) from e

        if state is None:
            raise ArtifactNotFoundError(f"Artifact {artifact_id} not found", artifact_id)

        if not state.metadata.is_template:
            self._load_assignments(state)

        logger.info(
            f"Loaded {state.artifact_type.value} artifact {artifact_id} for editing "
            f"({len(state.selected_athlete_ids)} assigned athlete(s))"
        )
        return state

    def _lookup(
        self,
        artifact_id: str,
        collection: Optional[ArtifactCollection],
    ) -> Optional[WorkflowState]:
        if collection in (None, ArtifactCollection.WORKOUTS):
            row = self._workout_repo.get_by_id(artifact_id)
            if row is not None:
                return workout_row_to_state(row)

        if collection in (None, ArtifactCollection.TRAINING_PLANS):
            row = self._plan_repo.get_by_id(artifact_id)
            if row is not None:
                return training_plan_row_to_state(row)

        return None

    def _load_assignments(self, state: WorkflowState) -> None:
        artifact_id = state.edit_target_id
        try:
            if state.edit_collection is ArtifactCollection.TRAINING_PLANS:
                athlete_ids = self._assignment_repo.get_athlete_ids_for_monthly_plan(artifact_id)
            else:
                athlete_ids = self._assignment_repo.get_athlete_ids_for_workout(artifact_id)
        except Exception as e:
            logger.warning(f"Error loading athlete assignments for {artifact_id}: {e}")
            return
        state.selected_athlete_ids = set(athlete_ids)
