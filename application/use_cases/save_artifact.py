"""
SaveArtifact Use Case.

Persists the wizard's accumulated state as a single workout, weekly plan or
monthly plan, then runs the best-effort follow-ups:

1. Build the payload for the artifact type
2. Create or update, decided by the edit-target id
3. Monthly plans: flag referenced weekly workouts as templates
4. Assign to the selected athletes

Steps 3 and 4 never undo step 2; their failures come back as warnings on a
successful result.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from application.exceptions import ArtifactSaveError
from application.ports import AssignmentRepository, MonthlyPlanRepository, WorkoutRepository
from domain.converters import (
    ArtifactPayload,
    build_assignment_request,
    build_payload,
    template_workout_ids,
)
from domain.models import ArtifactCollection, ArtifactType, SaveAction, WorkflowState

logger = logging.getLogger(__name__)


@dataclass
class SaveArtifactResult:
    """Result of the SaveArtifact use case execution."""

    success: bool
    artifact_id: Optional[str] = None
    collection: Optional[ArtifactCollection] = None
    is_update: bool = False
    is_draft: bool = False
    assigned_athlete_count: int = 0
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class SaveArtifactUseCase:
    """
    Use case for saving wizard state.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = SaveArtifactUseCase(
        ...     workout_repo=workout_repo,
        ...     plan_repo=plan_repo,
        ...     assignment_repo=assignment_repo,
        ... )
        >>> result = use_case.execute(state, assigned_by="coach-1")
        >>> if result.success:
        ...     print(f"Saved {result.collection.value}: {result.artifact_id}")
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
        state: WorkflowState,
        *,
        action: SaveAction = SaveAction.SAVE,
        assigned_by: Optional[str] = None,
        today: Optional[date] = None,
    ) -> SaveArtifactResult:
        """
        Execute the save workflow.

        Args:
            state: Wizard state to persist (not modified). It is read again
                after the primary write, so pass a copy when other requests
                may edit the session meanwhile
            action: Plain save, save as template, or save as draft
            assigned_by: User id recorded on athlete assignments
            today: Reference date for defaults (tests pin it)

        Returns:
            SaveArtifactResult with success status, saved id and warnings
        """
        try:
            payload = build_payload(state, action, today)
        except ValueError as e:
            logger.warning(f"Cannot build save payload: {e}")
            return SaveArtifactResult(success=False, error=str(e))

        is_draft = action is SaveAction.SAVE_DRAFT
        is_update = state.is_editing and not is_draft

        if is_update and state.edit_collection and state.edit_collection is not payload.collection:
            return SaveArtifactResult(
                success=False,
                collection=payload.collection,
                is_update=True,
                error=(
                    f"Cannot change an existing {state.edit_collection.value} entry "
                    f"into a {state.artifact_type.value} artifact"
                ),
            )

        operation = "draft" if is_draft else ("update" if is_update else "create")
        logger.info(
            f"Saving {state.artifact_type.value} artifact ({operation}) "
            f"to {payload.collection.value}: {payload.body.get('name')!r}"
        )

        try:
            saved = self._persist(payload, state, is_update=is_update, is_draft=is_draft)
        except Exception as e:
            logger.exception(f"SaveArtifact failed: {e}")
            return SaveArtifactResult(
                success=False,
                collection=payload.collection,
                is_update=is_update,
                is_draft=is_draft,
                error=str(e) or "Failed to save",
            )

        artifact_id = saved.get("id") or state.edit_target_id
        result = SaveArtifactResult(
            success=True,
            artifact_id=artifact_id,
            collection=payload.collection,
            is_update=is_update,
            is_draft=is_draft,
        )
        logger.info(f"Artifact saved successfully: {artifact_id}")

        if is_draft:
            return result

        if payload.collection is ArtifactCollection.TRAINING_PLANS:
            result.warnings.extend(self._flag_weekly_templates(state))

        self._assign_athletes(state, payload, artifact_id, result, assigned_by, today)
        return result

    def _persist(
        self,
        payload: ArtifactPayload,
        state: WorkflowState,
        *,
        is_update: bool,
        is_draft: bool,
    ) -> Dict[str, Any]:
        body = payload.body
        if is_draft:
            saved = self._workout_repo.save_draft(body)
        elif payload.collection is ArtifactCollection.TRAINING_PLANS:
            if is_update:
                saved = self._plan_repo.update(state.edit_target_id, body)
            else:
                saved = self._plan_repo.create(body)
        elif is_update:
            saved = self._workout_repo.update(state.edit_target_id, body)
        else:
            saved = self._workout_repo.create(body)

        if not saved:
            raise ArtifactSaveError("Backing store returned no row")
        return saved

    def _flag_weekly_templates(self, state: WorkflowState) -> List[str]:
        """Mark referenced weekly workouts as templates; best effort."""
        warnings: List[str] = []
        workout_ids = template_workout_ids(state)
        for workout_id in workout_ids:
            try:
                self._workout_repo.mark_as_template(workout_id, True)
            except Exception as e:
                logger.warning(f"Failed to mark weekly workout {workout_id} as template: {e}")
                warnings.append(f"Could not mark weekly workout {workout_id} as a template")

        if workout_ids and not warnings:
            logger.info(f"Marked {len(workout_ids)} weekly workouts as templates")
        return warnings

    def _assign_athletes(
        self,
        state: WorkflowState,
        payload: ArtifactPayload,
        artifact_id: str,
        result: SaveArtifactResult,
        assigned_by: Optional[str],
        today: Optional[date],
    ) -> None:
        request = build_assignment_request(state, payload, today)
        if request is None:
            return

        try:
            if request.assignment_type is ArtifactType.MONTHLY:
                self._assignment_repo.assign_monthly_plan(
                    artifact_id,
                    request.athlete_ids,
                    request.start_date,
                    end_date=request.end_date,
                    exercise_block=request.exercise_block,
                    total_items=request.total_items,
                    assigned_by=assigned_by,
                )
            else:
                self._assignment_repo.assign_workout(
                    artifact_id,
                    request.athlete_ids,
                    assignment_type=request.assignment_type.value,
                    start_date=request.start_date,
                    end_date=request.end_date,
                    exercise_block=request.exercise_block,
                    total_items=request.total_items,
                    assigned_by=assigned_by,
                )
        except Exception as e:
            logger.warning(f"Assignment of {artifact_id} to {len(request.athlete_ids)} athlete(s) failed: {e}")
            result.warnings.append(f"Saved, but assigning athletes failed: {e}")
            return

        result.assigned_athlete_count = len(request.athlete_ids)
