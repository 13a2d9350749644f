"""
Supabase implementation of AssignmentRepository.

Every assignment is written to ``unified_workout_assignments`` (the feed
athletes train from). Monthly plans are additionally recorded in
``monthly_plan_assignments``. Athletes who already hold an assignment for
the same artifact are skipped, so re-saving an edited artifact does not
duplicate rows.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from supabase import Client

logger = logging.getLogger(__name__)

UNIFIED_ASSIGNMENTS_TABLE = "unified_workout_assignments"
MONTHLY_PLAN_ASSIGNMENTS_TABLE = "monthly_plan_assignments"


def _initial_progress(total_items: int) -> Dict[str, Any]:
    return {
        "current_exercise_index": 0,
        "current_set": 1,
        "current_rep": 1,
        "completed_exercises": [],
        "total_exercises": total_items,
        "completion_percentage": 0,
    }


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(v for v in values if v))


class SupabaseAssignmentRepository:
    """Supabase implementation of AssignmentRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def _unified_rows(
        self,
        athlete_ids: List[str],
        *,
        assignment_type: str,
        start_date: str,
        end_date: Optional[str],
        exercise_block: Optional[Dict[str, Any]],
        total_items: int,
        assigned_by: Optional[str],
        meta: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        assigned_at = datetime.now(timezone.utc).isoformat()
        return [
            {
                "athlete_id": athlete_id,
                "assignment_type": assignment_type,
                "exercise_block": exercise_block or {},
                "progress": _initial_progress(total_items),
                "start_date": start_date,
                "end_date": end_date,
                "assigned_at": assigned_at,
                "assigned_by": assigned_by,
                "status": "assigned",
                "meta": meta,
            }
            for athlete_id in athlete_ids
        ]

    def assign_workout(
        self,
        workout_id: str,
        athlete_ids: List[str],
        *,
        assignment_type: str,
        start_date: str,
        end_date: str,
        exercise_block: Optional[Dict[str, Any]] = None,
        total_items: int = 0,
        assigned_by: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Assign a single or weekly workout to athletes not yet assigned to it."""
        existing = set(self.get_athlete_ids_for_workout(workout_id))
        new_ids = [a for a in _unique(athlete_ids) if a not in existing]
        if not new_ids:
            logger.info(f"Workout {workout_id} already assigned to all selected athletes")
            return []

        rows = self._unified_rows(
            new_ids,
            assignment_type=assignment_type,
            start_date=start_date,
            end_date=end_date,
            exercise_block=exercise_block,
            total_items=total_items,
            assigned_by=assigned_by,
            meta={"original_workout_id": workout_id, "workout_type": assignment_type},
        )
        result = self._client.table(UNIFIED_ASSIGNMENTS_TABLE).insert(rows).execute()
        logger.info(f"Workout {workout_id} assigned to {len(new_ids)} athlete(s)")
        return result.data if result.data else []

    def assign_monthly_plan(
        self,
        plan_id: str,
        athlete_ids: List[str],
        start_date: str,
        *,
        end_date: Optional[str] = None,
        exercise_block: Optional[Dict[str, Any]] = None,
        total_items: int = 0,
        assigned_by: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Assign a monthly plan to athletes not yet assigned to it."""
        existing = set(self.get_athlete_ids_for_monthly_plan(plan_id))
        new_ids = [a for a in _unique(athlete_ids) if a not in existing]
        if not new_ids:
            logger.info(f"Monthly plan {plan_id} already assigned to all selected athletes")
            return []

        plan_rows = [
            {
                "plan_id": plan_id,
                "athlete_id": athlete_id,
                "start_date": start_date,
                "end_date": end_date,
                "assigned_by": assigned_by,
                "status": "active",
            }
            for athlete_id in new_ids
        ]
        result = self._client.table(MONTHLY_PLAN_ASSIGNMENTS_TABLE).insert(plan_rows).execute()

        unified = self._unified_rows(
            new_ids,
            assignment_type="monthly",
            start_date=start_date,
            end_date=end_date,
            exercise_block=exercise_block,
            total_items=total_items,
            assigned_by=assigned_by,
            meta={"original_plan_id": plan_id, "plan_type": "monthly"},
        )
        self._client.table(UNIFIED_ASSIGNMENTS_TABLE).insert(unified).execute()

        logger.info(f"Monthly plan {plan_id} assigned to {len(new_ids)} athlete(s)")
        return result.data if result.data else []

    def get_athlete_ids_for_workout(self, workout_id: str) -> List[str]:
        result = self._client.table(UNIFIED_ASSIGNMENTS_TABLE) \
            .select("athlete_id") \
            .eq("meta->>original_workout_id", workout_id) \
            .execute()
        return _unique([row.get("athlete_id") for row in result.data or []])

    def get_athlete_ids_for_monthly_plan(self, plan_id: str) -> List[str]:
        result = self._client.table(MONTHLY_PLAN_ASSIGNMENTS_TABLE) \
            .select("athlete_id") \
            .eq("plan_id", plan_id) \
            .execute()
        return _unique([row.get("athlete_id") for row in result.data or []])
