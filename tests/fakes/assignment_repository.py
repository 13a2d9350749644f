"""
Fake Assignment Repository for testing.

Records assignment calls in memory so tests can assert on them.
"""
from typing import Optional, List, Dict, Any
import copy


class FakeAssignmentRepository:
    """In-memory fake implementation of AssignmentRepository."""

    def __init__(self):
        self.workout_assignments: List[Dict[str, Any]] = []
        self.plan_assignments: List[Dict[str, Any]] = []
        self.fail_assign = False
        self.fail_lookups = False

    def reset(self) -> None:
        self.workout_assignments = []
        self.plan_assignments = []
        self.fail_assign = False
        self.fail_lookups = False

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
        if self.fail_assign:
            raise ConnectionError("Simulated assignment failure")
        rows = [
            {
                "workout_id": workout_id,
                "athlete_id": athlete_id,
                "assignment_type": assignment_type,
                "start_date": start_date,
                "end_date": end_date,
                "exercise_block": copy.deepcopy(exercise_block),
                "total_items": total_items,
                "assigned_by": assigned_by,
            }
            for athlete_id in athlete_ids
        ]
        self.workout_assignments.extend(rows)
        return copy.deepcopy(rows)

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
        if self.fail_assign:
            raise ConnectionError("Simulated assignment failure")
        rows = [
            {
                "plan_id": plan_id,
                "athlete_id": athlete_id,
                "start_date": start_date,
                "end_date": end_date,
                "exercise_block": copy.deepcopy(exercise_block),
                "total_items": total_items,
                "assigned_by": assigned_by,
            }
            for athlete_id in athlete_ids
        ]
        self.plan_assignments.extend(rows)
        return copy.deepcopy(rows)

    def get_athlete_ids_for_workout(self, workout_id: str) -> List[str]:
        if self.fail_lookups:
            raise ConnectionError("Simulated lookup failure")
        return list(dict.fromkeys(
            a["athlete_id"] for a in self.workout_assignments if a["workout_id"] == workout_id
        ))

    def get_athlete_ids_for_monthly_plan(self, plan_id: str) -> List[str]:
        if self.fail_lookups:
            raise ConnectionError("Simulated lookup failure")
        return list(dict.fromkeys(
            a["athlete_id"] for a in self.plan_assignments if a["plan_id"] == plan_id
        ))
