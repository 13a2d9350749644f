"""
Assignment Repository Interface (Port).

Assigning an artifact to athletes is a secondary operation: it runs after
the artifact itself has been saved, and its failure never undoes that save.
"""
from typing import Protocol, Optional, List, Dict, Any


class AssignmentRepository(Protocol):
    """Abstract interface for athlete assignments."""

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
        """
        Assign a single or weekly workout to athletes.

        Returns:
            Created assignment rows

        Raises:
            Exception: any store failure; callers treat it as a warning
        """
        ...

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
        """Assign a monthly plan to athletes starting on ``start_date``."""
        ...

    def get_athlete_ids_for_workout(self, workout_id: str) -> List[str]:
        """Athletes a workout is currently assigned to."""
        ...

    def get_athlete_ids_for_monthly_plan(self, plan_id: str) -> List[str]:
        """Athletes a monthly plan is currently assigned to."""
        ...
