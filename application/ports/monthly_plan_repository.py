"""
Monthly Plan Repository Interface (Port).

Monthly plans live in the ``training_plans`` collection and reference
weekly workouts by id, one per week.
"""
from typing import Protocol, Optional, Dict, Any


class MonthlyPlanRepository(Protocol):
    """Abstract interface for the ``training_plans`` collection."""

    def create(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new monthly plan.

        Args:
            body: Payload with name, description, month, year, start_date
                  and ``weeks`` (week_number / workout_id / is_rest_week)

        Returns:
            Created row including its generated ``id``

        Raises:
            ArtifactSaveError: if the insert fails
        """
        ...

    def update(self, plan_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace an existing plan's content.

        Raises:
            ArtifactSaveError: if the update fails or no row matched
        """
        ...

    def get_by_id(self, plan_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a plan row by ID (with ``weeks_structure``).

        Returns:
            Row, or None if no plan has this id
        """
        ...
