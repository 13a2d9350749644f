"""
Supabase implementation of MonthlyPlanRepository.

Plans are stored in ``training_plans``. The wizard's ``weeks`` list is kept
in the ``weeks_structure`` column as one nullable workout id per week,
where null marks a rest week.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from supabase import Client

from application.exceptions import ArtifactSaveError
from domain.converters import entries_to_weeks_structure

logger = logging.getLogger(__name__)

TRAINING_PLANS_TABLE = "training_plans"


class SupabaseMonthlyPlanRepository:
    """Supabase implementation of MonthlyPlanRepository protocol."""

    def __init__(self, client: Client, owner_id: Optional[str] = None):
        self._client = client
        self._owner_id = owner_id

    @staticmethod
    def _to_row(body: Dict[str, Any]) -> Dict[str, Any]:
        row = {key: value for key, value in body.items() if key != "weeks"}
        row["weeks_structure"] = entries_to_weeks_structure(body.get("weeks") or [])
        return row

    def create(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new monthly plan."""
        row = self._to_row(body)
        if self._owner_id:
            row["created_by"] = self._owner_id
        try:
            result = self._client.table(TRAINING_PLANS_TABLE).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to create monthly plan: {e}")
            raise ArtifactSaveError(f"Failed to create monthly plan: {e}") from e

        if not result.data:
            raise ArtifactSaveError("Failed to create monthly plan: no row returned")
        logger.info(f"Monthly plan created: {result.data[0].get('id')}")
        return result.data[0]

    def update(self, plan_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Replace an existing plan's content."""
        row = self._to_row(body)
        row["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self._client.table(TRAINING_PLANS_TABLE).update(row).eq("id", plan_id).execute()
        except Exception as e:
            logger.error(f"Failed to update monthly plan {plan_id}: {e}")
            raise ArtifactSaveError(f"Failed to update monthly plan {plan_id}: {e}") from e

        if not result.data:
            raise ArtifactSaveError(f"Monthly plan {plan_id} not found")
        logger.info(f"Monthly plan updated: {plan_id}")
        return result.data[0]

    def get_by_id(self, plan_id: str) -> Optional[Dict[str, Any]]:
        """Get a plan by ID; None when no row matches."""
        result = self._client.table(TRAINING_PLANS_TABLE).select("*").eq("id", plan_id).limit(1).execute()
        return result.data[0] if result.data else None
