"""
Supabase implementation of WorkoutRepository.

Single and weekly workouts (including drafts and weekly templates) live in
the ``workouts`` table. Writes raise ArtifactSaveError on failure; lookups
return None only when no row matches and let every other error propagate.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from supabase import Client

from application.exceptions import ArtifactSaveError

logger = logging.getLogger(__name__)

WORKOUTS_TABLE = "workouts"


def _log_write_failure(action: str, error: Exception) -> None:
    error_msg = str(error)
    logger.error(f"Failed to {action}: {error}")
    if "PGRST" in error_msg or "permission" in error_msg.lower() or "row-level security" in error_msg.lower():
        logger.error("RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY instead of SUPABASE_ANON_KEY for backend API")


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    The client is injected via constructor for testability; ``owner_id`` is
    stamped on every row this repository inserts.
    """

    def __init__(self, client: Client, owner_id: Optional[str] = None):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            owner_id: User recorded as ``user_id`` on inserted rows
        """
        self._client = client
        self._owner_id = owner_id

    def _insert(self, data: Dict[str, Any], action: str) -> Dict[str, Any]:
        if self._owner_id:
            data = {**data, "user_id": self._owner_id}
        try:
            result = self._client.table(WORKOUTS_TABLE).insert(data).execute()
        except Exception as e:
            _log_write_failure(action, e)
            raise ArtifactSaveError(f"Failed to {action}: {e}") from e

        if not result.data:
            raise ArtifactSaveError(f"Failed to {action}: no row returned")
        return result.data[0]

    def create(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new workout."""
        row = self._insert(dict(body), "create workout")
        logger.info(f"Workout created: {row.get('id')} ({body.get('template_type')})")
        return row

    def save_draft(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a workout flagged as a draft."""
        row = self._insert({**body, "is_draft": True}, "save draft")
        logger.info(f"Draft saved: {row.get('id')}")
        return row

    def update(self, workout_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Replace an existing workout's content."""
        data = {**body, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            result = self._client.table(WORKOUTS_TABLE).update(data).eq("id", workout_id).execute()
        except Exception as e:
            _log_write_failure(f"update workout {workout_id}", e)
            raise ArtifactSaveError(f"Failed to update workout {workout_id}: {e}") from e

        if not result.data:
            raise ArtifactSaveError(f"Workout {workout_id} not found")
        logger.info(f"Workout updated: {workout_id}")
        return result.data[0]

    def get_by_id(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """Get a workout by ID; None when no row matches."""
        result = self._client.table(WORKOUTS_TABLE).select("*").eq("id", workout_id).limit(1).execute()
        return result.data[0] if result.data else None

    def get_all(self, owner_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """List workouts, newest first."""
        query = self._client.table(WORKOUTS_TABLE).select("*")
        if owner_id:
            query = query.eq("user_id", owner_id)
        result = query.order("created_at", desc=True).execute()
        return result.data if result.data else []

    def list_templates(
        self,
        owner_id: str,
        template_type: str = "weekly",
    ) -> List[Dict[str, Any]]:
        """
        List an owner's reusable workouts of one type.

        Flagged templates qualify, and so do workouts whose name mentions
        the type (e.g. "Base Weekly").
        """
        result = self._client.table(WORKOUTS_TABLE) \
            .select("*") \
            .eq("user_id", owner_id) \
            .eq("template_type", template_type) \
            .order("created_at", desc=True) \
            .execute()

        rows = result.data if result.data else []
        templates = [
            row for row in rows
            if row.get("is_template") or template_type in (row.get("name") or "").lower()
        ]
        logger.info(f"Found {len(templates)} {template_type} template(s) for {owner_id}")
        return templates

    def mark_as_template(self, workout_id: str, is_template: bool = True) -> None:
        """Set or clear the template flag of a workout."""
        try:
            self._client.table(WORKOUTS_TABLE).update({"is_template": is_template}).eq("id", workout_id).execute()
        except Exception as e:
            _log_write_failure(f"mark workout {workout_id} as template", e)
            raise ArtifactSaveError(f"Failed to mark workout {workout_id} as template: {e}") from e
