"""
Workout Repository Interface (Port).

This module defines the abstract interface for single and weekly workout
persistence. Implementations may use Supabase, in-memory storage, or other
backends.
"""
from typing import Protocol, Optional, List, Dict, Any


class WorkoutRepository(Protocol):
    """
    Abstract interface for the ``workouts`` collection.

    Contract for failures: lookups return None only when no row exists;
    any other failure is raised, never folded into None.
    """

    def create(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new workout.

        Args:
            body: Payload built by the persistence mapper

        Returns:
            Created row including its generated ``id``

        Raises:
            ArtifactSaveError: if the insert fails
        """
        ...

    def update(self, workout_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace an existing workout's content.

        Raises:
            ArtifactSaveError: if the update fails or no row matched
        """
        ...

    def save_draft(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store an unfinished workout as a draft.

        Raises:
            ArtifactSaveError: if the insert fails
        """
        ...

    def get_by_id(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a workout row by ID.

        Returns:
            Row, or None if no workout has this id
        """
        ...

    def get_all(self, owner_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """List workouts, newest first (optionally only one owner's)."""
        ...

    def list_templates(
        self,
        owner_id: str,
        template_type: str = "weekly",
    ) -> List[Dict[str, Any]]:
        """
        List reusable workouts of one kind for an owner.

        A weekly workout counts as a template when flagged ``is_template``
        or when its name mentions "weekly".
        """
        ...

    def mark_as_template(self, workout_id: str, is_template: bool = True) -> None:
        """
        Flag a workout as a reusable template (hidden from normal listings).

        Raises:
            ArtifactSaveError: if the update fails
        """
        ...
