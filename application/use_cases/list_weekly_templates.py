"""
List Weekly Templates Use Case.

Supplies the candidates a monthly plan's weeks can reference.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from application.ports import WorkoutRepository
from domain.models import ArtifactType

logger = logging.getLogger(__name__)


@dataclass
class ListTemplatesResult:
    """Result of listing weekly templates."""
    success: bool
    templates: List[Dict[str, Any]] = field(default_factory=list)
    count: int = 0
    error: Optional[str] = None


class ListWeeklyTemplatesUseCase:
    """Use case for listing weekly workouts usable in monthly plans."""

    def __init__(self, workout_repo: WorkoutRepository):
        self._workout_repo = workout_repo

    def execute(self, owner_id: str) -> ListTemplatesResult:
        try:
            templates = self._workout_repo.list_templates(owner_id, ArtifactType.WEEKLY.value)
        except Exception as e:
            logger.error(f"Failed to load weekly templates for {owner_id}: {e}")
            return ListTemplatesResult(
                success=False,
                error="Failed to load available weekly workouts for monthly plan",
            )
        return ListTemplatesResult(success=True, templates=templates, count=len(templates))
