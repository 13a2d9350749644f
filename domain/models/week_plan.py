"""
Week plan entries for monthly plans.

A monthly plan is an ordered list of weeks, each referencing an existing
weekly workout or marked as a rest week.
"""

from pydantic import BaseModel, Field


class WeekPlanEntry(BaseModel):
    """
    One week of a monthly plan.

    ``workout_id`` is an empty string while unset. A rest week's
    ``workout_id`` is never persisted.
    """

    week_number: int = Field(..., ge=1)
    workout_id: str = Field(default="", description="Referenced weekly workout id")
    is_rest_week: bool = False

    @property
    def has_workout(self) -> bool:
        return bool(self.workout_id)

    @property
    def effective_workout_id(self) -> str:
        """The id that gets persisted: always empty for rest weeks."""
        return "" if self.is_rest_week else self.workout_id
