"""
Week plan store: mutation operations over a monthly plan's weeks.
"""

from typing import List, Union

from domain.models import MAX_PLAN_WEEKS, WeekPlanEntry, WorkflowState

WORKOUT_ID_FIELD = "workout_id"
REST_WEEK_FIELD = "is_rest_week"


class WeekPlanError(ValueError):
    """Raised when a week plan change is rejected."""


class WeekPlanStore:
    """Week plan operations bound to one WorkflowState."""

    def __init__(self, state: WorkflowState, max_weeks: int = MAX_PLAN_WEEKS) -> None:
        self._state = state
        self._max_weeks = max_weeks

    @property
    def weeks(self) -> List[WeekPlanEntry]:
        return sorted(self._state.week_plan, key=lambda w: w.week_number)

    def _get(self, week_number: int) -> WeekPlanEntry:
        for week in self._state.week_plan:
            if week.week_number == week_number:
                return week
        raise WeekPlanError(f"Week {week_number} does not exist")

    def update_entry(self, week_number: int, field: str, value: Union[str, bool]) -> WeekPlanEntry:
        """
        Update one field of the week matching ``week_number``.

        Marking a week as rest clears its workout reference right away.
        """
        week = self._get(week_number)
        if field == WORKOUT_ID_FIELD:
            if not isinstance(value, str):
                raise WeekPlanError("workout_id must be a string")
            week.workout_id = value
        elif field == REST_WEEK_FIELD:
            if not isinstance(value, bool):
                raise WeekPlanError("is_rest_week must be a boolean")
            week.is_rest_week = value
            if value:
                week.workout_id = ""
        else:
            raise WeekPlanError(f"Unknown week field '{field}'")
        return week

    def add_week(self) -> WeekPlanEntry:
        """Append a week numbered one past the current highest."""
        if len(self._state.week_plan) >= self._max_weeks:
            raise WeekPlanError(f"A plan can have at most {self._max_weeks} weeks")
        next_number = max((w.week_number for w in self._state.week_plan), default=0) + 1
        week = WeekPlanEntry(week_number=next_number)
        self._state.week_plan.append(week)
        return week

    def remove_week(self, week_number: int) -> None:
        """
        Remove a week; a plan always keeps at least one.

        Later weeks move up so week numbers stay contiguous from 1.
        """
        week = self._get(week_number)
        if len(self._state.week_plan) <= 1:
            raise WeekPlanError("A plan needs at least one week")
        remaining = [w for w in self.weeks if w is not week]
        for number, entry in enumerate(remaining, start=1):
            entry.week_number = number
        self._state.week_plan = remaining

    def referenced_workout_ids(self) -> List[str]:
        """Workout ids of the training (non-rest) weeks, in week order."""
        return [w.workout_id for w in self.weeks if not w.is_rest_week and w.workout_id]
