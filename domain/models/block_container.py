"""
Block containers: where an artifact's blocks live while it is being built.

Single workouts keep one flat list; weekly plans keep one list per weekday.
The two shapes are distinct variants tagged by ``kind`` so the validator and
payload mapper branch on type instead of sniffing the JSON shape.
"""

from typing import Annotated, Dict, List, Literal, Set, Union

from pydantic import BaseModel, Field, model_validator

from domain.models.artifact import Weekday
from domain.models.block import Block


def _empty_days() -> Dict[Weekday, List[Block]]:
    return {day: [] for day in Weekday}


class FlatBlocks(BaseModel):
    """Ordered block list for a single workout."""

    kind: Literal["flat"] = "flat"
    blocks: List[Block] = Field(default_factory=list)

    def all_blocks(self) -> List[Block]:
        return list(self.blocks)

    def to_row(self) -> List[dict]:
        return [block.to_row() for block in self.blocks]


class DayBlocks(BaseModel):
    """
    Per-weekday block lists for a weekly plan.

    Invariants:
    - all seven weekdays are always present
    - a day in ``rest_days`` has an empty block list
    """

    kind: Literal["day_map"] = "day_map"
    days: Dict[Weekday, List[Block]] = Field(default_factory=_empty_days)
    rest_days: Set[Weekday] = Field(default_factory=set)
    current_day: Weekday = Weekday.MONDAY

    @model_validator(mode="after")
    def fill_missing_days(self) -> "DayBlocks":
        for day in Weekday:
            self.days.setdefault(day, [])
        for day in self.rest_days:
            self.days[day] = []
        return self

    def all_blocks(self) -> List[Block]:
        blocks: List[Block] = []
        for day in Weekday.ordered():
            blocks.extend(self.days[day])
        return blocks

    def is_rest_day(self, day: Weekday) -> bool:
        return day in self.rest_days

    def to_row(self) -> Dict[str, List[dict]]:
        return {
            day.value: [block.to_row() for block in self.days[day]]
            for day in Weekday.ordered()
        }

    def rest_days_row(self) -> List[str]:
        return [day.value for day in Weekday.ordered() if day in self.rest_days]


BlockContainer = Annotated[Union[FlatBlocks, DayBlocks], Field(discriminator="kind")]
