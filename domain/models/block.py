"""
Block entity: a named, ordered group of exercises sharing a training style.

Blocks are serialized with the camelCase keys stored in the ``blocks`` JSON
column (``restBetweenExercises``, ``restBetweenSets``, ``timeLimit``) so rows
written by other clients load unchanged.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise, new_id


class BlockCategory(str, Enum):
    """Where a block sits in the session."""

    WARMUP = "warmup"
    MAIN = "main"
    ACCESSORY = "accessory"
    CONDITIONING = "conditioning"
    COOLDOWN = "cooldown"
    CUSTOM = "custom"


class BlockFlow(str, Enum):
    """
    How the exercises of a block are performed.

    - SEQUENTIAL: finish all sets of one exercise before the next
    - CIRCUIT: one set of each exercise in turn, repeated for rounds
    - SUPERSET: exercises paired back-to-back
    - EMOM: every minute on the minute
    - AMRAP: as many rounds as possible within the time limit
    """

    SEQUENTIAL = "sequential"
    CIRCUIT = "circuit"
    SUPERSET = "superset"
    EMOM = "emom"
    AMRAP = "amrap"


class Block(BaseModel):
    """
    A block of exercises owned by a single container (flat list or one day).

    Examples:
        >>> block = Block(
        ...     name="Strength Training",
        ...     category=BlockCategory.MAIN,
        ...     exercises=[Exercise(name="Back Squat", sets="5", reps="5")],
        ...     rest_between_exercises=90,
        ... )
        >>> block.exercise_count
        1
    """

    id: str = Field(default_factory=new_id, description="Opaque block identifier")
    name: str = Field(default="", description="Block label (e.g. 'Dynamic Warm-up')")
    category: BlockCategory = Field(default=BlockCategory.MAIN)
    flow: BlockFlow = Field(default=BlockFlow.SEQUENTIAL)
    exercises: List[Exercise] = Field(default_factory=list)
    rest_between_exercises: int = Field(
        default=60, ge=0, alias="restBetweenExercises", description="Rest between exercises in seconds"
    )
    rest_between_sets: Optional[int] = Field(
        default=None, ge=0, alias="restBetweenSets", description="Rest between sets in seconds"
    )
    rounds: Optional[int] = Field(default=None, ge=1)
    time_limit: Optional[int] = Field(
        default=None, ge=0, alias="timeLimit", description="Time cap in minutes for EMOM/AMRAP"
    )
    description: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    @property
    def exercise_names(self) -> List[str]:
        return [ex.name for ex in self.exercises]

    def copy_with_new_ids(self) -> "Block":
        """
        Deep-copy the block, assigning new ids to the block and every exercise.

        The copy shares no mutable state with the source, so edits made to
        one never show up in the other.
        """
        return self.model_copy(
            deep=True,
            update={
                "id": new_id(),
                "exercises": [ex.copy_with_new_id() for ex in self.exercises],
            },
        )

    def to_row(self) -> dict:
        """Serialize for the ``blocks`` JSON column."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __str__(self) -> str:
        names = ", ".join(self.exercise_names[:3])
        if len(self.exercises) > 3:
            names += f" (+{len(self.exercises) - 3} more)"
        return f"{self.name or 'Block'} ({self.flow.value}) [{names}]"
