"""
Exercise entity for block-based workouts.

Exercises live inside exactly one Block and their order within that block
is the execution order. Prescription fields (sets, reps, weight, ...) are
kept as free-form strings because coaches write things like "3-5", "AMRAP"
or "70%" that don't survive numeric coercion.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


def new_id() -> str:
    """Generate a fresh opaque identifier for blocks and exercises."""
    return str(uuid.uuid4())


class Exercise(BaseModel):
    """
    An exercise instance placed inside a block.

    Examples:
        >>> squat = Exercise(name="Back Squat", sets="5", reps="5", weight="225")
        >>> squat.id  # generated
        '...'
    """

    id: str = Field(default_factory=new_id, description="Opaque instance identifier")
    name: str = Field(..., min_length=1, description="Exercise display name")
    category: str = Field(default="", description="Exercise category (e.g. 'strength', 'plyometric')")
    description: str = Field(default="", description="Instructions shown to the athlete")

    # Work prescription
    sets: Optional[str] = None
    reps: Optional[str] = None
    weight: Optional[str] = None
    distance: Optional[str] = None
    rest: Optional[str] = Field(default=None, description="Rest between sets in seconds")
    rpe: Optional[str] = None
    timed_duration: Optional[int] = Field(
        default=None, ge=0, description="Duration in seconds for timed exercises"
    )

    # Free-text notes
    notes: Optional[str] = None
    contacts: Optional[str] = None
    intensity: Optional[str] = None
    direction: Optional[str] = None
    movement_notes: Optional[str] = None

    model_config = {"extra": "ignore"}

    def copy_with_new_id(self) -> "Exercise":
        """Return a detached deep copy carrying a brand-new identifier."""
        return self.model_copy(deep=True, update={"id": new_id()})
