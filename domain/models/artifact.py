"""
Artifact-level enums and metadata.

An artifact is the thing a coach builds in the wizard: a single workout, a
weekly plan, or a monthly plan made of weekly workouts.
"""

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ArtifactType(str, Enum):
    """Kind of artifact being built. Fixes the wizard's step sequence."""

    SINGLE = "single"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def collection(self) -> "ArtifactCollection":
        """The persistence collection artifacts of this type are stored in."""
        if self is ArtifactType.MONTHLY:
            return ArtifactCollection.TRAINING_PLANS
        return ArtifactCollection.WORKOUTS


class ArtifactCollection(str, Enum):
    """Backing-store collections an artifact can live in."""

    WORKOUTS = "workouts"
    TRAINING_PLANS = "training_plans"


class SaveAction(str, Enum):
    """
    What the final save does.

    - SAVE: create or update the artifact as configured
    - SAVE_TEMPLATE: save it as a reusable template regardless of the toggle
    - SAVE_DRAFT: park an unfinished single/weekly workout; the wizard stays open
    """

    SAVE = "save"
    SAVE_TEMPLATE = "save_template"
    SAVE_DRAFT = "save_draft"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def ordered(cls) -> List["Weekday"]:
        return list(cls)

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ArtifactMetadata(BaseModel):
    """Name and scheduling details collected on the schedule step."""

    name: str = Field(default="", description="Artifact name shown in listings")
    date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD)")
    time: Optional[str] = Field(default=None, description="Start time (HH:MM)")
    duration: Optional[str] = Field(default=None, description="Estimated duration")
    location: Optional[str] = None
    is_template: bool = Field(
        default=False, description="Saved for reuse rather than scheduled"
    )

    @property
    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Optional[str]) -> Optional[str]:
        """Accept ISO dates or timestamps; keep the date part only."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime.date):
            return v.isoformat()
        text = str(v)[:10]
        datetime.date.fromisoformat(text)
        return text

    @field_validator("time", "duration", "location", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    def schedule_date(self) -> Optional[datetime.date]:
        return datetime.date.fromisoformat(self.date) if self.date else None
