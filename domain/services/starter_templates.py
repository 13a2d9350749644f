"""
Starter templates offered on the first wizard step.

Picking a template with predefined blocks pre-populates the block list;
every other choice (including "scratch") starts empty.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel

from domain.models import ArtifactType, Block, BlockCategory, BlockFlow

SCRATCH = "scratch"


class StarterTemplate(BaseModel):
    id: str
    name: str
    description: str
    artifact_type: ArtifactType

    model_config = {"frozen": True}


STARTER_TEMPLATES: List[StarterTemplate] = [
    StarterTemplate(
        id="strength",
        name="Classic Strength",
        description="Traditional strength training with warm-up, main sets, and cool-down",
        artifact_type=ArtifactType.SINGLE,
    ),
    StarterTemplate(
        id="circuit",
        name="Speed Circuit",
        description="High-intensity circuit training for conditioning",
        artifact_type=ArtifactType.SINGLE,
    ),
    StarterTemplate(
        id="emom",
        name="Daily EMOM",
        description="Every Minute on the Minute training protocol",
        artifact_type=ArtifactType.SINGLE,
    ),
    StarterTemplate(
        id="full-week",
        name="Full Week Plan",
        description="Complete 7-day training schedule",
        artifact_type=ArtifactType.WEEKLY,
    ),
    StarterTemplate(
        id="strength-week",
        name="Strength Focus Week",
        description="Weekly plan focused on strength development",
        artifact_type=ArtifactType.WEEKLY,
    ),
    StarterTemplate(
        id="periodized",
        name="Periodized Plan",
        description="Progressive monthly training plan",
        artifact_type=ArtifactType.MONTHLY,
    ),
]

_TEMPLATE_IDS = {template.id for template in STARTER_TEMPLATES} | {SCRATCH}


def templates_for(artifact_type: ArtifactType) -> List[StarterTemplate]:
    return [t for t in STARTER_TEMPLATES if t.artifact_type is artifact_type]


def is_known_template(choice: str) -> bool:
    return choice in _TEMPLATE_IDS


def starter_blocks(choice: str) -> List[Block]:
    """
    Blocks a starter template begins with.

    A new list with new block ids is built on every call.
    """
    if choice == "strength":
        return [
            Block(name="Dynamic Warm-up", category=BlockCategory.WARMUP, rest_between_exercises=60),
            Block(name="Strength Training", category=BlockCategory.MAIN, rest_between_exercises=90),
            Block(name="Cool-down", category=BlockCategory.COOLDOWN, rest_between_exercises=30),
        ]
    if choice == "circuit":
        return [
            Block(name="Dynamic Warm-up", category=BlockCategory.WARMUP, rest_between_exercises=60),
            Block(
                name="Speed Circuit",
                category=BlockCategory.CONDITIONING,
                flow=BlockFlow.CIRCUIT,
                rest_between_exercises=75,
                rounds=3,
            ),
            Block(name="Recovery", category=BlockCategory.COOLDOWN, rest_between_exercises=30),
        ]
    return []


def default_artifact_name(
    choice: str,
    artifact_type: ArtifactType,
    today: Optional[date] = None,
) -> str:
    """Name suggested when a template is picked, e.g. 'Custom Weekly - 2024-03-04'."""
    names: Dict[str, str] = {t.id: t.name for t in STARTER_TEMPLATES}
    template_name = "Custom" if choice == SCRATCH else names.get(choice, choice)
    stamp = (today or date.today()).isoformat()
    return f"{template_name} {artifact_type.label} - {stamp}"
