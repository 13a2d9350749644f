"""
Converters: stored rows -> WorkflowState.

The inverse of payload_mapper, used when an existing artifact is opened in
the wizard for editing.

Database schema (workouts table, relevant columns):
- id, name, description, template_type ('single' | 'weekly')
- date, time, duration, location, is_template
- is_block_based, blocks: JSONB (list for single, weekday map for weekly)
- rest_days: weekday names marked as rest (weekly only)

Database schema (training_plans table, relevant columns):
- id, name, description, month, year, start_date
- weeks_structure: array of nullable weekly workout ids (null = rest week)
"""

import json
import logging
from typing import Any, Dict, List, Optional

from domain.models import (
    ArtifactCollection,
    ArtifactMetadata,
    ArtifactType,
    Block,
    DayBlocks,
    FlatBlocks,
    WeekPlanEntry,
    Weekday,
    WorkflowState,
    default_week_plan,
)

logger = logging.getLogger(__name__)

EDIT_TEMPLATE_CHOICE = "scratch"


def _parse_blocks_column(value: Any) -> Any:
    """Blocks may come back as JSON text from older rows."""
    if isinstance(value, str):
        return json.loads(value)
    return value


def _parse_block_list(raw: Any) -> List[Block]:
    if not isinstance(raw, list):
        return []
    return [Block.model_validate(item) for item in raw]


def _parse_day_blocks(raw: Any, rest_days: Optional[List[str]]) -> DayBlocks:
    days: Dict[Weekday, List[Block]] = {}
    if isinstance(raw, dict):
        for key, value in raw.items():
            try:
                day = Weekday(str(key).lower())
            except ValueError:
                logger.warning(f"Ignoring unknown weekday key in stored blocks: {key}")
                continue
            days[day] = _parse_block_list(value)

    rest = set()
    for name in rest_days or []:
        try:
            rest.add(Weekday(str(name).lower()))
        except ValueError:
            logger.warning(f"Ignoring unknown rest day: {name}")
    return DayBlocks(days=days, rest_days=rest)


def _metadata_from_row(row: Dict[str, Any]) -> ArtifactMetadata:
    return ArtifactMetadata(
        name=row.get("name") or "",
        date=row.get("date") or None,
        time=row.get("time") or None,
        duration=row.get("duration") or None,
        location=row.get("location") or None,
        is_template=bool(row.get("is_template")),
    )


def workout_row_to_state(row: Dict[str, Any]) -> WorkflowState:
    """
    Rebuild wizard state from a ``workouts`` row.

    Args:
        row: Row from the workouts table

    Returns:
        WorkflowState in edit mode for the row's id

    Raises:
        ValueError: if the row's template type or blocks cannot be parsed
    """
    template_type = row.get("template_type") or row.get("type") or ArtifactType.SINGLE.value
    artifact_type = ArtifactType(template_type)
    if artifact_type is ArtifactType.MONTHLY:
        raise ValueError("Monthly plans are stored in training_plans, not workouts")

    raw_blocks = _parse_blocks_column(row.get("blocks")) if row.get("is_block_based", True) else None

    if artifact_type is ArtifactType.WEEKLY:
        container = _parse_day_blocks(raw_blocks, row.get("rest_days"))
    else:
        container = FlatBlocks(blocks=_parse_block_list(raw_blocks))

    return WorkflowState(
        artifact_type=artifact_type,
        metadata=_metadata_from_row(row),
        template_choice=EDIT_TEMPLATE_CHOICE,
        block_state=container,
        edit_target_id=row["id"],
        edit_collection=ArtifactCollection.WORKOUTS,
    )


def weeks_structure_to_entries(weeks_structure: Optional[List[Optional[str]]]) -> List[WeekPlanEntry]:
    """Map ``[id, None, id, ...]`` to week entries; ``None`` marks a rest week."""
    if not weeks_structure:
        return default_week_plan()
    return [
        WeekPlanEntry(
            week_number=index,
            workout_id=workout_id or "",
            is_rest_week=workout_id is None,
        )
        for index, workout_id in enumerate(weeks_structure, start=1)
    ]


def entries_to_weeks_structure(weeks: List[Dict[str, Any]]) -> List[Optional[str]]:
    """Inverse of weeks_structure_to_entries, applied to payload ``weeks``."""
    ordered = sorted(weeks, key=lambda w: w["week_number"])
    return [
        None if week.get("is_rest_week") or not week.get("workout_id") else week["workout_id"]
        for week in ordered
    ]


def training_plan_row_to_state(row: Dict[str, Any]) -> WorkflowState:
    """Rebuild wizard state from a ``training_plans`` row."""
    metadata = ArtifactMetadata(
        name=row.get("name") or "",
        date=row.get("start_date") or None,
        is_template=False,
    )
    return WorkflowState(
        artifact_type=ArtifactType.MONTHLY,
        metadata=metadata,
        template_choice=EDIT_TEMPLATE_CHOICE,
        block_state=FlatBlocks(),
        week_plan=weeks_structure_to_entries(row.get("weeks_structure")),
        edit_target_id=row["id"],
        edit_collection=ArtifactCollection.TRAINING_PLANS,
    )
