"""
Unit tests for domain/converters/db_converters.py
"""

import json

import pytest

from domain.converters import (
    build_payload,
    entries_to_weeks_structure,
    training_plan_row_to_state,
    weeks_structure_to_entries,
    workout_row_to_state,
)
from domain.models import (
    ArtifactCollection,
    ArtifactMetadata,
    ArtifactType,
    Block,
    DayBlocks,
    Exercise,
    FlatBlocks,
    WeekPlanEntry,
    Weekday,
    WorkflowState,
)
from infrastructure.db.monthly_plan_repository import SupabaseMonthlyPlanRepository
from tests.fakes import create_monthly_plan_repo


@pytest.mark.unit
class TestWorkoutRowToState:
    """Tests for workout_row_to_state()."""

    def test_single_round_trip(self):
        """payload -> row -> state -> payload keeps the body."""
        state = WorkflowState(
            metadata=ArtifactMetadata(name="Leg Day", date="2024-05-01", time="07:30"),
            block_state=FlatBlocks(
                blocks=[Block(name="Main", exercises=[Exercise(name="Back Squat", sets="5")])]
            ),
        )
        body = build_payload(state).body

        loaded = workout_row_to_state({"id": "w-1", **body})

        assert loaded.edit_target_id == "w-1"
        assert loaded.edit_collection is ArtifactCollection.WORKOUTS
        assert loaded.template_choice == "scratch"
        assert build_payload(loaded).body == body

    def test_weekly_round_trip_keeps_rest_days(self):
        state = WorkflowState(
            artifact_type=ArtifactType.WEEKLY,
            metadata=ArtifactMetadata(name="Base Week"),
            block_state=DayBlocks(
                days={Weekday.TUESDAY: [Block(name="Run")]},
                rest_days={Weekday.SUNDAY},
            ),
        )
        body = build_payload(state).body

        loaded = workout_row_to_state({"id": "w-2", **body})

        assert loaded.artifact_type is ArtifactType.WEEKLY
        assert loaded.block_state.is_rest_day(Weekday.SUNDAY)
        assert build_payload(loaded).body == body

    def test_blocks_stored_as_json_text(self):
        row = {
            "id": "w-3",
            "name": "Old",
            "template_type": "single",
            "blocks": json.dumps([{"name": "Main", "exercises": [{"name": "Row"}]}]),
        }
        loaded = workout_row_to_state(row)
        assert loaded.all_blocks()[0].exercise_names == ["Row"]

    def test_unknown_weekday_keys_ignored(self):
        row = {
            "id": "w-4",
            "template_type": "weekly",
            "blocks": {"monday": [{"name": "A"}], "funday": [{"name": "B"}]},
        }
        loaded = workout_row_to_state(row)
        assert [b.name for b in loaded.all_blocks()] == ["A"]

    def test_missing_type_defaults_to_single(self):
        loaded = workout_row_to_state({"id": "w-5", "name": "Legacy", "blocks": []})
        assert loaded.artifact_type is ArtifactType.SINGLE

    def test_monthly_type_rejected(self):
        with pytest.raises(ValueError):
            workout_row_to_state({"id": "w-6", "template_type": "monthly"})


@pytest.mark.unit
class TestTrainingPlanRowToState:
    """Tests for training plan conversion."""

    def test_weeks_structure_to_entries(self):
        entries = weeks_structure_to_entries(["w-a", None, "w-b"])
        assert [(e.week_number, e.workout_id, e.is_rest_week) for e in entries] == [
            (1, "w-a", False),
            (2, "", True),
            (3, "w-b", False),
        ]

    def test_empty_structure_gives_default_plan(self):
        assert len(weeks_structure_to_entries(None)) == 4

    def test_entries_to_weeks_structure(self):
        weeks = [
            WeekPlanEntry(week_number=2, workout_id="stale", is_rest_week=True).model_dump(),
            WeekPlanEntry(week_number=1, workout_id="w-a").model_dump(),
        ]
        assert entries_to_weeks_structure(weeks) == ["w-a", None]

    def test_plan_row(self):
        row = {
            "id": "p-1",
            "name": "March Block",
            "start_date": "2024-03-04",
            "weeks_structure": ["w-a", "w-b", None, "w-a"],
        }
        loaded = training_plan_row_to_state(row)

        assert loaded.artifact_type is ArtifactType.MONTHLY
        assert loaded.edit_collection is ArtifactCollection.TRAINING_PLANS
        assert loaded.metadata.name == "March Block"
        assert loaded.metadata.date == "2024-03-04"
        assert loaded.week_plan[2].is_rest_week
        assert loaded.week_plan[3].workout_id == "w-a"

    def test_monthly_round_trip_through_plan_row(self):
        """payload -> weeks_structure row -> state -> payload keeps the body."""
        state = WorkflowState(
            artifact_type=ArtifactType.MONTHLY,
            metadata=ArtifactMetadata(name="May Block", date="2024-05-06"),
            week_plan=[
                WeekPlanEntry(week_number=1, workout_id="w-a"),
                WeekPlanEntry(week_number=2, workout_id="w-b"),
                WeekPlanEntry(week_number=3, workout_id="stale", is_rest_week=True),
                WeekPlanEntry(week_number=4, workout_id="w-a"),
            ],
        )
        body = build_payload(state).body

        row = {"id": "p-9", **SupabaseMonthlyPlanRepository._to_row(body)}
        assert row["weeks_structure"] == ["w-a", "w-b", None, "w-a"]
        assert "weeks" not in row

        loaded = training_plan_row_to_state(row)

        assert loaded.metadata.date == "2024-05-06"
        assert [(w.workout_id, w.is_rest_week) for w in loaded.week_plan] == [
            ("w-a", False),
            ("w-b", False),
            ("", True),
            ("w-a", False),
        ]
        assert build_payload(loaded).body == body

    def test_monthly_round_trip_through_fake_repository(self):
        plan_repo = create_monthly_plan_repo(owner_id="coach-1")
        state = WorkflowState(
            artifact_type=ArtifactType.MONTHLY,
            metadata=ArtifactMetadata(name="June Block", date="2024-06-03"),
            week_plan=[
                WeekPlanEntry(week_number=1, is_rest_week=True),
                WeekPlanEntry(week_number=2, workout_id="w-b"),
            ],
        )
        body = build_payload(state).body

        saved = plan_repo.create(body)
        loaded = training_plan_row_to_state(plan_repo.get_by_id(saved["id"]))

        assert loaded.edit_target_id == saved["id"]
        assert build_payload(loaded).body == body
