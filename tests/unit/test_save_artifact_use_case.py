"""
Unit tests for SaveArtifactUseCase.

Uses the in-memory fakes so create/update routing, drafts and the
best-effort follow-ups can be checked without a database.
"""

from datetime import date

import pytest

from application.use_cases import SaveArtifactUseCase
from domain.models import (
    ArtifactCollection,
    ArtifactMetadata,
    ArtifactType,
    Block,
    DayBlocks,
    Exercise,
    FlatBlocks,
    SaveAction,
    WeekPlanEntry,
    Weekday,
    WorkflowState,
)
from tests.fakes import create_assignment_repo, create_monthly_plan_repo, create_workout_repo

TODAY = date(2024, 5, 1)


@pytest.fixture
def workout_repo():
    return create_workout_repo(owner_id="coach-1")


@pytest.fixture
def plan_repo():
    return create_monthly_plan_repo(owner_id="coach-1")


@pytest.fixture
def assignment_repo():
    return create_assignment_repo()


@pytest.fixture
def use_case(workout_repo, plan_repo, assignment_repo):
    return SaveArtifactUseCase(
        workout_repo=workout_repo,
        plan_repo=plan_repo,
        assignment_repo=assignment_repo,
    )


def single_state(**kwargs):
    return WorkflowState(
        artifact_type=ArtifactType.SINGLE,
        template_choice="scratch",
        metadata=ArtifactMetadata(name="Leg Day"),
        block_state=FlatBlocks(
            blocks=[Block(name="Main", exercises=[Exercise(name="Back Squat")])]
        ),
        **kwargs,
    )


def monthly_state(**kwargs):
    return WorkflowState(
        artifact_type=ArtifactType.MONTHLY,
        metadata=ArtifactMetadata(name="March Block", date="2024-03-04"),
        week_plan=[
            WeekPlanEntry(week_number=1, workout_id="w-a"),
            WeekPlanEntry(week_number=2, workout_id="w-b"),
            WeekPlanEntry(week_number=3, is_rest_week=True),
            WeekPlanEntry(week_number=4, workout_id="w-a"),
        ],
        **kwargs,
    )


# =============================================================================
# Create / update routing
# =============================================================================


@pytest.mark.unit
class TestSaveRouting:

    def test_creates_single_workout(self, use_case, workout_repo):
        result = use_case.execute(single_state(), today=TODAY)

        assert result.success
        assert result.collection is ArtifactCollection.WORKOUTS
        assert not result.is_update
        stored = workout_repo.get_by_id(result.artifact_id)
        assert stored["name"] == "Leg Day"
        assert stored["user_id"] == "coach-1"
        assert stored["exercises"][0]["name"] == "Back Squat"

    def test_updates_when_editing(self, use_case, workout_repo):
        """Editing never creates a second row."""
        workout_repo.seed([{"id": "w-1", "name": "Old", "template_type": "single"}])
        state = single_state(edit_target_id="w-1", edit_collection=ArtifactCollection.WORKOUTS)

        result = use_case.execute(state, today=TODAY)

        assert result.success
        assert result.is_update
        assert result.artifact_id == "w-1"
        assert len(workout_repo.get_all()) == 1
        assert workout_repo.get_by_id("w-1")["name"] == "Leg Day"

    def test_creates_monthly_plan(self, use_case, plan_repo, workout_repo):
        result = use_case.execute(monthly_state(), today=TODAY)

        assert result.success
        assert result.collection is ArtifactCollection.TRAINING_PLANS
        plans = plan_repo.get_all()
        assert len(plans) == 1
        assert plans[0]["weeks_structure"] == ["w-a", "w-b", None, "w-a"]
        assert plans[0]["created_by"] == "coach-1"
        assert workout_repo.get_all() == []

    def test_updates_monthly_plan(self, use_case, plan_repo):
        plan_repo.seed([{"id": "p-1", "name": "Old", "weeks_structure": [None]}])
        state = monthly_state(edit_target_id="p-1", edit_collection=ArtifactCollection.TRAINING_PLANS)

        result = use_case.execute(state, today=TODAY)

        assert result.success
        assert result.is_update
        assert plan_repo.get_by_id("p-1")["name"] == "March Block"

    def test_collection_mismatch_rejected(self, use_case, workout_repo):
        """A workout being edited cannot be saved as a monthly plan."""
        state = monthly_state(edit_target_id="w-1", edit_collection=ArtifactCollection.WORKOUTS)

        result = use_case.execute(state, today=TODAY)

        assert not result.success
        assert "Cannot change" in result.error


# =============================================================================
# Drafts
# =============================================================================


@pytest.mark.unit
class TestDrafts:

    def test_draft_is_marked(self, use_case, workout_repo):
        result = use_case.execute(single_state(), action=SaveAction.SAVE_DRAFT, today=TODAY)

        assert result.success
        assert result.is_draft
        assert workout_repo.get_by_id(result.artifact_id)["is_draft"] is True

    def test_draft_skips_assignment(self, use_case, assignment_repo):
        state = single_state(selected_athlete_ids={"a-1"})
        use_case.execute(state, action=SaveAction.SAVE_DRAFT, today=TODAY)
        assert assignment_repo.workout_assignments == []

    def test_draft_while_editing_creates_new_row(self, use_case, workout_repo):
        workout_repo.seed([{"id": "w-1", "name": "Old", "template_type": "single"}])
        state = single_state(edit_target_id="w-1", edit_collection=ArtifactCollection.WORKOUTS)

        result = use_case.execute(state, action=SaveAction.SAVE_DRAFT, today=TODAY)

        assert result.artifact_id != "w-1"
        assert workout_repo.get_by_id("w-1")["name"] == "Old"

    def test_monthly_draft_fails(self, use_case, plan_repo):
        result = use_case.execute(monthly_state(), action=SaveAction.SAVE_DRAFT, today=TODAY)
        assert not result.success
        assert plan_repo.get_all() == []


# =============================================================================
# Follow-ups
# =============================================================================


@pytest.mark.unit
class TestFollowUps:

    def test_assigns_selected_athletes(self, use_case, assignment_repo):
        state = single_state(selected_athlete_ids={"a-1", "a-2"})

        result = use_case.execute(state, assigned_by="coach-1", today=TODAY)

        assert result.assigned_athlete_count == 2
        rows = assignment_repo.workout_assignments
        assert [r["athlete_id"] for r in rows] == ["a-1", "a-2"]
        assert all(r["workout_id"] == result.artifact_id for r in rows)
        assert rows[0]["assignment_type"] == "single"
        assert rows[0]["start_date"] == rows[0]["end_date"] == "2024-05-01"
        assert rows[0]["assigned_by"] == "coach-1"
        assert rows[0]["total_items"] == 1

    def test_weekly_assignment(self, use_case, assignment_repo):
        state = WorkflowState(
            artifact_type=ArtifactType.WEEKLY,
            metadata=ArtifactMetadata(name="Base Week"),
            block_state=DayBlocks(days={Weekday.MONDAY: [Block(name="A")]}),
            selected_athlete_ids={"a-1"},
        )
        use_case.execute(state, today=TODAY)
        row = assignment_repo.workout_assignments[0]
        assert row["assignment_type"] == "weekly"
        assert row["end_date"] == "2024-05-08"

    def test_monthly_assignment(self, use_case, assignment_repo):
        result = use_case.execute(monthly_state(selected_athlete_ids={"a-1"}), today=TODAY)
        row = assignment_repo.plan_assignments[0]
        assert row["plan_id"] == result.artifact_id
        assert row["start_date"] == "2024-03-04"
        assert row["end_date"] == "2024-04-01"

    def test_no_athletes_no_assignment(self, use_case, assignment_repo):
        result = use_case.execute(single_state(), today=TODAY)
        assert result.assigned_athlete_count == 0
        assert assignment_repo.workout_assignments == []

    def test_assignment_failure_is_a_warning(self, use_case, assignment_repo, workout_repo):
        """The saved artifact stays saved."""
        assignment_repo.fail_assign = True
        result = use_case.execute(single_state(selected_athlete_ids={"a-1"}), today=TODAY)

        assert result.success
        assert result.has_warnings
        assert result.warnings[0].startswith("Saved, but assigning athletes failed")
        assert len(workout_repo.get_all()) == 1

    def test_monthly_flags_weekly_templates(self, use_case, workout_repo):
        use_case.execute(monthly_state(), today=TODAY)
        assert workout_repo.marked_templates == ["w-a", "w-b"]

    def test_template_flag_failure_is_a_warning(self, use_case, workout_repo, plan_repo):
        workout_repo.fail_mark_template = True

        result = use_case.execute(monthly_state(), today=TODAY)

        assert result.success
        assert len(result.warnings) == 2
        assert len(plan_repo.get_all()) == 1


# =============================================================================
# Failures
# =============================================================================


@pytest.mark.unit
class TestSaveFailures:

    def test_write_failure(self, use_case, workout_repo, assignment_repo):
        workout_repo.fail_writes = True

        result = use_case.execute(single_state(selected_athlete_ids={"a-1"}), today=TODAY)

        assert not result.success
        assert result.error == "Simulated insert failure"
        assert assignment_repo.workout_assignments == []

    def test_update_of_missing_row(self, use_case):
        state = single_state(edit_target_id="gone", edit_collection=ArtifactCollection.WORKOUTS)
        result = use_case.execute(state, today=TODAY)
        assert not result.success
        assert "not found" in result.error

    def test_state_is_not_modified(self, use_case):
        state = single_state(selected_athlete_ids={"a-1"})
        before = state.model_dump()
        use_case.execute(state, today=TODAY)
        assert state.model_dump() == before
