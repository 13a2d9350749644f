"""
Tests for the Supabase repository implementations.

The Supabase client is replaced by a MagicMock whose query builder returns
itself from every chained call, so the tests check table names, filters and
payloads without a database.
"""
import pytest
from typing import Any, List, Optional
from unittest.mock import MagicMock, Mock

from application.exceptions import ArtifactSaveError
from infrastructure import (
    SupabaseAssignmentRepository,
    SupabaseMonthlyPlanRepository,
    SupabaseWorkoutRepository,
)

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


def make_client(*results: Optional[List[Any]]):
    """Client whose queries return ``results`` in order (one per execute())."""
    query = MagicMock()
    for method in ("select", "insert", "update", "eq", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.side_effect = [Mock(data=data) for data in results] or None
    if not results:
        query.execute.return_value = Mock(data=[])
    client = MagicMock()
    client.table.return_value = query
    return client, query


# ============================================================================
# SupabaseWorkoutRepository
# ============================================================================


class TestSupabaseWorkoutRepository:

    def test_create_stamps_owner(self):
        client, query = make_client([{"id": "w-1", "name": "Leg Day"}])
        repo = SupabaseWorkoutRepository(client, owner_id="coach-1")

        row = repo.create({"name": "Leg Day", "template_type": "single"})

        assert row["id"] == "w-1"
        client.table.assert_called_with("workouts")
        inserted = query.insert.call_args.args[0]
        assert inserted["user_id"] == "coach-1"
        assert inserted["name"] == "Leg Day"

    def test_create_without_row_raises(self):
        client, _ = make_client([])
        with pytest.raises(ArtifactSaveError):
            SupabaseWorkoutRepository(client).create({"name": "Leg Day"})

    def test_create_client_error_raises(self):
        client, query = make_client()
        query.execute.side_effect = RuntimeError("new row violates row-level security policy")
        with pytest.raises(ArtifactSaveError):
            SupabaseWorkoutRepository(client).create({"name": "Leg Day"})

    def test_save_draft_flags_row(self):
        client, query = make_client([{"id": "w-2"}])
        SupabaseWorkoutRepository(client).save_draft({"name": "Half done"})
        assert query.insert.call_args.args[0]["is_draft"] is True

    def test_update_filters_by_id(self):
        client, query = make_client([{"id": "w-1"}])
        SupabaseWorkoutRepository(client).update("w-1", {"name": "Leg Day v2"})
        query.eq.assert_called_with("id", "w-1")
        data = query.update.call_args.args[0]
        assert data["name"] == "Leg Day v2"
        assert "updated_at" in data

    def test_update_missing_row(self):
        client, _ = make_client([])
        with pytest.raises(ArtifactSaveError, match="not found"):
            SupabaseWorkoutRepository(client).update("gone", {"name": "x"})

    def test_get_by_id(self):
        client, query = make_client([{"id": "w-1"}], [])
        repo = SupabaseWorkoutRepository(client)
        assert repo.get_by_id("w-1") == {"id": "w-1"}
        assert repo.get_by_id("w-2") is None
        query.limit.assert_called_with(1)

    def test_get_by_id_propagates_errors(self):
        client, query = make_client()
        query.execute.side_effect = ConnectionError("timeout")
        with pytest.raises(ConnectionError):
            SupabaseWorkoutRepository(client).get_by_id("w-1")

    def test_list_templates_filters_rows(self):
        rows = [
            {"id": "a", "name": "Push Pull", "is_template": True},
            {"id": "b", "name": "Base Weekly"},
            {"id": "c", "name": "Random"},
        ]
        client, query = make_client(rows)

        templates = SupabaseWorkoutRepository(client).list_templates("coach-1", "weekly")

        assert [t["id"] for t in templates] == ["a", "b"]
        query.eq.assert_any_call("user_id", "coach-1")
        query.eq.assert_any_call("template_type", "weekly")

    def test_mark_as_template(self):
        client, query = make_client([{"id": "w-1"}])
        SupabaseWorkoutRepository(client).mark_as_template("w-1")
        query.update.assert_called_with({"is_template": True})

    def test_mark_as_template_failure(self):
        client, query = make_client()
        query.execute.side_effect = RuntimeError("boom")
        with pytest.raises(ArtifactSaveError):
            SupabaseWorkoutRepository(client).mark_as_template("w-1")


# ============================================================================
# SupabaseMonthlyPlanRepository
# ============================================================================


class TestSupabaseMonthlyPlanRepository:

    BODY = {
        "name": "March Block",
        "month": 3,
        "year": 2024,
        "weeks": [
            {"week_number": 2, "workout_id": "", "is_rest_week": True},
            {"week_number": 1, "workout_id": "w-a", "is_rest_week": False},
        ],
    }

    def test_create_maps_weeks_structure(self):
        client, query = make_client([{"id": "p-1"}])

        row = SupabaseMonthlyPlanRepository(client, owner_id="coach-1").create(self.BODY)

        assert row == {"id": "p-1"}
        client.table.assert_called_with("training_plans")
        inserted = query.insert.call_args.args[0]
        assert inserted["weeks_structure"] == ["w-a", None]
        assert "weeks" not in inserted
        assert inserted["created_by"] == "coach-1"

    def test_update_missing_plan(self):
        client, _ = make_client([])
        with pytest.raises(ArtifactSaveError):
            SupabaseMonthlyPlanRepository(client).update("p-9", self.BODY)

    def test_get_by_id_none(self):
        client, _ = make_client([])
        assert SupabaseMonthlyPlanRepository(client).get_by_id("p-9") is None


# ============================================================================
# SupabaseAssignmentRepository
# ============================================================================


class TestSupabaseAssignmentRepository:

    def test_assign_workout_skips_existing(self):
        client, query = make_client([{"athlete_id": "a-1"}], [{"id": "row-2"}])

        rows = SupabaseAssignmentRepository(client).assign_workout(
            "w-1",
            ["a-1", "a-2", "a-2"],
            assignment_type="single",
            start_date="2024-05-01",
            end_date="2024-05-01",
            total_items=3,
            assigned_by="coach-1",
        )

        assert rows == [{"id": "row-2"}]
        inserted = query.insert.call_args.args[0]
        assert [r["athlete_id"] for r in inserted] == ["a-2"]
        assert inserted[0]["meta"] == {"original_workout_id": "w-1", "workout_type": "single"}
        assert inserted[0]["progress"]["total_exercises"] == 3
        assert inserted[0]["status"] == "assigned"
        query.eq.assert_any_call("meta->>original_workout_id", "w-1")

    def test_assign_workout_nothing_new(self):
        client, query = make_client([{"athlete_id": "a-1"}])
        rows = SupabaseAssignmentRepository(client).assign_workout(
            "w-1", ["a-1"], assignment_type="weekly", start_date="x", end_date="y"
        )
        assert rows == []
        query.insert.assert_not_called()

    def test_assign_monthly_plan_writes_both_tables(self):
        client, query = make_client([], [{"id": "mpa-1"}], [{"id": "uwa-1"}])

        SupabaseAssignmentRepository(client).assign_monthly_plan(
            "p-1", ["a-1"], "2024-03-04", end_date="2024-04-01", total_items=3
        )

        tables = [c.args[0] for c in client.table.call_args_list]
        assert tables == [
            "monthly_plan_assignments",
            "monthly_plan_assignments",
            "unified_workout_assignments",
        ]
        plan_rows = query.insert.call_args_list[0].args[0]
        unified_rows = query.insert.call_args_list[1].args[0]
        assert plan_rows[0]["plan_id"] == "p-1"
        assert plan_rows[0]["status"] == "active"
        assert unified_rows[0]["meta"]["original_plan_id"] == "p-1"
        assert unified_rows[0]["assignment_type"] == "monthly"

    def test_get_athlete_ids_deduplicated(self):
        client, _ = make_client([{"athlete_id": "a-1"}, {"athlete_id": "a-1"}, {"athlete_id": "a-2"}])
        assert SupabaseAssignmentRepository(client).get_athlete_ids_for_monthly_plan("p-1") == ["a-1", "a-2"]
