"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure injection flags for error-path tests
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutRepository, create_workout_repo

    # Direct instantiation
    repo = FakeWorkoutRepository()
    repo.seed([{"id": "w1", "name": "Base Weekly", "template_type": "weekly"}])

    # Factory function with pre-populated weekly templates
    repo = create_workout_repo(owner_id="coach-1", num_weekly_templates=3)
"""
import uuid

from tests.fakes.workout_repository import FakeWorkoutRepository
from tests.fakes.monthly_plan_repository import FakeMonthlyPlanRepository
from tests.fakes.assignment_repository import FakeAssignmentRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_workout_repo(
    *,
    owner_id: str = "test_user",
    num_weekly_templates: int = 0,
) -> FakeWorkoutRepository:
    """
    Create a FakeWorkoutRepository with optional weekly templates.

    Args:
        owner_id: Owner stamped on created and generated workouts
        num_weekly_templates: Number of weekly template workouts to create

    Returns:
        Pre-populated FakeWorkoutRepository
    """
    repo = FakeWorkoutRepository(owner_id=owner_id)
    repo.seed([
        {
            "id": str(uuid.uuid4()),
            "user_id": owner_id,
            "name": f"Template Week {i + 1}",
            "type": "weekly",
            "template_type": "weekly",
            "is_template": True,
            "is_block_based": True,
            "blocks": {},
            "rest_days": [],
        }
        for i in range(num_weekly_templates)
    ])
    return repo


def create_monthly_plan_repo(*, owner_id: str = "test_user") -> FakeMonthlyPlanRepository:
    return FakeMonthlyPlanRepository(owner_id=owner_id)


def create_assignment_repo() -> FakeAssignmentRepository:
    return FakeAssignmentRepository()


__all__ = [
    # Fakes
    "FakeWorkoutRepository",
    "FakeMonthlyPlanRepository",
    "FakeAssignmentRepository",
    # Factories
    "create_workout_repo",
    "create_monthly_plan_repo",
    "create_assignment_repo",
]
