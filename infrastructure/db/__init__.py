"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into use cases
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseWorkoutRepository,
        SupabaseMonthlyPlanRepository,
        SupabaseAssignmentRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    workout_repo = SupabaseWorkoutRepository(client, owner_id="user_123")
    plan_repo = SupabaseMonthlyPlanRepository(client, owner_id="user_123")
    assignment_repo = SupabaseAssignmentRepository(client)
"""

from infrastructure.db.workout_repository import SupabaseWorkoutRepository
from infrastructure.db.monthly_plan_repository import SupabaseMonthlyPlanRepository
from infrastructure.db.assignment_repository import SupabaseAssignmentRepository

__all__ = [
    # Single and weekly workouts
    "SupabaseWorkoutRepository",

    # Monthly plans (training_plans)
    "SupabaseMonthlyPlanRepository",

    # Athlete assignments
    "SupabaseAssignmentRepository",
]
