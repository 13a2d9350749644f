"""
Infrastructure Layer for the workout builder API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseWorkoutRepository,
    SupabaseMonthlyPlanRepository,
    SupabaseAssignmentRepository,
)

__all__ = [
    "SupabaseWorkoutRepository",
    "SupabaseMonthlyPlanRepository",
    "SupabaseAssignmentRepository",
]
