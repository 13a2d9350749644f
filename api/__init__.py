"""
API package for the workout builder.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
- schemas/: Request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_workout_repo,
    get_monthly_plan_repo,
    get_assignment_repo,
    get_save_artifact_use_case,
    get_load_artifact_use_case,
    get_list_weekly_templates_use_case,
    get_session_store,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_workout_repo",
    "get_monthly_plan_repo",
    "get_assignment_repo",
    # Use cases
    "get_save_artifact_use_case",
    "get_load_artifact_use_case",
    "get_list_weekly_templates_use_case",
    # Wizard sessions
    "get_session_store",
    # Authentication
    "get_current_user",
]
