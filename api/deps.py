"""
FastAPI Dependency Providers for the workout builder API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings, the Supabase client and the wizard session store are cached
  per-process (lru_cache)
- Repository and use case providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_current_user, get_load_artifact_use_case

    @router.post("/wizard/sessions")
    def create_session(
        user: CurrentUser = Depends(get_current_user),
        loader: LoadArtifactUseCase = Depends(get_load_artifact_use_case),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_workout_repo] = lambda: FakeWorkoutRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    AssignmentRepository,
    MonthlyPlanRepository,
    WorkoutRepository,
)
from application.use_cases import (
    ListWeeklyTemplatesUseCase,
    LoadArtifactUseCase,
    SaveArtifactUseCase,
)
from application.wizard import WizardSessionStore

# Concrete implementations
from infrastructure import (
    SupabaseAssignmentRepository,
    SupabaseMonthlyPlanRepository,
    SupabaseWorkoutRepository,
)

from backend.settings import Settings, get_settings as _get_settings

# Auth lives in backend.auth (single source of truth)
from backend.auth import CurrentUser, get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
    user: CurrentUser = Depends(get_current_user),
) -> WorkoutRepository:
    """
    Get WorkoutRepository implementation.

    Returns a SupabaseWorkoutRepository that stamps the current user on
    inserted rows. The return type is the Protocol to enable easy mocking.
    """
    return SupabaseWorkoutRepository(client, owner_id=user.user_id)


def get_monthly_plan_repo(
    client: Client = Depends(get_supabase_client_required),
    user: CurrentUser = Depends(get_current_user),
) -> MonthlyPlanRepository:
    """Get MonthlyPlanRepository implementation (training_plans table)."""
    return SupabaseMonthlyPlanRepository(client, owner_id=user.user_id)


def get_assignment_repo(
    client: Client = Depends(get_supabase_client_required),
) -> AssignmentRepository:
    """Get AssignmentRepository implementation."""
    return SupabaseAssignmentRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_save_artifact_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    plan_repo: MonthlyPlanRepository = Depends(get_monthly_plan_repo),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
) -> SaveArtifactUseCase:
    return SaveArtifactUseCase(
        workout_repo=workout_repo,
        plan_repo=plan_repo,
        assignment_repo=assignment_repo,
    )


def get_load_artifact_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    plan_repo: MonthlyPlanRepository = Depends(get_monthly_plan_repo),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
) -> LoadArtifactUseCase:
    return LoadArtifactUseCase(
        workout_repo=workout_repo,
        plan_repo=plan_repo,
        assignment_repo=assignment_repo,
    )


def get_list_weekly_templates_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> ListWeeklyTemplatesUseCase:
    return ListWeeklyTemplatesUseCase(workout_repo)


# =============================================================================
# Wizard Sessions
# =============================================================================


@lru_cache
def get_session_store() -> WizardSessionStore:
    """
    Get the process-wide wizard session registry (cached).

    Sessions are in-memory: they do not survive a restart and are not
    shared between worker processes.
    """
    settings = _get_settings()
    return WizardSessionStore(
        ttl_seconds=settings.session_ttl_seconds,
        max_sessions=settings.max_sessions,
    )


# =============================================================================
# Exports
# =============================================================================

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
    "CurrentUser",
    "get_current_user",
]
