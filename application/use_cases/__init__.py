"""
Application Use Cases for the workout builder.

This package contains application-level use cases that orchestrate domain
logic and coordinate between ports/adapters:

- SaveArtifactUseCase: persist wizard state (create/update/draft) plus the
  best-effort template flagging and athlete assignment
- LoadArtifactUseCase: rebuild wizard state from a stored artifact
- ListWeeklyTemplatesUseCase: candidates for a monthly plan's weeks

Usage:
    from application.use_cases import SaveArtifactUseCase, LoadArtifactUseCase

    loader = LoadArtifactUseCase(workout_repo, plan_repo, assignment_repo)
    state = loader.execute("w-123")

    saver = SaveArtifactUseCase(workout_repo, plan_repo, assignment_repo)
    result = saver.execute(state, assigned_by="coach-1")
"""

from application.use_cases.list_weekly_templates import (
    ListTemplatesResult,
    ListWeeklyTemplatesUseCase,
)
from application.use_cases.load_artifact import LoadArtifactUseCase
from application.use_cases.save_artifact import SaveArtifactResult, SaveArtifactUseCase

__all__ = [
    # SaveArtifact
    "SaveArtifactUseCase",
    "SaveArtifactResult",
    # LoadArtifact
    "LoadArtifactUseCase",
    # ListWeeklyTemplates
    "ListWeeklyTemplatesUseCase",
    "ListTemplatesResult",
]
