"""
Repository Interfaces (Ports) for the workout builder.

This package defines abstract interfaces that decouple the wizard's logic
from infrastructure (database, external services). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRepository, MonthlyPlanRepository

    class SaveArtifactUseCase:
        def __init__(self, workout_repo: WorkoutRepository, ...):
            self._workout_repo = workout_repo
"""

# Single/weekly workout persistence
from application.ports.workout_repository import WorkoutRepository

# Monthly plan persistence
from application.ports.monthly_plan_repository import MonthlyPlanRepository

# Athlete assignments
from application.ports.assignment_repository import AssignmentRepository

__all__ = [
    "WorkoutRepository",
    "MonthlyPlanRepository",
    "AssignmentRepository",
]
