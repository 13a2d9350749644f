"""
Step sequencing for the builder wizard.

The ordered list of steps depends on the artifact type (and on who is
building it): monthly plans pick weekly workouts instead of building blocks,
so they have a shorter sequence.
"""

from typing import List, Optional

from domain.models import ArtifactType, StepDescriptor, StepId

ATHLETE_ROLE = "athlete"

_TEMPLATE = StepDescriptor(
    id=StepId.TEMPLATE,
    title="Choose Template",
    short_title="Template",
    description="Select workout type and starting template",
)
_BLOCKS = StepDescriptor(
    id=StepId.BLOCKS,
    title="Build Blocks",
    short_title="Blocks",
    description="Create workout structure with training blocks",
)
_EXERCISES = StepDescriptor(
    id=StepId.EXERCISES,
    title="Add Exercises",
    short_title="Exercises",
    description="Add exercises to your blocks",
)
_SCHEDULE = StepDescriptor(
    id=StepId.SCHEDULE,
    title="Set Schedule",
    short_title="Schedule",
    description="Configure dates and timing",
)
_ATHLETES = StepDescriptor(
    id=StepId.ATHLETES,
    title="Assign Athletes",
    short_title="Athletes",
    description="Choose who gets this workout",
)

_MONTHLY_TEMPLATE = StepDescriptor(
    id=StepId.TEMPLATE,
    title="Choose Template",
    short_title="Template",
    description="Select monthly plan template",
)
_WEEKLY_BUILDER = StepDescriptor(
    id=StepId.WEEKLY_BUILDER,
    title="Weekly Builder",
    short_title="Builder",
    description="Build your weekly schedule with workout templates",
)
_NAME_SCHEDULE = StepDescriptor(
    id=StepId.NAME_SCHEDULE,
    title="Name & Schedule",
    short_title="Schedule",
    description="Set plan name, details and training dates",
)
_MONTHLY_ATHLETES = StepDescriptor(
    id=StepId.ATHLETES,
    title="Assign Athletes",
    short_title="Athletes",
    description="Choose who gets this monthly plan",
)


def sequence(
    artifact_type: ArtifactType,
    role: Optional[str] = None,
) -> List[StepDescriptor]:
    """
    Get the ordered wizard steps for an artifact type.

    Args:
        artifact_type: Artifact being built
        role: Role of the user building it. Athletes cannot assign, so the
              athlete-assignment step is left out for them.

    Returns:
        Ordered step descriptors (4 for monthly, 5 for single/weekly when
        built by a coach).
    """
    if artifact_type is ArtifactType.MONTHLY:
        steps = [_MONTHLY_TEMPLATE, _WEEKLY_BUILDER, _NAME_SCHEDULE, _MONTHLY_ATHLETES]
    else:
        steps = [_TEMPLATE, _BLOCKS, _EXERCISES, _SCHEDULE, _ATHLETES]

    if role == ATHLETE_ROLE:
        steps = [step for step in steps if step.id is not StepId.ATHLETES]
    return steps


def clamp_step_index(index: int, steps: List[StepDescriptor]) -> int:
    """Clamp a step cursor into ``[0, len(steps) - 1]``."""
    return max(0, min(index, len(steps) - 1))
