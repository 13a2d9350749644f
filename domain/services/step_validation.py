"""
Step completion rules for the builder wizard.

A step is complete when it has no outstanding errors. Errors are plain
user-facing strings; an incomplete step is never an exception, it just
blocks forward navigation until the current step is fixed.
"""

from typing import List

from domain.models import ArtifactType, StepId, WorkflowState


def get_step_errors(step_id: StepId, state: WorkflowState) -> List[str]:
    """
    List what is still missing before ``step_id`` counts as complete.

    Args:
        step_id: Step to check
        state: Current workflow state

    Returns:
        User-facing error messages; empty when the step is complete.
    """
    if step_id is StepId.TEMPLATE:
        return _template_errors(state)
    if step_id is StepId.BLOCKS:
        return _block_errors(state)
    if step_id is StepId.WEEKLY_BUILDER:
        return _week_plan_errors(state)
    if step_id is StepId.EXERCISES:
        if not any(block.exercises for block in state.all_blocks()):
            return ["Add exercises to at least one block"]
        return []
    if step_id is StepId.NAME_SCHEDULE:
        return [] if state.metadata.has_name else ["Plan name is required"]
    if step_id is StepId.SCHEDULE:
        return [] if state.metadata.has_name else ["Workout name is required"]
    # Athlete assignment is optional
    return []


def is_step_complete(step_id: StepId, state: WorkflowState) -> bool:
    return not get_step_errors(step_id, state)


def describe_errors(errors: List[str]) -> str:
    """Join step errors into one notice message."""
    if not errors:
        return "Please complete the current step before proceeding."
    return ". ".join(errors) + "."


def _template_errors(state: WorkflowState) -> List[str]:
    errors: List[str] = []
    if state.artifact_type is None:
        errors.append("Please select a workout type")
    # A name typed before picking anything counts as starting from scratch;
    # in edit mode the choice was made when the artifact was created
    if not state.is_editing and not state.template_choice and not state.metadata.has_name:
        errors.append("Please choose a starting template")
    return errors


def _block_errors(state: WorkflowState) -> List[str]:
    if state.artifact_type is ArtifactType.WEEKLY:
        if not state.all_blocks():
            return ["Add workout blocks to at least one day"]
        return []
    if not state.all_blocks():
        return ["Add at least one workout block"]
    return []


def _week_plan_errors(state: WorkflowState) -> List[str]:
    errors: List[str] = []
    training_weeks = [week for week in state.week_plan if not week.is_rest_week]
    if not any(week.has_workout for week in training_weeks):
        errors.append("Select at least one weekly workout template")

    for week in sorted(training_weeks, key=lambda w: w.week_number):
        if not week.has_workout:
            errors.append(
                f"Week {week.week_number} needs a weekly workout or must be marked as a rest week"
            )
    return errors
