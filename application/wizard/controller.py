"""
WorkflowController: one builder-wizard session.

Owns a WorkflowState and is the only thing that mutates it. Navigation is
gated by the step validation rules, block and week edits are delegated to
BlockStore / WeekPlanStore, and the final save runs SaveArtifactUseCase.
Every user-facing outcome is published on the controller's NoticeChannel.
"""

import functools
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterable, Iterator, List, Optional, Union

from application.exceptions import SaveInProgressError, SaveNotAllowedError
from application.use_cases.save_artifact import SaveArtifactResult, SaveArtifactUseCase
from application.wizard.notices import NoticeChannel
from domain.models import (
    DEFAULT_PLAN_WEEKS,
    MAX_PLAN_WEEKS,
    ArtifactMetadata,
    ArtifactType,
    Block,
    Exercise,
    FlatBlocks,
    SaveAction,
    StepDescriptor,
    WeekPlanEntry,
    Weekday,
    WorkflowState,
)
from domain.services import (
    BlockStore,
    BlockStoreError,
    WeekPlanError,
    WeekPlanStore,
    clamp_step_index,
    describe_errors,
    get_step_errors,
    sequence,
)
from domain.services.starter_templates import (
    default_artifact_name,
    is_known_template,
    starter_blocks,
)

logger = logging.getLogger(__name__)


def _synchronized(method):
    """Run a state-mutating controller method under the controller's state lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._state_lock:
            return method(self, *args, **kwargs)

    return wrapper


class WorkflowController:
    """
    Drives one wizard session from template choice to save.

    Usage:
        >>> controller = WorkflowController(save_use_case)
        >>> controller.select_artifact_type(ArtifactType.SINGLE)
        >>> controller.select_template("strength")
        >>> controller.next()
        True
    """

    def __init__(
        self,
        save_use_case: SaveArtifactUseCase,
        *,
        state: Optional[WorkflowState] = None,
        role: Optional[str] = None,
        user_id: Optional[str] = None,
        notices: Optional[NoticeChannel] = None,
        max_plan_weeks: int = MAX_PLAN_WEEKS,
        default_plan_weeks: int = DEFAULT_PLAN_WEEKS,
        today: Optional[date] = None,
    ) -> None:
        self._save_use_case = save_use_case
        self._state = state or WorkflowState()
        self._role = role
        self._user_id = user_id
        self._notices = notices or NoticeChannel()
        self._max_plan_weeks = max_plan_weeks
        self._default_plan_weeks = default_plan_weeks
        self._today = today
        # Saves run on a snapshot, so edits may continue while one is in flight
        self._state_lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._completed = False
        self._last_result: Optional[SaveArtifactResult] = None

    @classmethod
    def from_loaded_state(
        cls,
        state: WorkflowState,
        save_use_case: SaveArtifactUseCase,
        **kwargs,
    ) -> "WorkflowController":
        """
        Open the wizard on a stored artifact.

        Editing skips the template choice: the session starts on the second
        step with the first one already completed.
        """
        state.current_step_index = 1
        state.completed_step_indices = {0}
        controller = cls(save_use_case, state=state, **kwargs)
        controller.notices.info("Workout loaded for editing", f'Editing "{state.metadata.name}"')
        return controller

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def notices(self) -> NoticeChannel:
        return self._notices

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def steps(self) -> List[StepDescriptor]:
        return sequence(self._state.artifact_type, self._role)

    @property
    def current_step_index(self) -> int:
        return self._state.current_step_index

    @property
    def current_step(self) -> StepDescriptor:
        return self.steps[self._state.current_step_index]

    @property
    def is_last_step(self) -> bool:
        return self._state.current_step_index == len(self.steps) - 1

    @property
    def completed(self) -> bool:
        """True once a final save has succeeded."""
        return self._completed

    @property
    def is_saving(self) -> bool:
        return self._save_lock.locked()

    @property
    def last_result(self) -> Optional[SaveArtifactResult]:
        return self._last_result

    @property
    def block_store(self) -> BlockStore:
        return BlockStore(self._state)

    @property
    def week_plan_store(self) -> WeekPlanStore:
        return WeekPlanStore(self._state, self._max_plan_weeks)

    def current_errors(self) -> List[str]:
        return get_step_errors(self.current_step.id, self._state)

    def is_step_accessible(self, index: int) -> bool:
        """A step is reachable if it is not ahead of the cursor or its predecessor is done."""
        if not 0 <= index < len(self.steps):
            return False
        return index <= self._state.current_step_index or (index - 1) in self._state.completed_step_indices

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @_synchronized
    def next(self) -> bool:
        """
        Advance past the current step if it is complete.

        Returns:
            True if the step was completed (the cursor stays on the last
            step when already there), False if it was blocked.
        """
        errors = self.current_errors()
        if errors:
            self._notices.warning("Step incomplete", describe_errors(errors))
            logger.debug(f"Step {self.current_step.id.value} blocked: {errors}")
            return False

        index = self._state.current_step_index
        self._state.completed_step_indices.add(index)
        self._state.current_step_index = clamp_step_index(index + 1, self.steps)
        return True

    @_synchronized
    def previous(self) -> bool:
        index = self._state.current_step_index
        self._state.current_step_index = max(0, index - 1)
        return self._state.current_step_index != index

    @_synchronized
    def jump_to(self, index: int) -> bool:
        """Move the cursor to ``index`` if that step is accessible; otherwise do nothing."""
        if not self.is_step_accessible(index):
            return False
        self._state.current_step_index = index
        return True

    # -------------------------------------------------------------------------
    # Template step
    # -------------------------------------------------------------------------

    @_synchronized
    def select_artifact_type(self, artifact_type: ArtifactType) -> bool:
        """
        Switch the artifact type, discarding type-specific content.

        Metadata and athlete selection are kept. An artifact opened for
        editing keeps its type.
        """
        if artifact_type is self._state.artifact_type:
            return True
        if self._state.is_editing:
            self._notices.warning(
                "Type cannot change",
                f"This {self._state.artifact_type.value} artifact already exists; "
                "create a new one instead",
            )
            return False

        self._state.reset_for(artifact_type, self._default_plan_weeks)
        self._state.current_step_index = 0
        return True

    @_synchronized
    def select_template(self, choice: str) -> bool:
        """
        Pick a starter template (or 'scratch').

        Templates with predefined blocks replace the block list with fresh
        copies; an empty name is filled with a suggested one.
        """
        if not is_known_template(choice):
            self._notices.warning("Unknown template", f"No starter template named '{choice}'")
            return False

        self._state.template_choice = choice
        blocks = starter_blocks(choice)
        if blocks and isinstance(self._state.block_state, FlatBlocks):
            self._state.block_state = FlatBlocks(blocks=blocks)

        if not self._state.metadata.has_name:
            self._state.metadata.name = default_artifact_name(
                choice, self._state.artifact_type, self._today
            )
        return True

    # -------------------------------------------------------------------------
    # Schedule and athletes
    # -------------------------------------------------------------------------

    @_synchronized
    def update_metadata(self, **fields) -> ArtifactMetadata:
        """Update name/schedule fields; values are validated like on load."""
        merged = {**self._state.metadata.model_dump(), **fields}
        self._state.metadata = ArtifactMetadata(**merged)
        return self._state.metadata

    @_synchronized
    def set_athletes(self, athlete_ids: Iterable[str]) -> None:
        self._state.selected_athlete_ids = {athlete_id for athlete_id in athlete_ids if athlete_id}

    @_synchronized
    def toggle_athlete(self, athlete_id: str) -> bool:
        selected = self._state.selected_athlete_ids
        if athlete_id in selected:
            selected.discard(athlete_id)
            return False
        selected.add(athlete_id)
        return True

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    @_synchronized
    def update_blocks(self, blocks: List[Block], day: Optional[Weekday] = None) -> None:
        self.block_store.update_blocks(blocks, day)

    @_synchronized
    def select_day(self, day: Weekday) -> bool:
        try:
            self.block_store.select_day(day)
        except BlockStoreError as e:
            return self._reject("Cannot select day", e)
        return True

    @_synchronized
    def add_block(self, block: Block, day: Optional[Weekday] = None) -> Block:
        return self.block_store.add_block(block, day)

    @_synchronized
    def remove_block(self, block_id: str, day: Optional[Weekday] = None) -> bool:
        try:
            self.block_store.remove_block(block_id, day)
        except BlockStoreError as e:
            return self._reject("Cannot remove block", e)
        return True

    @_synchronized
    def add_exercise(self, block_id: str, exercise: Exercise) -> bool:
        try:
            self.block_store.add_exercise(block_id, exercise)
        except BlockStoreError as e:
            return self._reject("Cannot add exercise", e)
        return True

    @_synchronized
    def remove_exercise(self, block_id: str, exercise_id: str) -> bool:
        try:
            self.block_store.remove_exercise(block_id, exercise_id)
        except BlockStoreError as e:
            return self._reject("Cannot remove exercise", e)
        return True

    @_synchronized
    def copy_day(self, from_day: Weekday, to_day: Weekday) -> int:
        """Copy one day's blocks onto another; returns the number copied."""
        try:
            copied = self.block_store.copy_day(from_day, to_day)
        except BlockStoreError as e:
            self._reject("Cannot copy day", e)
            return 0

        if copied == 0:
            self._notices.warning("Nothing to copy", f"{from_day.label} has no blocks to copy")
            return 0

        self._notices.success(
            "Day copied successfully",
            f"Copied {copied} block(s) from {from_day.label} to {to_day.label}",
        )
        return copied

    @_synchronized
    def toggle_rest_day(self, day: Weekday) -> Optional[bool]:
        try:
            return self.block_store.toggle_rest_day(day)
        except BlockStoreError as e:
            self._reject("Cannot change rest day", e)
            return None

    # -------------------------------------------------------------------------
    # Monthly weeks
    # -------------------------------------------------------------------------

    @_synchronized
    def update_week(
        self,
        week_number: int,
        field: str,
        value: Union[str, bool],
    ) -> Optional[WeekPlanEntry]:
        try:
            return self.week_plan_store.update_entry(week_number, field, value)
        except WeekPlanError as e:
            self._reject("Cannot update week", e)
            return None

    @_synchronized
    def add_week(self) -> Optional[WeekPlanEntry]:
        try:
            return self.week_plan_store.add_week()
        except WeekPlanError as e:
            self._reject("Cannot add week", e)
            return None

    @_synchronized
    def remove_week(self, week_number: int) -> bool:
        try:
            self.week_plan_store.remove_week(week_number)
        except WeekPlanError as e:
            return self._reject("Cannot remove week", e)
        return True

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def save(
        self,
        action: SaveAction = SaveAction.SAVE,
        save_use_case: Optional[SaveArtifactUseCase] = None,
    ) -> SaveArtifactResult:
        """
        Run the final save.

        Every step must be completed and still valid. The artifact is saved
        from a copy of the state taken once those checks pass.

        Args:
            action: Plain save, save as template, or save as draft
            save_use_case: Use case to run instead of the one the controller
                was built with

        Raises:
            SaveNotAllowedError: not on the last step, a step is incomplete,
                or the session was already saved
            SaveInProgressError: another save of this session is running
        """
        if action is SaveAction.SAVE_DRAFT:
            return self.save_draft(save_use_case)

        with self._saving():
            with self._state_lock:
                if self._completed:
                    raise SaveNotAllowedError("This wizard session has already been saved")
                if not self.is_last_step:
                    raise SaveNotAllowedError(
                        f"Save is only available on the last step ({self.steps[-1].title})"
                    )
                errors = self._outstanding_errors()
                if errors:
                    self._notices.warning("Step incomplete", describe_errors(errors))
                    raise SaveNotAllowedError("Complete every step before saving")
                snapshot = self._state.model_copy(deep=True)

            result = self._execute(snapshot, action, save_use_case)
            type_label = "Monthly plan" if snapshot.artifact_type is ArtifactType.MONTHLY else "Workout"

            if not result.success:
                self._notices.error(f"Error saving {type_label.lower()}", result.error or "Please try again")
                return result

            self._completed = True

        if action is SaveAction.SAVE_TEMPLATE or snapshot.metadata.is_template:
            detail = "Saved as template for future use"
        elif result.assigned_athlete_count:
            detail = f"Assigned to {result.assigned_athlete_count} athlete(s)"
        else:
            detail = "Successfully saved"
        self._notices.success(f"{type_label} {'updated' if result.is_update else 'created'}!", detail)
        for warning in result.warnings:
            self._notices.warning("Saved with warnings", warning)
        return result

    def save_draft(self, save_use_case: Optional[SaveArtifactUseCase] = None) -> SaveArtifactResult:
        """Park the current single/weekly workout as a draft; allowed from any step."""
        with self._saving():
            with self._state_lock:
                snapshot = self._state.model_copy(deep=True)
            result = self._execute(snapshot, SaveAction.SAVE_DRAFT, save_use_case)

        if result.success:
            self._notices.success(
                "Draft saved!",
                f'"{snapshot.metadata.name}" has been saved as a draft. '
                "You can continue editing or find it in your drafts later.",
            )
        else:
            self._notices.error("Error saving draft", result.error or "Please try again")
        return result

    @contextmanager
    def _saving(self) -> Iterator[None]:
        if not self._save_lock.acquire(blocking=False):
            raise SaveInProgressError("A save is already in progress for this session")
        try:
            yield
        finally:
            self._save_lock.release()

    def _outstanding_errors(self) -> List[str]:
        """Errors of every step, plus earlier steps that were never completed."""
        errors: List[str] = []
        steps = self.steps
        for index, step in enumerate(steps):
            step_errors = get_step_errors(step.id, self._state)
            if step_errors:
                errors.extend(step_errors)
            elif index < len(steps) - 1 and index not in self._state.completed_step_indices:
                errors.append(f"Please complete the {step.title} step")
        return errors

    def _execute(
        self,
        snapshot: WorkflowState,
        action: SaveAction,
        save_use_case: Optional[SaveArtifactUseCase],
    ) -> SaveArtifactResult:
        use_case = save_use_case or self._save_use_case
        result = use_case.execute(
            snapshot,
            action=action,
            assigned_by=self._user_id,
            today=self._today,
        )
        self._last_result = result
        return result

    def _reject(self, title: str, error: Exception) -> bool:
        logger.warning(f"{title}: {error}")
        self._notices.warning(title, str(error))
        return False
