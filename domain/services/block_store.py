"""
Block store: mutation operations over the wizard's block container.

Single workouts keep one flat list of blocks; weekly plans keep one list per
weekday plus a set of rest days. Every operation touches only the container
(or day) it addresses.
"""

import logging
from typing import List, Optional

from domain.models import Block, DayBlocks, Exercise, FlatBlocks, Weekday, WorkflowState

logger = logging.getLogger(__name__)


class BlockStoreError(ValueError):
    """Raised when a block operation cannot be applied."""


class BlockStore:
    """
    Block operations bound to one WorkflowState.

    Usage:
        >>> store = BlockStore(state)
        >>> store.update_blocks([Block(name="Main")], day=Weekday.TUESDAY)
        >>> store.copy_day(Weekday.TUESDAY, Weekday.WEDNESDAY)
        1
    """

    def __init__(self, state: WorkflowState) -> None:
        self._state = state

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def is_weekly(self) -> bool:
        return isinstance(self._state.block_state, DayBlocks)

    def _day_map(self) -> DayBlocks:
        container = self._state.block_state
        if not isinstance(container, DayBlocks):
            raise BlockStoreError("Day operations are only available for weekly plans")
        return container

    def blocks_for(self, day: Optional[Weekday] = None) -> List[Block]:
        """Blocks of the flat list, or of ``day`` (default: current day)."""
        container = self._state.block_state
        if isinstance(container, FlatBlocks):
            return container.blocks
        return container.days[day or container.current_day]

    def all_blocks(self) -> List[Block]:
        return self._state.all_blocks()

    @property
    def current_day(self) -> Optional[Weekday]:
        container = self._state.block_state
        return container.current_day if isinstance(container, DayBlocks) else None

    def select_day(self, day: Weekday) -> None:
        self._day_map().current_day = day

    # -------------------------------------------------------------------------
    # Block list mutations
    # -------------------------------------------------------------------------

    def update_blocks(self, new_blocks: List[Block], day: Optional[Weekday] = None) -> None:
        """
        Replace the addressed block list.

        For weekly plans only the addressed day's bucket changes (default:
        the current day). Putting blocks on a rest day makes it a training
        day again. For single workouts the flat list is replaced.
        """
        container = self._state.block_state
        if isinstance(container, FlatBlocks):
            container.blocks = list(new_blocks)
            return

        target = day or container.current_day
        container.days[target] = list(new_blocks)
        if new_blocks and target in container.rest_days:
            container.rest_days.discard(target)

    def add_block(self, block: Block, day: Optional[Weekday] = None) -> Block:
        blocks = list(self.blocks_for(day))
        blocks.append(block)
        self.update_blocks(blocks, day)
        return block

    def remove_block(self, block_id: str, day: Optional[Weekday] = None) -> None:
        blocks = self.blocks_for(day)
        remaining = [block for block in blocks if block.id != block_id]
        if len(remaining) == len(blocks):
            raise BlockStoreError(f"Block {block_id} not found")
        self.update_blocks(remaining, day)

    def find_block(self, block_id: str) -> Block:
        for block in self.all_blocks():
            if block.id == block_id:
                return block
        raise BlockStoreError(f"Block {block_id} not found")

    def add_exercise(self, block_id: str, exercise: Exercise) -> Exercise:
        self.find_block(block_id).exercises.append(exercise)
        return exercise

    def remove_exercise(self, block_id: str, exercise_id: str) -> None:
        block = self.find_block(block_id)
        remaining = [ex for ex in block.exercises if ex.id != exercise_id]
        if len(remaining) == len(block.exercises):
            raise BlockStoreError(f"Exercise {exercise_id} not found in block {block_id}")
        block.exercises = remaining

    # -------------------------------------------------------------------------
    # Weekly day operations
    # -------------------------------------------------------------------------

    def copy_day(self, from_day: Weekday, to_day: Weekday) -> int:
        """
        Copy every block of ``from_day`` into ``to_day``.

        Copies get new ids for each block and exercise, so later edits on
        one day never leak into the other. The target day stops being a
        rest day. Existing blocks on the target day are replaced.

        Returns:
            Number of blocks copied (0 when the source day is empty, in
            which case nothing changes).

        Raises:
            BlockStoreError: if ``from_day`` and ``to_day`` are the same day
        """
        if from_day == to_day:
            raise BlockStoreError("Cannot copy a day onto itself")

        container = self._day_map()
        source = container.days[from_day]
        if not source:
            return 0

        container.days[to_day] = [block.copy_with_new_ids() for block in source]
        container.rest_days.discard(to_day)
        logger.info(f"Copied {len(source)} block(s) from {from_day.value} to {to_day.value}")
        return len(source)

    def toggle_rest_day(self, day: Weekday) -> bool:
        """
        Flip the rest flag of ``day``.

        Marking a day as rest empties its block list in the same step.

        Returns:
            True if the day is now a rest day.
        """
        container = self._day_map()
        if day in container.rest_days:
            container.rest_days.discard(day)
            return False

        container.rest_days.add(day)
        container.days[day] = []
        return True
