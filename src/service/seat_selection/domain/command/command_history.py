"""
Command History - undo/redo stacks for seat commands

[Business Invariants]
- Executing a new command clears the redo stack (no redo after a fork)
- The undo stack never holds more than max_size commands; the oldest go first
- A command whose undo or redo fails is dropped, never requeued
"""

from datetime import datetime
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.domain.command.seat_command import (
    SeatCommand,
    SelectSeatBatchCommand,
    apply_command,
    describe_command,
    reverse_command,
)


DEFAULT_MAX_HISTORY_SIZE = 50


@attrs.define(frozen=True)
class CommandHistoryEntry:
    description: str
    executed_at: Optional[datetime]


def _validate_max_size(_instance: object, _attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise DomainError('History size must be at least 1', 400)


@attrs.define
class CommandHistory:
    max_size: int = attrs.field(default=DEFAULT_MAX_HISTORY_SIZE, validator=_validate_max_size)
    _undo_stack: List[SeatCommand] = attrs.field(factory=list, init=False, repr=False)
    _redo_stack: List[SeatCommand] = attrs.field(factory=list, init=False, repr=False)

    @Logger.io
    def execute_command(self, command: SeatCommand) -> bool:
        if isinstance(command, SelectSeatBatchCommand) and not command.seat_codes:
            # Nothing requested, nothing to undo
            return True

        if not apply_command(command):
            return False

        self._undo_stack.append(command)
        if (overflow := len(self._undo_stack) - self.max_size) > 0:
            del self._undo_stack[:overflow]
        self._redo_stack.clear()
        return True

    @Logger.io
    def undo(self) -> bool:
        if not self._undo_stack:
            Logger.base.info('Nothing to undo')
            return False

        command = self._undo_stack.pop()
        Logger.base.info(f'Undoing: {describe_command(command)}')
        if not reverse_command(command):
            Logger.base.warning(f'Undo failed, dropping: {describe_command(command)}')
            return False

        self._redo_stack.append(command)
        return True

    @Logger.io
    def redo(self) -> bool:
        if not self._redo_stack:
            Logger.base.info('Nothing to redo')
            return False

        command = self._redo_stack.pop()
        Logger.base.info(f'Redoing: {describe_command(command)}')
        if not apply_command(command):
            Logger.base.warning(f'Redo failed, dropping: {describe_command(command)}')
            return False

        self._undo_stack.append(command)
        return True

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    def history(self) -> List[CommandHistoryEntry]:
        """Undoable commands, oldest first"""
        return [
            CommandHistoryEntry(description=describe_command(command), executed_at=command.executed_at)
            for command in self._undo_stack
        ]

    def recent(self, limit: int = 5) -> List[CommandHistoryEntry]:
        """The newest `limit` undoable commands, still oldest first"""
        if limit <= 0:
            return []
        return self.history()[-limit:]

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
        Logger.base.info('History cleared')
