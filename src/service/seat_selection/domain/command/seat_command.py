"""
Seat Commands

Reified, reversible seat mutations. The set of command kinds is closed:
SeatCommand is a union of the three classes below and every operation on a
command dispatches with `match`, so adding a kind without handling it fails
type checking at the `assert_never` arms.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union, assert_never

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode


def _to_code(value: str | SeatCode) -> str:
    return SeatCode.parse(value).code


def _to_codes(value: object) -> Tuple[str, ...]:
    return tuple(SeatCode.parse(code).code for code in value)  # type: ignore[attr-defined]


@attrs.define
class SelectSeatCommand:
    registry: SeatRegistry = attrs.field(repr=False)
    seat_code: str = attrs.field(converter=_to_code)
    holder: Optional[str] = attrs.field(default=None, kw_only=True)
    executed: bool = attrs.field(default=False, init=False)
    executed_at: Optional[datetime] = attrs.field(default=None, init=False)


@attrs.define
class DeselectSeatCommand:
    registry: SeatRegistry = attrs.field(repr=False)
    seat_code: str = attrs.field(converter=_to_code)
    holder: Optional[str] = attrs.field(default=None, kw_only=True)
    executed: bool = attrs.field(default=False, init=False)
    executed_at: Optional[datetime] = attrs.field(default=None, init=False)


@attrs.define
class SelectSeatBatchCommand:
    """Select several seats as one undoable unit"""

    registry: SeatRegistry = attrs.field(repr=False)
    seat_codes: Tuple[str, ...] = attrs.field(converter=_to_codes)
    holder: Optional[str] = attrs.field(default=None, kw_only=True)
    # Seats this batch actually selected, in selection order
    selected_codes: List[str] = attrs.field(factory=list, init=False)
    # Seats the last undo released; a redo selects exactly these again
    applied_codes: List[str] = attrs.field(factory=list, init=False)
    executed: bool = attrs.field(default=False, init=False)
    executed_at: Optional[datetime] = attrs.field(default=None, init=False)

    @property
    def requested_count(self) -> int:
        return len(self.seat_codes)

    @property
    def is_fully_applied(self) -> bool:
        return self.executed and len(self.selected_codes) == len(self.seat_codes)


SeatCommand = Union[SelectSeatCommand, DeselectSeatCommand, SelectSeatBatchCommand]


def _mark_executed(command: SeatCommand) -> None:
    command.executed = True
    command.executed_at = datetime.now(timezone.utc)


def _holds(command: SeatCommand, code: str) -> bool:
    """Whether code is selected on behalf of the command's holder"""
    registry = command.registry
    if registry.status_of(code) != SeatStatus.SELECTED:
        return False
    if registry.holder_of(code) != command.holder:
        Logger.base.info(f'Seat {code} is held by another session')
        return False
    return True


@Logger.io
def apply_command(command: SeatCommand) -> bool:
    """
    Run the command against its registry once

    Returns:
        True when the registry changed. A batch counts as applied when at
        least one seat was selected; check is_fully_applied for the rest.
    """
    if command.executed:
        Logger.base.info(f'Already executed: {describe_command(command)}')
        return False

    match command:
        case SelectSeatCommand():
            success = command.registry.select(command.seat_code, holder=command.holder)
        case DeselectSeatCommand():
            success = _holds(command, command.seat_code) and command.registry.deselect(
                command.seat_code
            )
        case SelectSeatBatchCommand() if command.applied_codes:
            success = _redo_batch(command)
        case SelectSeatBatchCommand():
            command.selected_codes = [
                code
                for code in command.seat_codes
                if command.registry.select(code, holder=command.holder)
            ]
            success = bool(command.selected_codes)
            Logger.base.info(
                f'{len(command.selected_codes)}/{command.requested_count} seats selected'
            )
        case _:
            assert_never(command)

    if success:
        _mark_executed(command)
    return success


@Logger.io
def reverse_command(command: SeatCommand) -> bool:
    """Undo the effect of an executed command"""
    if not command.executed:
        Logger.base.info(f'Cannot undo - not executed: {describe_command(command)}')
        return False

    match command:
        case SelectSeatCommand():
            success = _holds(command, command.seat_code) and command.registry.deselect(
                command.seat_code
            )
        case DeselectSeatCommand():
            success = command.registry.select(command.seat_code, holder=command.holder)
        case SelectSeatBatchCommand():
            success = _reverse_batch(command)
        case _:
            assert_never(command)

    if success:
        command.executed = False
    return success


def _reverse_batch(command: SelectSeatBatchCommand) -> bool:
    # All or nothing: a seat booked or released since the batch ran blocks the whole undo
    registry = command.registry
    if blocked := [code for code in command.selected_codes if not _holds(command, code)]:
        Logger.base.info(f'Cannot undo batch, seats no longer selected: {", ".join(blocked)}')
        return False

    # Last selected, first deselected
    for code in reversed(command.selected_codes):
        registry.deselect(code)
    command.applied_codes, command.selected_codes = command.selected_codes, []
    return True


def _redo_batch(command: SelectSeatBatchCommand) -> bool:
    registry = command.registry
    if blocked := [code for code in command.applied_codes if not registry.is_available(code)]:
        Logger.base.info(f'Cannot redo batch, seats no longer available: {", ".join(blocked)}')
        return False

    for code in command.applied_codes:
        registry.select(code, holder=command.holder)
    command.selected_codes = list(command.applied_codes)
    return True


def describe_command(command: SeatCommand) -> str:
    match command:
        case SelectSeatCommand():
            return f'Select seat {command.seat_code}'
        case DeselectSeatCommand():
            return f'Deselect seat {command.seat_code}'
        case SelectSeatBatchCommand():
            return f'Select multiple seats: {", ".join(command.seat_codes)}'
        case _:
            assert_never(command)
