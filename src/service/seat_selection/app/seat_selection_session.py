"""
Seat Selection Session

One user's seat-selection workspace on one showing: a SeatRegistry plus the
CommandHistory of that user's selections. Every seat mutation goes through a
command so it can be undone and redone.

The registry is shared with the other sessions of the showing. Seats are
selected on behalf of the session's holder_id, so selected_seats,
selected_total and confirm_selection only ever see this session's seats, and
deselect_seat refuses seats another session holds.

Not safe for concurrent use; callers serialize access per session.
"""

from typing import Iterable, List, Optional

import uuid_utils

from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.dto.batch_selection_result import BatchSelectionResult
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry
from src.service.seat_selection.domain.command.command_history import (
    CommandHistory,
    CommandHistoryEntry,
)
from src.service.seat_selection.domain.command.seat_command import (
    DeselectSeatCommand,
    SelectSeatBatchCommand,
    SelectSeatCommand,
)
from src.service.seat_selection.domain.entity.seat_entity import Seat
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode


class SeatSelectionSession:
    def __init__(
        self,
        *,
        registry: SeatRegistry,
        history: Optional[CommandHistory] = None,
        holder_id: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.command_history = history if history is not None else CommandHistory()
        self.holder_id = holder_id or str(uuid_utils.uuid7())

    @Logger.io
    def initialize_for_showing(
        self,
        rows: int,
        columns: int,
        base_price: int,
        *,
        prebooked: Iterable[str | SeatCode] = (),
        unavailable: Iterable[str | SeatCode] = (),
    ) -> None:
        self.registry.initialize(
            rows, columns, base_price, prebooked=prebooked, unavailable=unavailable
        )
        self.command_history.clear()

    def select_seat(self, code: str | SeatCode) -> bool:
        return self.command_history.execute_command(
            SelectSeatCommand(registry=self.registry, seat_code=code, holder=self.holder_id)
        )

    def deselect_seat(self, code: str | SeatCode) -> bool:
        # Seats another session holds are refused by the command itself
        return self.command_history.execute_command(
            DeselectSeatCommand(registry=self.registry, seat_code=code, holder=self.holder_id)
        )

    @Logger.io
    def select_seats(self, codes: Iterable[str | SeatCode]) -> BatchSelectionResult:
        command = SelectSeatBatchCommand(
            registry=self.registry, seat_codes=codes, holder=self.holder_id
        )
        self.command_history.execute_command(command)
        return BatchSelectionResult(
            requested=command.seat_codes, selected=tuple(command.selected_codes)
        )

    def undo(self) -> bool:
        return self.command_history.undo()

    def redo(self) -> bool:
        return self.command_history.redo()

    def can_undo(self) -> bool:
        return self.command_history.can_undo()

    def can_redo(self) -> bool:
        return self.command_history.can_redo()

    @Logger.io
    def confirm_selection(self) -> bool:
        """Book this session's selected seats, all or nothing"""
        return self.registry.confirm(self.selected_codes(), holder=self.holder_id)

    def selected_codes(self) -> List[str]:
        return self.registry.selected_codes(holder=self.holder_id)

    def selected_seats(self) -> List[Seat]:
        seats = (self.registry.get_seat(code) for code in self.selected_codes())
        return [seat for seat in seats if seat is not None]

    def selected_total(self) -> int:
        # Couple seats are already priced for two
        return sum(seat.price for seat in self.selected_seats())

    def history(self) -> List[CommandHistoryEntry]:
        return self.command_history.history()

    def recent_history(self, limit: int = 5) -> List[CommandHistoryEntry]:
        return self.command_history.recent(limit)
