"""
Seat Registry - Aggregate Root for the seats of one showing

[Business Invariants]
- Seat status only moves available -> selected -> booked, or selected -> available
- Booked is terminal for a seat
- A selected seat remembers its holder until it is deselected or booked
- Only the registry replaces seat records; queries hand out frozen Seat records
"""

from typing import Iterable, List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.domain.entity.seat_entity import Seat
from src.service.seat_selection.domain.value_object.seat_layout_policy import SeatLayoutPolicy
from src.service.seat_selection.domain.value_object.seat_pricing_policy import SeatPricingPolicy
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.value_object.seat_code import ROW_LABELS, SeatCode


@attrs.define
class SeatRegistry:
    showing_id: str
    pricing_policy: SeatPricingPolicy = attrs.field(factory=SeatPricingPolicy)
    layout_policy: SeatLayoutPolicy = attrs.field(factory=SeatLayoutPolicy)
    rows: int = attrs.field(default=0, init=False)
    columns: int = attrs.field(default=0, init=False)
    _seats: dict[str, Seat] = attrs.field(factory=dict, init=False, repr=False)
    # Insertion ordered: selected seat code -> holder, in selection order
    _selected: dict[str, Optional[str]] = attrs.field(factory=dict, init=False, repr=False)

    @Logger.io
    def initialize(
        self,
        rows: int,
        columns: int,
        base_price: int,
        *,
        prebooked: Iterable[str | SeatCode] = (),
        unavailable: Iterable[str | SeatCode] = (),
    ) -> None:
        """
        Build the seat grid for this showing

        Replaces any previous grid and clears the selection.

        Args:
            rows: Number of rows, labelled A..Z
            columns: Seats per row, numbered from 1
            base_price: Price of an ordinary seat
            prebooked: Seats already booked before selection opens
            unavailable: Seats that can never be selected (broken, blocked)
        """
        if not 1 <= rows <= len(ROW_LABELS):
            raise DomainError(f'Rows must be between 1 and {len(ROW_LABELS)}', 400)
        if columns < 1:
            raise DomainError('Seats per row must be at least 1', 400)
        if base_price < 0:
            raise DomainError('Base price cannot be negative', 400)

        prebooked_codes = {SeatCode.parse(code).code for code in prebooked}
        unavailable_codes = {SeatCode.parse(code).code for code in unavailable}
        if overlap := prebooked_codes & unavailable_codes:
            raise DomainError(
                f'Seats cannot be both booked and unavailable: {", ".join(sorted(overlap))}', 400
            )

        seats: dict[str, Seat] = {}
        for row_index in range(rows):
            for number in range(1, columns + 1):
                seat_code = SeatCode.from_position(row_index=row_index, number=number)
                category = self.layout_policy.category_for(seat_code, rows=rows, columns=columns)
                status = SeatStatus.AVAILABLE
                if seat_code.code in prebooked_codes:
                    status = SeatStatus.BOOKED
                elif seat_code.code in unavailable_codes:
                    status = SeatStatus.UNAVAILABLE
                seats[seat_code.code] = Seat(
                    id=f'{self.showing_id}-{seat_code.code}',
                    seat_code=seat_code,
                    category=category,
                    price=self.pricing_policy.price_for(category, base_price),
                    status=status,
                )

        if unknown := (prebooked_codes | unavailable_codes) - seats.keys():
            raise DomainError(
                f'Seats not part of the layout: {", ".join(sorted(unknown))}', 400
            )

        self.rows = rows
        self.columns = columns
        self._seats = seats
        self._selected = {}
        Logger.base.info(
            f'Initialized {len(seats)} seats for showing {self.showing_id} '
            f'({len(prebooked_codes)} booked, {len(unavailable_codes)} unavailable)'
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    @Logger.io
    def select(self, code: str | SeatCode, *, holder: Optional[str] = None) -> bool:
        """Select an available seat, on behalf of holder when one is given"""
        seat = self._lookup(code)
        if seat is None:
            Logger.base.info(f'Seat {code} not found in showing {self.showing_id}')
            return False
        if seat.status != SeatStatus.AVAILABLE:
            Logger.base.info(f'Seat {seat.code} is not available (status: {seat.status})')
            return False

        self._seats[seat.code] = seat.with_status(SeatStatus.SELECTED)
        self._selected[seat.code] = holder
        Logger.base.info(f'Seat {seat.code} selected')
        return True

    @Logger.io
    def deselect(self, code: str | SeatCode) -> bool:
        seat = self._lookup(code)
        if seat is None:
            Logger.base.info(f'Seat {code} not found in showing {self.showing_id}')
            return False
        if seat.status != SeatStatus.SELECTED:
            Logger.base.info(f'Seat {seat.code} is not selected (status: {seat.status})')
            return False

        self._seats[seat.code] = seat.with_status(SeatStatus.AVAILABLE)
        self._selected.pop(seat.code, None)
        Logger.base.info(f'Seat {seat.code} deselected')
        return True

    @Logger.io
    def confirm(self, codes: Iterable[str | SeatCode], *, holder: Optional[str] = None) -> bool:
        """
        Book the given seats, all or nothing

        Every code must currently be selected, on behalf of holder when one is
        given; otherwise nothing changes.
        """
        seat_codes = [SeatCode.parse(code).code for code in codes]
        if not seat_codes:
            Logger.base.info('No seats to confirm')
            return False

        for seat_code in seat_codes:
            seat = self._seats.get(seat_code)
            if seat is None or seat.status != SeatStatus.SELECTED:
                Logger.base.info(f'Booking failed: seat {seat_code} is not selected')
                return False
            if holder is not None and self._selected.get(seat_code) != holder:
                Logger.base.info(f'Booking failed: seat {seat_code} is held by another session')
                return False

        for seat_code in seat_codes:
            self._seats[seat_code] = self._seats[seat_code].with_status(SeatStatus.BOOKED)
            self._selected.pop(seat_code, None)

        Logger.base.info(f'{len(set(seat_codes))} seats booked for showing {self.showing_id}')
        return True

    def confirm_selected(self) -> bool:
        """Book every currently selected seat"""
        return self.confirm(list(self._selected))

    @Logger.io
    def release(
        self, codes: Iterable[str | SeatCode], *, holder: Optional[str] = None
    ) -> List[str]:
        """
        Deselect the given seats that are still selected by holder

        Seats booked, already released or held by someone else are left alone.

        Returns:
            The released seat codes
        """
        released = []
        for code in codes:
            seat_code = SeatCode.parse(code).code
            if seat_code in self._selected and self._selected[seat_code] == holder:
                self.deselect(seat_code)
                released.append(seat_code)
        return released

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_seat(self, code: str | SeatCode) -> Optional[Seat]:
        return self._lookup(code)

    def status_of(self, code: str | SeatCode) -> Optional[SeatStatus]:
        seat = self._lookup(code)
        return seat.status if seat else None

    def is_available(self, code: str | SeatCode) -> bool:
        seat = self._lookup(code)
        return seat is not None and seat.is_available()

    def all_seats(self) -> List[Seat]:
        return list(self._seats.values())

    def available_seats(self) -> List[Seat]:
        return [seat for seat in self._seats.values() if seat.status == SeatStatus.AVAILABLE]

    def selected_seats(self) -> List[Seat]:
        return [self._seats[code] for code in self._selected]

    def selected_codes(self, *, holder: Optional[str] = None) -> List[str]:
        """Selected seat codes in selection order, only holder's when one is given"""
        if holder is None:
            return list(self._selected)
        return [code for code, seat_holder in self._selected.items() if seat_holder == holder]

    def holder_of(self, code: str | SeatCode) -> Optional[str]:
        return self._selected.get(SeatCode.parse(code).code)

    def selected_total(self) -> int:
        # Couple seats are already priced for two
        return sum(seat.price for seat in self.selected_seats())

    @property
    def capacity(self) -> int:
        return len(self._seats)

    def _lookup(self, code: str | SeatCode) -> Optional[Seat]:
        return self._seats.get(SeatCode.parse(code).code)
