from decimal import Decimal
from typing import Optional

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_transition import DEFAULT_CONFIRMED_REFUND_RATE
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.service.booking_total_calculator import BookingTotalCalculator
from src.service.seat_selection.app.seat_selection_session import SeatSelectionSession


class CreateBookingFromSelectionUseCase:
    """
    Create a Draft booking from the seats currently selected in a session

    Flow:
    1. Read the session's own selected seats (selection order)
    2. Create a Draft booking holding them on behalf of the session
    3. Add one line item per seat at the seat's price

    The seats stay SELECTED in the registry; they are booked only when the
    paid booking is confirmed.
    """

    def __init__(
        self,
        *,
        session: SeatSelectionSession,
        total_calculator: Optional[BookingTotalCalculator] = None,
        confirmed_refund_rate: Decimal = DEFAULT_CONFIRMED_REFUND_RATE,
    ) -> None:
        self.session = session
        self.total_calculator = total_calculator
        self.confirmed_refund_rate = confirmed_refund_rate

    @Logger.io
    def execute(self, *, customer_name: str, movie_title: str) -> Booking:
        seats = self.session.selected_seats()
        if not seats:
            raise DomainError('No seats selected for booking', 400)

        booking = Booking.create(
            customer_name=customer_name,
            movie_title=movie_title,
            total_calculator=self.total_calculator,
            confirmed_refund_rate=self.confirmed_refund_rate,
            seat_holder=self.session.holder_id,
        )
        for seat in seats:
            booking.add_seat(seat.code, seat.price)

        Logger.base.info(
            f'Booking {booking.id} created for {customer_name}: '
            f'{", ".join(booking.seat_codes())} (total {booking.total_amount})'
        )
        return booking
