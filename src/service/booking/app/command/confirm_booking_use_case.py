from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_state import BookingState
from src.service.booking.domain.value_object.transition_result import TransitionResult
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry


class ConfirmBookingUseCase:
    """
    Confirm a paid booking and book its seats

    Seats are booked first, all-or-nothing. When any of them cannot be
    booked the booking stays Paid and a rejected result is returned.
    """

    def __init__(self, *, registry: SeatRegistry) -> None:
        self.registry = registry

    @Logger.io
    def execute(self, *, booking: Booking) -> TransitionResult:
        if booking.state != BookingState.PAID:
            # Let the state machine explain why
            return booking.confirm()

        seat_codes = booking.seat_codes()
        if not self.registry.confirm(seat_codes, holder=booking.seat_holder):
            reason = f'Seats could not be booked: {", ".join(seat_codes)}'
            Logger.base.warning(f'[Booking {booking.id}] {reason}')
            return TransitionResult(accepted=False, state=booking.state, reason=reason)

        return booking.confirm()
