from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_state import BookingState
from src.service.booking.domain.value_object.transition_result import TransitionResult
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry


class RefundBookingUseCase:
    """
    Refund a paid or confirmed booking

    A Paid booking never booked its seats, so the refund releases the ones it
    still holds. Seats of a Confirmed booking are booked and stay booked.
    """

    def __init__(self, *, registry: SeatRegistry) -> None:
        self.registry = registry

    @Logger.io
    def execute(self, *, booking: Booking) -> TransitionResult:
        was_paid = booking.state == BookingState.PAID
        result = booking.refund()
        if not result or not was_paid:
            return result

        if released := self.registry.release(booking.seat_codes(), holder=booking.seat_holder):
            Logger.base.info(f'[Booking {booking.id}] Released seats: {", ".join(released)}')
        return result
