from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.value_object.transition_result import TransitionResult
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry


class CancelBookingUseCase:
    """Cancel a booking and release its seats that are still only selected"""

    def __init__(self, *, registry: SeatRegistry) -> None:
        self.registry = registry

    @Logger.io
    def execute(self, *, booking: Booking) -> TransitionResult:
        result = booking.cancel()
        if not result:
            return result

        if released := self.registry.release(booking.seat_codes(), holder=booking.seat_holder):
            Logger.base.info(f'[Booking {booking.id}] Released seats: {", ".join(released)}')
        return result
