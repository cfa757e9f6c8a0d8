from typing import Optional

import attrs

from src.service.booking.domain.enum.booking_state import BookingState


@attrs.define(frozen=True)
class TransitionResult:
    """
    Informational outcome of a lifecycle operation

    Illegal operations are not faults: they come back with accepted=False
    and a human-readable reason, and the booking is left untouched.
    """

    accepted: bool
    state: BookingState
    reason: Optional[str] = None
    refund_amount: Optional[int] = None

    def __bool__(self) -> bool:
        return self.accepted
