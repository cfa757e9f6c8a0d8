from datetime import datetime
from typing import Optional

import attrs

from src.service.booking.domain.enum.booking_state import BookingState


@attrs.define(frozen=True)
class StateTransitionEntry:
    # None for the entry written when the booking is created
    from_state: Optional[BookingState]
    to_state: BookingState
    timestamp: datetime
