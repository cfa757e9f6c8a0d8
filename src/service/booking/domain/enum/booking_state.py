"""Booking State Enum"""

from enum import StrEnum


class BookingState(StrEnum):
    DRAFT = 'draft'
    PENDING = 'pending'
    PAID = 'paid'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def is_terminal(self) -> bool:
        return self in (BookingState.COMPLETED, BookingState.CANCELLED)
