from src.service.booking.domain.enum.booking_state import BookingState

__all__ = ['BookingState']
