"""Shared Kernel Value Objects"""

from src.service.shared_kernel.domain.value_object.line_item import LineItem
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode

__all__ = ['LineItem', 'SeatCode']
