"""Shared Kernel Enums"""

from src.service.shared_kernel.domain.enum.seat_category import SeatCategory
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus

__all__ = ['SeatCategory', 'SeatStatus']
