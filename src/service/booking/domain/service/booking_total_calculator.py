from abc import ABC, abstractmethod
from typing import Sequence

from src.service.shared_kernel.domain.value_object.line_item import LineItem


class BookingTotalCalculator(ABC):
    """Abstract interface for turning line items into a booking total"""

    @abstractmethod
    def calculate(self, line_items: Sequence[LineItem]) -> int:
        """Return the running total for the given line items"""
        pass


class LineItemSumCalculator(BookingTotalCalculator):
    """Plain sum of line-item prices, no add-ons or discounts"""

    def calculate(self, line_items: Sequence[LineItem]) -> int:
        return sum(item.price for item in line_items)
