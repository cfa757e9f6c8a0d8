from src.service.seat_selection.domain.value_object.seat_layout_policy import SeatLayoutPolicy
from src.service.seat_selection.domain.value_object.seat_pricing_policy import SeatPricingPolicy

__all__ = ['SeatLayoutPolicy', 'SeatPricingPolicy']
