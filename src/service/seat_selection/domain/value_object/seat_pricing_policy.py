"""Seat pricing policy value object."""

from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Mapping

import attrs

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.enum.seat_category import SeatCategory


DEFAULT_MULTIPLIERS: Mapping[SeatCategory, Decimal] = MappingProxyType(
    {
        SeatCategory.ORDINARY: Decimal('1'),
        SeatCategory.PREMIUM: Decimal('1.5'),
        SeatCategory.COUPLE: Decimal('2'),
        SeatCategory.ACCESSIBLE: Decimal('1'),
    }
)


def _to_multiplier_table(value: Mapping[SeatCategory, Decimal | int | str]) -> Mapping:
    table = {SeatCategory(category): Decimal(str(multiplier)) for category, multiplier in value.items()}
    return MappingProxyType(table)


@attrs.define(frozen=True)
class SeatPricingPolicy:
    """
    Category -> price multiplier table (Value Object).

    Categories missing from the table are priced at the base price.
    """

    multipliers: Mapping[SeatCategory, Decimal] = attrs.field(
        default=DEFAULT_MULTIPLIERS, converter=_to_multiplier_table
    )

    @multipliers.validator
    def _check_multipliers(self, _attribute: attrs.Attribute, value: Mapping) -> None:
        for category, multiplier in value.items():
            if multiplier < 0:
                raise DomainError(f'Price multiplier for {category} cannot be negative', 400)

    @classmethod
    def from_settings(cls, settings: Settings) -> 'SeatPricingPolicy':
        return cls(
            multipliers={
                SeatCategory.ORDINARY: Decimal('1'),
                SeatCategory.PREMIUM: settings.PREMIUM_MULTIPLIER,
                SeatCategory.COUPLE: settings.COUPLE_MULTIPLIER,
                SeatCategory.ACCESSIBLE: settings.ACCESSIBLE_MULTIPLIER,
            }
        )

    def multiplier_for(self, category: SeatCategory) -> Decimal:
        return self.multipliers.get(category, Decimal('1'))

    def price_for(self, category: SeatCategory, base_price: int) -> int:
        price = Decimal(base_price) * self.multiplier_for(category)
        return int(price.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
