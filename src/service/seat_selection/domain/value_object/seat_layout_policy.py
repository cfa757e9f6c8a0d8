"""Seat layout policy value object."""

from typing import Iterable

import attrs

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.enum.seat_category import SeatCategory
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode


def _to_code_set(value: Iterable[str | SeatCode]) -> frozenset[str]:
    return frozenset(SeatCode.parse(code).code for code in value)


def _validate_non_negative(_instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise DomainError(f'{attribute.name} cannot be negative', 400)


@attrs.define(frozen=True)
class SeatLayoutPolicy:
    """
    Decides the category of every seat from its position (Value Object).

    Rules, first match wins:
    1. Codes listed in accessible_codes are accessible
    2. First and last couple_corner_width seats of the last row are couple seats
    3. The last premium_back_rows rows are premium
    4. Everything else is ordinary
    """

    premium_back_rows: int = attrs.field(default=2, validator=_validate_non_negative)
    couple_corner_width: int = attrs.field(default=2, validator=_validate_non_negative)
    accessible_codes: frozenset[str] = attrs.field(factory=frozenset, converter=_to_code_set)

    @classmethod
    def from_settings(cls, settings: Settings) -> 'SeatLayoutPolicy':
        return cls(
            premium_back_rows=settings.PREMIUM_BACK_ROWS,
            couple_corner_width=settings.COUPLE_CORNER_WIDTH,
        )

    def category_for(self, seat_code: SeatCode, *, rows: int, columns: int) -> SeatCategory:
        if seat_code.code in self.accessible_codes:
            return SeatCategory.ACCESSIBLE

        is_last_row = seat_code.row_index == rows - 1
        in_corner = (
            seat_code.number <= self.couple_corner_width
            or seat_code.number > columns - self.couple_corner_width
        )
        if is_last_row and self.couple_corner_width and in_corner:
            return SeatCategory.COUPLE

        if seat_code.row_index >= rows - self.premium_back_rows:
            return SeatCategory.PREMIUM

        return SeatCategory.ORDINARY
