"""
Seat Code Value Object

Seat Code Value Object - Shared Kernel
Used by both Seat Selection and Booking to refer to a seat in one showing
(row letter + seat number, e.g. A1, C12)
"""

import re
import string

import attrs

from src.platform.exception.exceptions import InvalidSeatCodeError


ROW_LABELS = string.ascii_uppercase

_SEAT_CODE_PATTERN = re.compile(r'([A-Z])([1-9][0-9]*)')


@attrs.define(frozen=True, order=True)
class SeatCode:
    """Seat Code (Value Object)"""

    row: str
    number: int

    @property
    def code(self) -> str:
        return f'{self.row}{self.number}'

    @property
    def row_index(self) -> int:
        """Zero-based row index, A -> 0"""
        return ROW_LABELS.index(self.row)

    @classmethod
    def parse(cls, raw: 'str | SeatCode') -> 'SeatCode':
        """Create seat code from its string form, case-insensitive"""
        if isinstance(raw, SeatCode):
            return raw
        if not isinstance(raw, str):
            raise InvalidSeatCodeError(raw)
        match = _SEAT_CODE_PATTERN.fullmatch(raw.strip().upper())
        if not match:
            raise InvalidSeatCodeError(raw)
        return cls(row=match.group(1), number=int(match.group(2)))

    @classmethod
    def from_position(cls, *, row_index: int, number: int) -> 'SeatCode':
        return cls(row=ROW_LABELS[row_index], number=number)

    def __str__(self) -> str:
        return self.code
