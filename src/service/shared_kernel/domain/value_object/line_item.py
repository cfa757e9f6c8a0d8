"""Line item value object."""

from typing import Any

import attrs

from src.platform.exception.exceptions import DomainError


def _validate_price(_instance: Any, _attribute: Any, value: int) -> None:
    if value < 0:
        raise DomainError('Line item price cannot be negative', 400)


@attrs.define(frozen=True)
class LineItem:
    """One seat and its price attached to a booking"""

    seat_code: str = attrs.field(validator=attrs.validators.instance_of(str))
    price: int = attrs.field(validator=[attrs.validators.instance_of(int), _validate_price])
