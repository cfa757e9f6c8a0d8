"""
Booking lifecycle events and the effects an accepted event produces.

Both sets are closed unions of frozen attrs classes, consumed with `match`.
"""

from typing import Any, Union

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.value_object.line_item import LineItem


def _validate_non_negative_amount(_instance: Any, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise DomainError(f'{attribute.name} cannot be negative', 400)


# Events ------------------------------------------------------------------
@attrs.define(frozen=True)
class AddLineItem:
    item: LineItem


@attrs.define(frozen=True)
class ProceedToPayment:
    pass


@attrs.define(frozen=True)
class Pay:
    amount: int = attrs.field(
        validator=[attrs.validators.instance_of(int), _validate_non_negative_amount]
    )


@attrs.define(frozen=True)
class Confirm:
    pass


@attrs.define(frozen=True)
class Complete:
    pass


@attrs.define(frozen=True)
class Cancel:
    pass


@attrs.define(frozen=True)
class Refund:
    pass


BookingEvent = Union[AddLineItem, ProceedToPayment, Pay, Confirm, Complete, Cancel, Refund]


# Effects -----------------------------------------------------------------
@attrs.define(frozen=True)
class AppendLineItem:
    item: LineItem


@attrs.define(frozen=True)
class RecordPayment:
    amount: int


@attrs.define(frozen=True)
class IssueRefund:
    amount: int


BookingEffect = Union[AppendLineItem, RecordPayment, IssueRefund]
