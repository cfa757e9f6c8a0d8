"""
Booking Lifecycle Transitions

Pure decision function for the booking state machine:

    decide(state, event, ledger) -> Decision(state, effects, reason)

  DRAFT ──proceed──▶ PENDING ──pay──▶ PAID ──confirm──▶ CONFIRMED ──complete──▶ COMPLETED
    │                  │               │                   │
    └──cancel──────────┴──cancel───────┴──refund (100%)────┴──refund (80%)──▶ CANCELLED

COMPLETED and CANCELLED ignore every event. Nothing here touches a Booking;
the entity applies the returned effects.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional, Tuple

import attrs

from src.service.booking.domain.enum.booking_state import BookingState
from src.service.booking.domain.lifecycle_event import (
    AddLineItem,
    AppendLineItem,
    BookingEffect,
    BookingEvent,
    Cancel,
    Complete,
    Confirm,
    IssueRefund,
    Pay,
    ProceedToPayment,
    RecordPayment,
    Refund,
)


DEFAULT_CONFIRMED_REFUND_RATE = Decimal('0.8')


@attrs.define(frozen=True)
class BookingLedger:
    """The booking figures a decision may depend on"""

    total: int
    line_item_count: int
    paid_amount: int


@attrs.define(frozen=True)
class Decision:
    state: BookingState
    accepted: bool
    effects: Tuple[BookingEffect, ...] = ()
    reason: Optional[str] = None


@attrs.define(frozen=True)
class StateCapabilities:
    can_modify: bool
    can_pay: bool
    can_cancel: bool
    can_refund: bool


CAPABILITIES: Dict[BookingState, StateCapabilities] = {
    BookingState.DRAFT: StateCapabilities(can_modify=True, can_pay=False, can_cancel=True, can_refund=False),
    BookingState.PENDING: StateCapabilities(can_modify=False, can_pay=True, can_cancel=True, can_refund=False),
    BookingState.PAID: StateCapabilities(can_modify=False, can_pay=False, can_cancel=False, can_refund=True),
    BookingState.CONFIRMED: StateCapabilities(can_modify=False, can_pay=False, can_cancel=False, can_refund=True),
    BookingState.COMPLETED: StateCapabilities(can_modify=False, can_pay=False, can_cancel=False, can_refund=False),
    BookingState.CANCELLED: StateCapabilities(can_modify=False, can_pay=False, can_cancel=False, can_refund=False),
}


_REJECTION_REASONS: Dict[Tuple[BookingState, type], str] = {
    (BookingState.DRAFT, Pay): 'Cannot pay yet, proceed to payment first',
    (BookingState.DRAFT, Confirm): 'Cannot confirm, booking is still a draft',
    (BookingState.DRAFT, Complete): 'Cannot complete, booking is still a draft',
    (BookingState.DRAFT, Refund): 'Cannot refund, no payment made',
    (BookingState.PENDING, AddLineItem): 'Cannot add seat, booking is pending payment',
    (BookingState.PENDING, ProceedToPayment): 'Already in payment stage',
    (BookingState.PENDING, Confirm): 'Cannot confirm, payment required first',
    (BookingState.PENDING, Complete): 'Cannot complete, payment required first',
    (BookingState.PENDING, Refund): 'Cannot refund, no payment made yet',
    (BookingState.PAID, AddLineItem): 'Cannot add seat, booking already paid',
    (BookingState.PAID, ProceedToPayment): 'Already paid',
    (BookingState.PAID, Pay): 'Already paid',
    (BookingState.PAID, Complete): 'Cannot complete, confirm first',
    (BookingState.PAID, Cancel): 'Cannot cancel after payment, request a refund',
    (BookingState.CONFIRMED, AddLineItem): 'Cannot add seat, booking already confirmed',
    (BookingState.CONFIRMED, ProceedToPayment): 'Already confirmed',
    (BookingState.CONFIRMED, Pay): 'Already paid',
    (BookingState.CONFIRMED, Confirm): 'Already confirmed',
    (BookingState.CONFIRMED, Cancel): 'Booking confirmed, request a refund instead',
}


def refund_amount_for(paid_amount: int, rate: Decimal) -> int:
    return int((Decimal(paid_amount) * rate).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def decide(
    state: BookingState,
    event: BookingEvent,
    ledger: BookingLedger,
    *,
    confirmed_refund_rate: Decimal = DEFAULT_CONFIRMED_REFUND_RATE,
) -> Decision:
    match (state, event):
        case (BookingState.DRAFT, AddLineItem(item=item)):
            return _accept(BookingState.DRAFT, AppendLineItem(item=item))

        case (BookingState.DRAFT, ProceedToPayment()):
            if ledger.line_item_count == 0:
                return _reject(state, 'Cannot proceed, no seats selected')
            return _accept(BookingState.PENDING)

        case (BookingState.DRAFT | BookingState.PENDING, Cancel()):
            return _accept(BookingState.CANCELLED)

        case (BookingState.PENDING, Pay(amount=amount)):
            if amount < ledger.total:
                return _reject(
                    state, f'Payment insufficient. Required: {ledger.total}, received: {amount}'
                )
            return _accept(BookingState.PAID, RecordPayment(amount=amount))

        case (BookingState.PAID, Confirm()):
            return _accept(BookingState.CONFIRMED)

        case (BookingState.PAID, Refund()):
            return _accept(BookingState.CANCELLED, IssueRefund(amount=ledger.paid_amount))

        case (BookingState.CONFIRMED, Complete()):
            return _accept(BookingState.COMPLETED)

        case (BookingState.CONFIRMED, Refund()):
            refund = refund_amount_for(ledger.paid_amount, confirmed_refund_rate)
            return _accept(BookingState.CANCELLED, IssueRefund(amount=refund))

        case _:
            return _reject(state, _rejection_reason(state, event))


def capabilities_of(state: BookingState) -> StateCapabilities:
    return CAPABILITIES[state]


def _accept(state: BookingState, *effects: BookingEffect) -> Decision:
    return Decision(state=state, accepted=True, effects=effects)


def _reject(state: BookingState, reason: str) -> Decision:
    return Decision(state=state, accepted=False, reason=reason)


def _rejection_reason(state: BookingState, event: BookingEvent) -> str:
    if state.is_terminal:
        return f'Booking {state.value}, no changes allowed'
    return _REJECTION_REASONS.get(
        (state, type(event)), f'{type(event).__name__} not allowed for a {state.label} booking'
    )
