from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional, Tuple

import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_transition import (
    DEFAULT_CONFIRMED_REFUND_RATE,
    BookingLedger,
    Decision,
    capabilities_of,
    decide,
)
from src.service.booking.domain.enum.booking_state import BookingState
from src.service.booking.domain.lifecycle_event import (
    AddLineItem,
    AppendLineItem,
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
from src.service.booking.domain.service.booking_total_calculator import (
    BookingTotalCalculator,
    LineItemSumCalculator,
)
from src.service.booking.domain.value_object.state_transition_entry import StateTransitionEntry
from src.service.booking.domain.value_object.transition_result import TransitionResult
from src.service.shared_kernel.domain.value_object.line_item import LineItem


def generate_transaction_id() -> str:
    return f'TXN-{uuid_utils.uuid4().hex[:12].upper()}'


def _validate_not_blank(_instance: Any, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise DomainError(f'{attribute.name} is required', 400)


@attrs.define
class Booking:
    """
    Booking Lifecycle Entity

    Draft → Pending → Paid → Confirmed → Completed, with Cancelled reachable
    from Draft/Pending (cancel) and Paid/Confirmed (refund).

    Every lifecycle method asks `decide` for a Decision and applies its
    effects; a rejected event leaves the booking untouched and comes back
    as a rejected TransitionResult.
    """

    id: UUID
    customer_name: str = attrs.field(validator=_validate_not_blank)
    movie_title: str = attrs.field(validator=_validate_not_blank)
    total_calculator: BookingTotalCalculator = attrs.field(factory=LineItemSumCalculator, repr=False)
    confirmed_refund_rate: Decimal = attrs.field(
        default=DEFAULT_CONFIRMED_REFUND_RATE, converter=Decimal, repr=False
    )
    # Selection session whose seats this booking holds in the registry
    seat_holder: Optional[str] = None
    _line_items: List[LineItem] = attrs.field(factory=list, alias='line_items')
    total_amount: int = 0
    state: BookingState = BookingState.DRAFT
    paid_amount: int = 0
    transaction_id: Optional[str] = None
    refunded_amount: int = 0
    _state_history: List[StateTransitionEntry] = attrs.field(factory=list, alias='state_history')
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        customer_name: str,
        movie_title: str,
        total_calculator: Optional[BookingTotalCalculator] = None,
        confirmed_refund_rate: Decimal = DEFAULT_CONFIRMED_REFUND_RATE,
        seat_holder: Optional[str] = None,
    ) -> 'Booking':
        now = datetime.now(timezone.utc)
        booking = cls(
            id=uuid_utils.uuid7(),
            customer_name=customer_name,
            movie_title=movie_title,
            total_calculator=total_calculator or LineItemSumCalculator(),
            confirmed_refund_rate=confirmed_refund_rate,
            seat_holder=seat_holder,
            state=BookingState.DRAFT,
            created_at=now,
            updated_at=now,
        )
        booking._state_history.append(
            StateTransitionEntry(from_state=None, to_state=BookingState.DRAFT, timestamp=now)
        )
        return booking

    # Lifecycle -----------------------------------------------------------
    def add_seat(self, seat_code: str, price: int) -> TransitionResult:
        return self.add_line_item(LineItem(seat_code=seat_code, price=price))

    @Logger.io
    def add_line_item(self, item: LineItem) -> TransitionResult:
        return self._dispatch(AddLineItem(item=item))

    @Logger.io
    def proceed_to_payment(self) -> TransitionResult:
        return self._dispatch(ProceedToPayment())

    @Logger.io
    def pay(self, amount: int) -> TransitionResult:
        return self._dispatch(Pay(amount=amount))

    @Logger.io
    def confirm(self) -> TransitionResult:
        return self._dispatch(Confirm())

    @Logger.io
    def complete(self) -> TransitionResult:
        return self._dispatch(Complete())

    @Logger.io
    def cancel(self) -> TransitionResult:
        return self._dispatch(Cancel())

    @Logger.io
    def refund(self) -> TransitionResult:
        return self._dispatch(Refund())

    # Capabilities --------------------------------------------------------
    def can_modify(self) -> bool:
        return capabilities_of(self.state).can_modify

    def can_pay(self) -> bool:
        return capabilities_of(self.state).can_pay

    def can_cancel(self) -> bool:
        return capabilities_of(self.state).can_cancel

    def can_refund(self) -> bool:
        return capabilities_of(self.state).can_refund

    # Queries -------------------------------------------------------------
    @property
    def line_items(self) -> Tuple[LineItem, ...]:
        return tuple(self._line_items)

    @property
    def state_history(self) -> Tuple[StateTransitionEntry, ...]:
        return tuple(self._state_history)

    def seat_codes(self) -> List[str]:
        return [item.seat_code for item in self._line_items]

    def ledger(self) -> BookingLedger:
        return BookingLedger(
            total=self.total_amount,
            line_item_count=len(self._line_items),
            paid_amount=self.paid_amount,
        )

    def summary(self) -> str:
        lines = [
            f'Booking {self.id}',
            f'  Customer: {self.customer_name}',
            f'  Movie: {self.movie_title}',
            f'  Seats: {", ".join(self.seat_codes()) or "-"}',
            f'  Total: {self.total_amount}',
            f'  Paid: {self.paid_amount}',
            f'  State: {self.state.label}',
        ]
        if self.transaction_id:
            lines.append(f'  Transaction: {self.transaction_id}')
        if self.refunded_amount:
            lines.append(f'  Refunded: {self.refunded_amount}')
        return '\n'.join(lines)

    # Internals -----------------------------------------------------------
    def _dispatch(self, event: BookingEvent) -> TransitionResult:
        decision = decide(
            self.state,
            event,
            self.ledger(),
            confirmed_refund_rate=self.confirmed_refund_rate,
        )
        if not decision.accepted:
            Logger.base.info(
                f'[Booking {self.id}] {type(event).__name__} rejected: {decision.reason}'
            )
            return TransitionResult(accepted=False, state=self.state, reason=decision.reason)

        now = datetime.now(timezone.utc)
        refund_amount = self._apply_effects(decision)
        if decision.state != self.state:
            previous, self.state = self.state, decision.state
            self._state_history.append(
                StateTransitionEntry(from_state=previous, to_state=self.state, timestamp=now)
            )
            Logger.base.info(
                f'[Booking {self.id}] State changed: {previous.label} → {self.state.label}'
            )
        self.updated_at = now
        return TransitionResult(accepted=True, state=self.state, refund_amount=refund_amount)

    def _apply_effects(self, decision: Decision) -> Optional[int]:
        refund_amount = None
        for effect in decision.effects:
            match effect:
                case AppendLineItem(item=item):
                    new_total = self.total_calculator.calculate([*self._line_items, item])
                    if new_total < self.total_amount:
                        raise DomainError(
                            f'Booking total cannot decrease: {self.total_amount} -> {new_total}',
                            400,
                        )
                    self._line_items.append(item)
                    self.total_amount = new_total
                    Logger.base.info(
                        f'[Booking {self.id}] Seat {item.seat_code} added. Total: {self.total_amount}'
                    )
                case RecordPayment(amount=amount):
                    self.paid_amount = amount
                    self.transaction_id = generate_transaction_id()
                case IssueRefund(amount=amount):
                    self.refunded_amount = amount
                    refund_amount = amount
        return refund_amount
