"""
Unit tests for the Booking entity

Test Focus:
1. Full happy path with the 50000 scenario
2. Rejected operations return a reason and change nothing
3. Refund amounts for paid vs confirmed bookings
4. State transition log and timestamps
5. Injected total calculators
"""

from decimal import Decimal
import re
from typing import Sequence

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_state import BookingState
from src.service.booking.domain.service.booking_total_calculator import BookingTotalCalculator
from src.service.shared_kernel.domain.value_object.line_item import LineItem


class FlatFeeCalculator(BookingTotalCalculator):
    """Adds a fixed service fee per seat"""

    def calculate(self, line_items: Sequence[LineItem]) -> int:
        return sum(item.price + 2500 for item in line_items)


class ShrinkingCalculator(BookingTotalCalculator):
    """Bulk discount that makes the total drop with the third seat"""

    def calculate(self, line_items: Sequence[LineItem]) -> int:
        total = sum(item.price for item in line_items)
        return total // 2 if len(line_items) >= 3 else total


@pytest.mark.unit
class TestBookingCreate:
    def test_create_starts_in_draft(self, draft_booking: Booking) -> None:
        assert draft_booking.state == BookingState.DRAFT
        assert draft_booking.total_amount == 0
        assert draft_booking.paid_amount == 0
        assert draft_booking.transaction_id is None
        assert draft_booking.line_items == ()
        assert draft_booking.created_at == draft_booking.updated_at

    def test_creation_log_entry(self, draft_booking: Booking) -> None:
        (entry,) = draft_booking.state_history

        assert entry.from_state is None
        assert entry.to_state == BookingState.DRAFT

    def test_ids_are_unique_uuid7(self) -> None:
        first = Booking.create(customer_name='A', movie_title='M')
        second = Booking.create(customer_name='B', movie_title='M')

        assert first.id != second.id
        assert first.id.version == 7

    @pytest.mark.parametrize('customer_name,movie_title', [('', 'M'), ('  ', 'M'), ('A', '')])
    def test_blank_names_raise(self, customer_name: str, movie_title: str) -> None:
        with pytest.raises(DomainError):
            Booking.create(customer_name=customer_name, movie_title=movie_title)


@pytest.mark.unit
class TestBookingLifecycle:
    def test_full_lifecycle_with_single_seat(self, draft_booking: Booking) -> None:
        """
        Given: a Draft booking
        When: A1 at 50000 is added, then proceed, pay 50000, confirm, complete
        Then: every step is accepted and the booking ends Completed with a transaction id
        """
        assert draft_booking.add_seat('A1', 50000)
        assert draft_booking.total_amount == 50000

        assert draft_booking.proceed_to_payment().state == BookingState.PENDING
        assert draft_booking.pay(50000).state == BookingState.PAID
        assert re.fullmatch(r'TXN-[0-9A-F]{12}', draft_booking.transaction_id)
        assert draft_booking.confirm().state == BookingState.CONFIRMED
        assert draft_booking.complete().state == BookingState.COMPLETED

        assert draft_booking.paid_amount == 50000
        assert [(entry.from_state, entry.to_state) for entry in draft_booking.state_history] == [
            (None, BookingState.DRAFT),
            (BookingState.DRAFT, BookingState.PENDING),
            (BookingState.PENDING, BookingState.PAID),
            (BookingState.PAID, BookingState.CONFIRMED),
            (BookingState.CONFIRMED, BookingState.COMPLETED),
        ]

    def test_add_seat_keeps_order_and_sums_total(self, draft_booking: Booking) -> None:
        draft_booking.add_seat('A1', 50000)
        draft_booking.add_seat('A2', 75000)

        assert draft_booking.seat_codes() == ['A1', 'A2']
        assert draft_booking.total_amount == 125000
        # Adding seats is not a state change
        assert len(draft_booking.state_history) == 1

    def test_add_seat_updates_timestamp(self, draft_booking: Booking) -> None:
        before = draft_booking.updated_at

        draft_booking.add_seat('A1', 50000)

        assert draft_booking.updated_at >= before

    def test_negative_price_raises(self, draft_booking: Booking) -> None:
        with pytest.raises(DomainError):
            draft_booking.add_seat('A1', -50000)
        assert draft_booking.line_items == ()

    def test_proceed_without_seats_is_rejected(self, draft_booking: Booking) -> None:
        result = draft_booking.proceed_to_payment()

        assert not result
        assert result.state == BookingState.DRAFT
        assert result.reason == 'Cannot proceed, no seats selected'

    def test_insufficient_payment_keeps_pending(self, pending_booking: Booking) -> None:
        result = pending_booking.pay(40000)

        assert result.accepted is False
        assert pending_booking.state == BookingState.PENDING
        assert pending_booking.paid_amount == 0
        assert pending_booking.transaction_id is None

    def test_negative_payment_raises(self, pending_booking: Booking) -> None:
        with pytest.raises(DomainError):
            pending_booking.pay(-1)
        assert pending_booking.state == BookingState.PENDING

    def test_overpayment_is_recorded(self, pending_booking: Booking) -> None:
        assert pending_booking.pay(60000)
        assert pending_booking.paid_amount == 60000

    def test_add_seat_after_payment_is_rejected(self, paid_booking: Booking) -> None:
        history_before = paid_booking.state_history
        updated_before = paid_booking.updated_at

        result = paid_booking.add_seat('B1', 50000)

        assert result.accepted is False
        assert result.reason == 'Cannot add seat, booking already paid'
        assert paid_booking.seat_codes() == ['C3']
        assert paid_booking.total_amount == 50000
        assert paid_booking.state_history == history_before
        assert paid_booking.updated_at == updated_before

    def test_cancel_paid_booking_is_rejected(self, paid_booking: Booking) -> None:
        result = paid_booking.cancel()

        assert result.accepted is False
        assert paid_booking.state == BookingState.PAID

    @pytest.mark.parametrize('fixture_name', ['draft_booking', 'pending_booking'])
    def test_cancel_before_payment(self, request: pytest.FixtureRequest, fixture_name: str) -> None:
        booking: Booking = request.getfixturevalue(fixture_name)

        result = booking.cancel()

        assert result.accepted is True
        assert booking.state == BookingState.CANCELLED
        assert booking.state_history[-1].to_state == BookingState.CANCELLED

    def test_terminal_booking_ignores_everything(self, confirmed_booking: Booking) -> None:
        confirmed_booking.complete()
        snapshot = (
            confirmed_booking.state,
            confirmed_booking.paid_amount,
            confirmed_booking.state_history,
            confirmed_booking.updated_at,
        )

        results = [
            confirmed_booking.add_seat('D1', 1),
            confirmed_booking.proceed_to_payment(),
            confirmed_booking.pay(1),
            confirmed_booking.confirm(),
            confirmed_booking.complete(),
            confirmed_booking.cancel(),
            confirmed_booking.refund(),
        ]

        assert not any(results)
        assert (
            confirmed_booking.state,
            confirmed_booking.paid_amount,
            confirmed_booking.state_history,
            confirmed_booking.updated_at,
        ) == snapshot


@pytest.mark.unit
class TestBookingRefund:
    def test_refund_paid_booking_returns_full_amount(self, paid_booking: Booking) -> None:
        result = paid_booking.refund()

        assert result.accepted is True
        assert result.refund_amount == 50000
        assert paid_booking.refunded_amount == 50000
        assert paid_booking.state == BookingState.CANCELLED

    def test_refund_confirmed_booking_returns_80_percent(self, confirmed_booking: Booking) -> None:
        result = confirmed_booking.refund()

        assert result.refund_amount == 40000
        assert confirmed_booking.state == BookingState.CANCELLED

    def test_refund_rate_is_configurable(self) -> None:
        booking = Booking.create(
            customer_name='A', movie_title='M', confirmed_refund_rate=Decimal('0.5')
        )
        booking.add_seat('A1', 33333)
        booking.proceed_to_payment()
        booking.pay(33333)
        booking.confirm()

        # 16666.5 rounds half up
        assert booking.refund().refund_amount == 16667

    def test_refund_before_payment_is_rejected(self, pending_booking: Booking) -> None:
        result = pending_booking.refund()

        assert result.accepted is False
        assert result.refund_amount is None
        assert pending_booking.refunded_amount == 0


@pytest.mark.unit
class TestBookingCapabilitiesAndCalculators:
    def test_capability_queries_follow_state(self, draft_booking: Booking) -> None:
        assert draft_booking.can_modify() is True
        assert draft_booking.can_pay() is False

        draft_booking.add_seat('A1', 50000)
        draft_booking.proceed_to_payment()

        assert draft_booking.can_modify() is False
        assert draft_booking.can_pay() is True
        assert draft_booking.can_cancel() is True
        assert draft_booking.can_refund() is False

    def test_custom_calculator(self) -> None:
        booking = Booking.create(
            customer_name='A', movie_title='M', total_calculator=FlatFeeCalculator()
        )

        booking.add_seat('A1', 50000)
        booking.add_seat('A2', 50000)

        assert booking.total_amount == 105000

    def test_decreasing_total_raises(self) -> None:
        booking = Booking.create(
            customer_name='A', movie_title='M', total_calculator=ShrinkingCalculator()
        )
        booking.add_seat('A1', 50000)
        booking.add_seat('A2', 50000)

        with pytest.raises(DomainError, match='cannot decrease'):
            booking.add_seat('A3', 50000)

        assert booking.seat_codes() == ['A1', 'A2']
        assert booking.total_amount == 100000

    def test_summary(self, paid_booking: Booking) -> None:
        summary = paid_booking.summary()

        assert 'Budi Santoso' in summary
        assert 'Seats: C3' in summary
        assert 'State: Paid' in summary
        assert paid_booking.transaction_id in summary
