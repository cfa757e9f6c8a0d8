"""
Unit tests for Settings and the DI container wiring
"""

from collections.abc import Iterator
from decimal import Decimal

from pydantic import ValidationError
import pytest

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.service.booking.domain.enum.booking_state import BookingState
from src.service.shared_kernel.domain.enum.seat_category import SeatCategory


@pytest.mark.unit
class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.SEAT_HISTORY_MAX_SIZE == 50
        assert settings.CONFIRMED_REFUND_RATE == Decimal('0.8')
        assert settings.DEFAULT_BASE_PRICE == 50000

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('SEAT_HISTORY_MAX_SIZE', '5')

        assert Settings().SEAT_HISTORY_MAX_SIZE == 5

    @pytest.mark.parametrize(
        'field,value',
        [
            ('SEAT_HISTORY_MAX_SIZE', 0),
            ('ACCESS_LOG_MAX_ENTRIES', 0),
            ('CONFIRMED_REFUND_RATE', Decimal('1.5')),
        ],
    )
    def test_invalid_values_raise(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            Settings(**{field: value})


@pytest.fixture
def container() -> Iterator[Container]:
    container = Container()
    container.config_service.override(
        Settings(SEAT_HISTORY_MAX_SIZE=2, CONFIRMED_REFUND_RATE=Decimal('0.5'))
    )
    yield container
    container.reset_singletons()


@pytest.mark.unit
class TestContainer:
    def test_registries_are_per_showing(self, container: Container) -> None:
        first = container.seat_registry(showing_id='S1')
        second = container.seat_registry(showing_id='S2')

        assert first is not second
        assert first.pricing_policy is second.pricing_policy

    def test_pricing_policy_from_settings(self, container: Container) -> None:
        registry = container.seat_registry(showing_id='S1')

        assert registry.pricing_policy.multiplier_for(SeatCategory.COUPLE) == Decimal('2')

    def test_session_history_uses_configured_size(self, container: Container) -> None:
        registry = container.seat_registry(showing_id='S1')
        registry.initialize(3, 3, 10000)
        session = container.seat_selection_session(registry=registry)

        for code in ['A1', 'A2', 'A3']:
            session.select_seat(code)

        assert session.command_history.max_size == 2
        assert len(session.history()) == 2

    def test_booking_flow_through_container(self, container: Container) -> None:
        registry = container.seat_registry(showing_id='S1')
        registry.initialize(3, 3, 10000)
        session = container.seat_selection_session(registry=registry)
        session.select_seat('A1')

        booking = container.create_booking_from_selection_use_case(session=session).execute(
            customer_name='Budi', movie_title='Dune'
        )
        booking.proceed_to_payment()
        booking.pay(10000)
        container.confirm_booking_use_case(registry=registry).execute(booking=booking)

        assert booking.state == BookingState.CONFIRMED
        # Refund rate comes from the overridden settings
        assert booking.refund().refund_amount == 5000

    def test_sessions_on_one_showing_hold_seats_separately(self, container: Container) -> None:
        registry = container.seat_registry(showing_id='S1')
        registry.initialize(3, 3, 10000)
        first = container.seat_selection_session(registry=registry)
        second = container.seat_selection_session(registry=registry)

        first.select_seat('A1')
        second.select_seat('A2')

        assert first.command_history is not second.command_history
        assert first.selected_codes() == ['A1']
        assert second.selected_codes() == ['A2']

    def test_refund_use_case_releases_paid_seats(self, container: Container) -> None:
        registry = container.seat_registry(showing_id='S1')
        registry.initialize(3, 3, 10000)
        session = container.seat_selection_session(registry=registry)
        session.select_seat('A1')
        booking = container.create_booking_from_selection_use_case(session=session).execute(
            customer_name='Budi', movie_title='Dune'
        )
        booking.proceed_to_payment()
        booking.pay(10000)

        result = container.refund_booking_use_case(registry=registry).execute(booking=booking)

        assert result.refund_amount == 10000
        assert registry.is_available('A1') is True
