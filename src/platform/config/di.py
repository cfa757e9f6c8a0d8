"""
https://python-dependency-injector.ets-labs.org/index.html

Registries and sessions are per showing and per user, so they are Factories;
callers pass the showing id (and the registry a session or use case works on):

    registry = container.seat_registry(showing_id='STUDIO-1-1900')
    session = container.seat_selection_session(registry=registry)
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.app.command.confirm_booking_use_case import ConfirmBookingUseCase
from src.service.booking.app.command.create_booking_from_selection_use_case import (
    CreateBookingFromSelectionUseCase,
)
from src.service.booking.app.command.refund_booking_use_case import RefundBookingUseCase
from src.service.booking.domain.service.booking_total_calculator import LineItemSumCalculator
from src.service.seat_selection.app.access.seat_access_guard import SeatAccessGuard
from src.service.seat_selection.app.seat_selection_session import SeatSelectionSession
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry
from src.service.seat_selection.domain.command.command_history import CommandHistory
from src.service.seat_selection.domain.value_object.seat_layout_policy import SeatLayoutPolicy
from src.service.seat_selection.domain.value_object.seat_pricing_policy import SeatPricingPolicy


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Seat policies (stateless, shared by every showing)
    seat_pricing_policy = providers.Singleton(SeatPricingPolicy.from_settings, config_service)
    seat_layout_policy = providers.Singleton(SeatLayoutPolicy.from_settings, config_service)

    # Booking total calculator
    booking_total_calculator = providers.Singleton(LineItemSumCalculator)

    # Seat selection (one registry per showing, one history per user session)
    seat_registry = providers.Factory(
        SeatRegistry,
        pricing_policy=seat_pricing_policy,
        layout_policy=seat_layout_policy,
    )
    command_history = providers.Factory(
        CommandHistory,
        max_size=config_service.provided.SEAT_HISTORY_MAX_SIZE,
    )
    seat_selection_session = providers.Factory(
        SeatSelectionSession,
        history=command_history,
    )
    seat_access_guard = providers.Factory(
        SeatAccessGuard,
        max_log_entries=config_service.provided.ACCESS_LOG_MAX_ENTRIES,
    )

    # Booking Use Cases
    create_booking_from_selection_use_case = providers.Factory(
        CreateBookingFromSelectionUseCase,
        total_calculator=booking_total_calculator,
        confirmed_refund_rate=config_service.provided.CONFIRMED_REFUND_RATE,
    )
    confirm_booking_use_case = providers.Factory(ConfirmBookingUseCase)
    cancel_booking_use_case = providers.Factory(CancelBookingUseCase)
    refund_booking_use_case = providers.Factory(RefundBookingUseCase)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
