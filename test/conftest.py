"""
Test Configuration and Fixtures

This module provides:
- Test log directory setup (before any application module is imported)
- Seat registry / session fixtures on a small showing
- Booking fixtures in each lifecycle state
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# The logging config reads TEST_LOG_DIR at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEPLOY_ENV', 'test')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import pytest  # noqa: E402

from src.service.booking.domain.entity.booking_entity import Booking  # noqa: E402
from src.service.seat_selection.app.seat_selection_session import (  # noqa: E402
    SeatSelectionSession,
)
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import (  # noqa: E402
    SeatRegistry,
)
from src.service.seat_selection.domain.command.command_history import (  # noqa: E402
    CommandHistory,
)


SHOWING_ID = 'STUDIO-1-1900'
BASE_PRICE = 50000
CUSTOMER_NAME = 'Budi Santoso'
MOVIE_TITLE = 'The Grand Budapest Hotel'


# =============================================================================
# Seat Selection Fixtures
# =============================================================================
@pytest.fixture
def registry() -> SeatRegistry:
    """5x5 showing, A1 pre-booked, B2 out of service"""
    seat_registry = SeatRegistry(showing_id=SHOWING_ID)
    seat_registry.initialize(5, 5, BASE_PRICE, prebooked=['A1'], unavailable=['B2'])
    return seat_registry


@pytest.fixture
def history() -> CommandHistory:
    return CommandHistory()


@pytest.fixture
def session(registry: SeatRegistry, history: CommandHistory) -> SeatSelectionSession:
    return SeatSelectionSession(registry=registry, history=history)


# =============================================================================
# Booking Fixtures
# =============================================================================
@pytest.fixture
def draft_booking() -> Booking:
    return Booking.create(customer_name=CUSTOMER_NAME, movie_title=MOVIE_TITLE)


@pytest.fixture
def pending_booking(draft_booking: Booking) -> Booking:
    draft_booking.add_seat('C3', BASE_PRICE)
    draft_booking.proceed_to_payment()
    return draft_booking


@pytest.fixture
def paid_booking(pending_booking: Booking) -> Booking:
    pending_booking.pay(BASE_PRICE)
    return pending_booking


@pytest.fixture
def confirmed_booking(paid_booking: Booking) -> Booking:
    paid_booking.confirm()
    return paid_booking
