"""
Unit tests for SeatAccessGuard

Test Focus:
1. Guests can look, members and above can change seats
2. Denied calls raise ForbiddenError and leave the registry untouched
3. Every call, allowed or denied, lands in the bounded access log
"""

import pytest

from src.platform.exception.exceptions import ForbiddenError
from src.service.seat_selection.app.access.seat_access_guard import SeatAccessGuard
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry
from src.service.seat_selection.domain.enum.access_level import AccessLevel
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus


@pytest.fixture
def guard(registry: SeatRegistry) -> SeatAccessGuard:
    return SeatAccessGuard(registry=registry)


@pytest.mark.unit
class TestSeatAccessGuard:
    def test_guest_can_view(self, guard: SeatAccessGuard) -> None:
        assert len(guard.all_seats()) == 25
        assert len(guard.available_seats()) == 23
        assert guard.is_available('C3') is True

    def test_guest_cannot_select(self, guard: SeatAccessGuard, registry: SeatRegistry) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            guard.select('C3')

        assert exc_info.value.status_code == 403
        assert 'MEMBER' in exc_info.value.message
        assert registry.status_of('C3') == SeatStatus.AVAILABLE

    @pytest.mark.parametrize('level', [AccessLevel.MEMBER, AccessLevel.VIP, AccessLevel.ADMIN])
    def test_member_and_above_can_mutate(
        self, guard: SeatAccessGuard, registry: SeatRegistry, level: AccessLevel
    ) -> None:
        guard.set_actor('budi', level)

        assert guard.select('C3') is True
        assert guard.deselect('C3') is True
        assert guard.select('C4') is True
        assert guard.confirm(['C4']) is True
        assert registry.status_of('C4') == SeatStatus.BOOKED

    def test_reset_to_guest(self, guard: SeatAccessGuard) -> None:
        guard.set_actor('budi')
        guard.set_actor(None)

        assert guard.actor == 'GUEST'
        with pytest.raises(ForbiddenError):
            guard.confirm(['C3'])

    def test_access_log_records_allowed_and_denied_calls(self, guard: SeatAccessGuard) -> None:
        guard.is_available('C3')
        with pytest.raises(ForbiddenError):
            guard.select('C3')
        guard.set_actor('budi')
        guard.select('C3')

        log = guard.access_log()
        assert [(entry.actor, entry.operation) for entry in log] == [
            ('GUEST', 'check seat availability'),
            ('GUEST', 'select seat'),
            ('budi', 'select seat'),
        ]
        assert log[-1].detail == 'seat: C3'
        assert log[-1].showing_id == 'STUDIO-1-1900'

    def test_access_log_is_bounded(self, registry: SeatRegistry) -> None:
        guard = SeatAccessGuard(registry=registry, max_log_entries=2)

        guard.all_seats()
        guard.available_seats()
        guard.is_available('A1')

        assert [entry.operation for entry in guard.access_log()] == [
            'view available seats',
            'check seat availability',
        ]
