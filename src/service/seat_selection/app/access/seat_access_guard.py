"""
Seat Access Guard

Role-gated front for a SeatRegistry. Anyone may look at the seat map;
changing it needs at least a member. Every call is recorded in a bounded
access log.
"""

from collections import deque
from datetime import datetime, timezone
from typing import Deque, Iterable, List, Optional

from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.dto.access_log_entry import AccessLogEntry
from src.service.seat_selection.domain.aggregate.seat_registry_aggregate import SeatRegistry
from src.service.seat_selection.domain.entity.seat_entity import Seat
from src.service.seat_selection.domain.enum.access_level import AccessLevel
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode


GUEST_ACTOR = 'GUEST'
DEFAULT_ACCESS_LOG_MAX_ENTRIES = 1000


class SeatAccessGuard:
    def __init__(
        self,
        *,
        registry: SeatRegistry,
        max_log_entries: int = DEFAULT_ACCESS_LOG_MAX_ENTRIES,
    ) -> None:
        self.registry = registry
        self.actor: str = GUEST_ACTOR
        self.access_level: AccessLevel = AccessLevel.GUEST
        self._access_log: Deque[AccessLogEntry] = deque(maxlen=max_log_entries)

    def set_actor(self, actor: Optional[str], access_level: AccessLevel = AccessLevel.MEMBER) -> None:
        """Switch the acting user; None falls back to an anonymous guest"""
        if actor is None:
            self.actor, self.access_level = GUEST_ACTOR, AccessLevel.GUEST
        else:
            self.actor, self.access_level = actor, access_level
        Logger.base.info(f'Acting user: {self.actor} ({self.access_level.name})')

    # Views ---------------------------------------------------------------
    def all_seats(self) -> List[Seat]:
        self._authorize(AccessLevel.GUEST, 'view seats')
        return self.registry.all_seats()

    def available_seats(self) -> List[Seat]:
        self._authorize(AccessLevel.GUEST, 'view available seats')
        return self.registry.available_seats()

    def is_available(self, code: str | SeatCode) -> bool:
        self._authorize(AccessLevel.GUEST, 'check seat availability', detail=f'seat: {code}')
        return self.registry.is_available(code)

    # Mutations -----------------------------------------------------------
    def select(self, code: str | SeatCode) -> bool:
        self._authorize(AccessLevel.MEMBER, 'select seat', detail=f'seat: {code}')
        return self.registry.select(code)

    def deselect(self, code: str | SeatCode) -> bool:
        self._authorize(AccessLevel.MEMBER, 'deselect seat', detail=f'seat: {code}')
        return self.registry.deselect(code)

    def confirm(self, codes: Iterable[str | SeatCode]) -> bool:
        seat_codes = list(codes)
        self._authorize(
            AccessLevel.MEMBER,
            'confirm booking',
            detail=f'seats: {", ".join(str(code) for code in seat_codes)}',
        )
        return self.registry.confirm(seat_codes)

    def access_log(self) -> List[AccessLogEntry]:
        return list(self._access_log)

    def _authorize(self, required: AccessLevel, operation: str, *, detail: Optional[str] = None) -> None:
        self._access_log.append(
            AccessLogEntry(
                timestamp=datetime.now(timezone.utc),
                actor=self.actor,
                operation=operation,
                showing_id=self.registry.showing_id,
                detail=detail,
            )
        )
        if self.access_level < required:
            raise ForbiddenError(f'Access denied: {operation} requires {required.name} level')
