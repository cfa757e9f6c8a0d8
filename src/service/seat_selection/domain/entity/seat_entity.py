from typing import Any

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.enum.seat_category import SeatCategory
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode


def _validate_non_negative_price(_instance: Any, _attribute: Any, value: int) -> None:
    if value < 0:
        raise DomainError('Seat price cannot be negative', 400)


@attrs.define(frozen=True)
class Seat:
    """
    Seat record of one showing.

    Frozen: the owning SeatRegistry swaps records with attrs.evolve, so a
    Seat handed out by a query never changes underneath its holder.
    """

    id: str
    seat_code: SeatCode
    category: SeatCategory
    price: int = attrs.field(validator=[attrs.validators.instance_of(int), _validate_non_negative_price])
    status: SeatStatus = SeatStatus.AVAILABLE

    @property
    def code(self) -> str:
        return self.seat_code.code

    @property
    def row(self) -> str:
        return self.seat_code.row

    @property
    def number(self) -> int:
        return self.seat_code.number

    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def with_status(self, status: SeatStatus) -> 'Seat':
        return attrs.evolve(self, status=status)
