"""Deterministic pre-existing demand for demo showings."""

import random
from typing import Iterable

from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode


def seeded_demand(codes: Iterable[str | SeatCode], *, fraction: float, seed: int) -> frozenset[str]:
    """
    Pick the seats that are already taken before selection opens.

    The same codes, fraction and seed always give the same result, so a
    demo can look busy while tests stay reproducible.
    """
    if not 0 <= fraction <= 1:
        raise DomainError('Demand fraction must be between 0 and 1', 400)

    rng = random.Random(seed)
    ordered = sorted(SeatCode.parse(code) for code in codes)
    return frozenset(seat_code.code for seat_code in ordered if rng.random() < fraction)
