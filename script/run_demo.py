#!/usr/bin/env python3
"""
Cinema Booking Demo Script
Walk one customer through a showing end to end

Steps:
1. Initialize a showing with seeded pre-existing demand
2. Select seats, undo and redo
3. Create a booking from the selection, pay, confirm, complete
4. Show a refund on a second booking
"""

from src.platform.config.core_setting import settings
from src.platform.config.di import container, setup
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.domain.seat_demand import seeded_demand
from src.service.shared_kernel.domain.value_object.seat_code import SeatCode

SHOWING_ID = 'STUDIO-1-1900'
MOVIE_TITLE = 'The Grand Budapest Hotel'
DEMAND_FRACTION = 0.2
DEMAND_SEED = 42


def _all_codes(rows: int, columns: int) -> list[str]:
    return [
        SeatCode.from_position(row_index=row_index, number=number).code
        for row_index in range(rows)
        for number in range(1, columns + 1)
    ]


def main() -> None:
    setup()
    rows, columns = settings.DEFAULT_ROWS, settings.DEFAULT_SEATS_PER_ROW

    registry = container.seat_registry(showing_id=SHOWING_ID)
    session = container.seat_selection_session(registry=registry)

    prebooked = seeded_demand(
        _all_codes(rows, columns), fraction=DEMAND_FRACTION, seed=DEMAND_SEED
    )
    session.initialize_for_showing(
        rows, columns, settings.DEFAULT_BASE_PRICE, prebooked=prebooked
    )
    Logger.base.info(f'{len(registry.available_seats())}/{registry.capacity} seats available')

    # Pick the first two available seats of row E, then change our mind once
    wanted = [seat.code for seat in registry.available_seats() if seat.row == 'E'][:2]
    result = session.select_seats(wanted)
    Logger.base.info(f'Requested {result.requested}, selected {result.selected}')
    session.undo()
    session.redo()
    for entry in session.recent_history():
        Logger.base.info(f'History: {entry.description}')

    create_booking = container.create_booking_from_selection_use_case(session=session)
    confirm_booking = container.confirm_booking_use_case(registry=registry)

    booking = create_booking.execute(customer_name='Budi Santoso', movie_title=MOVIE_TITLE)
    booking.proceed_to_payment()
    booking.pay(booking.total_amount)
    confirm_booking.execute(booking=booking)
    booking.complete()
    Logger.base.info(f'\n{booking.summary()}')

    # Second customer, own session on the same showing: pays, confirms, then asks for a refund
    second_session = container.seat_selection_session(registry=registry)
    refund_seats = [seat.code for seat in registry.available_seats() if seat.row == 'F'][:1]
    second_session.select_seats(refund_seats)
    second = container.create_booking_from_selection_use_case(session=second_session).execute(
        customer_name='Siti Rahma', movie_title=MOVIE_TITLE
    )
    second.proceed_to_payment()
    second.pay(second.total_amount)
    confirm_booking.execute(booking=second)
    refund = container.refund_booking_use_case(registry=registry).execute(booking=second)
    Logger.base.info(f'Refunded {refund.refund_amount} of {second.paid_amount}')
    Logger.base.info(f'\n{second.summary()}')


if __name__ == '__main__':
    main()
