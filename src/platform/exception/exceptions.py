class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class InvalidSeatCodeError(DomainError):
    """Seat code that cannot be parsed into a row letter and a column number"""

    def __init__(self, seat_code: object) -> None:
        super().__init__(
            f'Invalid seat code: {seat_code!r}. Expected: row letter + seat number (e.g., A1, C12)'
        )
        self.seat_code = seat_code
