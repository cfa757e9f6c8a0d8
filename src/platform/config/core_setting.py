from decimal import Decimal
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import ENV_EXAMPLE_FILE, ENV_FILE


_ENV_FILE = ENV_FILE if ENV_FILE.exists() else ENV_EXAMPLE_FILE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Logging (level defaults to DEBUG or INFO following DEBUG)
    LOG_LEVEL: Optional[str] = None
    LOG_FILE_ROTATION: str = '1 hour'
    LOG_FILE_RETENTION: str = '7 days'

    # Seat selection history
    SEAT_HISTORY_MAX_SIZE: int = 50

    # Default showing layout
    DEFAULT_ROWS: int = 10
    DEFAULT_SEATS_PER_ROW: int = 15
    DEFAULT_BASE_PRICE: int = 50000
    PREMIUM_BACK_ROWS: int = 2
    COUPLE_CORNER_WIDTH: int = 2

    # Category price multipliers (ordinary is always 1)
    PREMIUM_MULTIPLIER: Decimal = Decimal('1.5')
    COUPLE_MULTIPLIER: Decimal = Decimal('2')
    ACCESSIBLE_MULTIPLIER: Decimal = Decimal('1')

    # Share of the paid amount returned when a confirmed booking is refunded
    CONFIRMED_REFUND_RATE: Decimal = Decimal('0.8')

    # Seat access guard
    ACCESS_LOG_MAX_ENTRIES: int = 1000

    @field_validator('SEAT_HISTORY_MAX_SIZE', 'ACCESS_LOG_MAX_ENTRIES')
    @classmethod
    def validate_positive_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError('must be at least 1')
        return v

    @field_validator('CONFIRMED_REFUND_RATE')
    @classmethod
    def validate_refund_rate(cls, v: Decimal) -> Decimal:
        if not Decimal('0') <= v <= Decimal('1'):
            raise ValueError('refund rate must be between 0 and 1')
        return v


settings = Settings()  # type: ignore
