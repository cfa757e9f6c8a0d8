"""Seat Category Enum"""

from enum import StrEnum


class SeatCategory(StrEnum):
    ORDINARY = 'ordinary'
    PREMIUM = 'premium'
    COUPLE = 'couple'  # paired occupancy, priced for two
    ACCESSIBLE = 'accessible'
