"""Access Level Enum"""

from enum import IntEnum


class AccessLevel(IntEnum):
    GUEST = 0
    MEMBER = 1
    VIP = 2
    ADMIN = 3
