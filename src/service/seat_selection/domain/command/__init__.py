from src.service.seat_selection.domain.command.command_history import (
    CommandHistory,
    CommandHistoryEntry,
)
from src.service.seat_selection.domain.command.seat_command import (
    DeselectSeatCommand,
    SeatCommand,
    SelectSeatBatchCommand,
    SelectSeatCommand,
    apply_command,
    describe_command,
    reverse_command,
)

__all__ = [
    'CommandHistory',
    'CommandHistoryEntry',
    'DeselectSeatCommand',
    'SeatCommand',
    'SelectSeatBatchCommand',
    'SelectSeatCommand',
    'apply_command',
    'describe_command',
    'reverse_command',
]
