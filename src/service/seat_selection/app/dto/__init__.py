from src.service.seat_selection.app.dto.access_log_entry import AccessLogEntry
from src.service.seat_selection.app.dto.batch_selection_result import BatchSelectionResult

__all__ = ['AccessLogEntry', 'BatchSelectionResult']
