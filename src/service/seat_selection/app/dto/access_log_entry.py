from datetime import datetime
from typing import Optional

import attrs


@attrs.define(frozen=True)
class AccessLogEntry:
    timestamp: datetime
    actor: str
    operation: str
    showing_id: str
    detail: Optional[str] = None
