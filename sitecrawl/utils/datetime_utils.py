import time
from datetime import datetime, timezone
from typing import Optional


def now_millis() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


def millis_to_iso(value: Optional[int]) -> Optional[str]:
    """Render epoch milliseconds as an ISO-8601 UTC string.

    Returns None if value is None.
    """
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
