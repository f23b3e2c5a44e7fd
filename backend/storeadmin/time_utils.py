from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Render a timestamp as "YYYY-MM-DDTHH:MM:SSZ".

    SQLite hands back naive values for server-side defaults; those are
    already UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
