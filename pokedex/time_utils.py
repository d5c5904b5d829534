from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def timestamp_str() -> str:
    return now_utc().isoformat()
