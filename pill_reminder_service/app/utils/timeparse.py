# app/utils/timeparse.py
from __future__ import annotations

import re
from datetime import datetime
from typing import Tuple

_HHMM_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

def parse_hhmm(hhmm: str) -> Tuple[int, int]:
    """Parse "H:MM" / "HH:MM" (24-hour) into (hour, minute)."""
    m = _HHMM_RE.match((hhmm or "").strip())
    if not m:
        raise ValueError(f"Invalid time {hhmm!r}, expected HH:MM (00:00-23:59)")
    return int(m.group(1)), int(m.group(2))

def format_hhmm(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}"

def epoch_ms(dt: datetime) -> int:
    # naive datetimes are interpreted as local time
    return int(round(dt.timestamp() * 1000))

def minute_floor(dt: datetime) -> datetime:
    return dt.replace(second=0, microsecond=0)

def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)

def end_of_day(dt: datetime) -> datetime:
    # microsecond resolution; 23:59:59.999 in millisecond terms
    return dt.replace(hour=23, minute=59, second=59, microsecond=999000)

def day_window(dt: datetime) -> Tuple[datetime, datetime]:
    return start_of_day(dt), end_of_day(dt)

def is_same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()
