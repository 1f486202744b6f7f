"""
infrastructure.persistence.timestamps - ISO-8601 helpers shared by the repos.

SQLite has no datetime type; every timestamp column holds naive local
datetime.isoformat() text, which sorts chronologically as plain text.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional


def now_iso() -> str:
    return datetime.now().isoformat()


def to_iso(value: Optional[datetime]) -> str:
    return (value or datetime.now()).isoformat()


def parse_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def day_bounds(day: date) -> tuple[str, str]:
    """Return [start, end) ISO bounds covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start.isoformat(), (start + timedelta(days=1)).isoformat()
