"""Domain helpers for weekly shipment activity buckets."""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Tuple

WEEK = timedelta(days=7)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def activity_window(now: datetime, weeks: int) -> Tuple[datetime, datetime]:
    """Return the inclusive [start, end] range covered by `weeks` weeks before `now`."""
    now = as_utc(now)
    return now - WEEK * weeks, now


def weeks_ago(now: datetime, ended_at: datetime) -> int:
    """Whole weeks elapsed between `ended_at` and `now`; 0 is the most recent week."""
    return int((as_utc(now) - as_utc(ended_at)) // WEEK)


def bucket_by_week(now: datetime, rows: Iterable[Tuple[str, datetime]]) -> dict[str, dict[str, int]]:
    """
    Count (route, ended_at) rows per week and route.

    Weeks without rows are left out of the result.
    """
    counts: Counter[tuple[int, str]] = Counter()
    for route, ended_at in rows:
        counts[(weeks_ago(now, ended_at), route)] += 1

    result: dict[str, dict[str, int]] = {}
    for (week, route), count in counts.items():
        result.setdefault(str(week), {})[route] = count
    return result
