from __future__ import annotations

from datetime import date as DateType, timedelta
from typing import Iterable, Optional


def count_recent_logs(
    readings: Iterable,
    window_days: int = 7,
    today: Optional[DateType] = None,
) -> int:
    """
    Number of readings whose calendar date falls within the last
    `window_days` days, today included.
    """
    today = today or DateType.today()
    window_start = today - timedelta(days=window_days - 1)
    return sum(1 for r in readings if r.taken_at.date() >= window_start)


def count_consecutive_log_days(readings: Iterable) -> int:
    """Run of consecutive logged days, counted back from the newest logged day."""
    days = sorted({r.taken_at.date() for r in readings}, reverse=True)
    if not days:
        return 0

    streak = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days != 1:
            break
        streak += 1
    return streak
