# backend/utils/dates.py
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Half-open interval [midnight, next midnight) for ``day`` in server local time."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def today_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    return day_bounds((now or datetime.now()).date())
