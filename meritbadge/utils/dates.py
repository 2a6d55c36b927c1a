"""Date helpers used by the event filters.

All calendar dates are taken in UTC so that "today" matches the date the
frontend derives from ISO timestamps.
"""

from datetime import date, datetime, timedelta, timezone

def now_utc() -> datetime:
    """Current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)

def today_utc() -> date:
    """Current calendar date in UTC."""
    return now_utc().date()

def add_months(start: date, months: int) -> date:
    """
    Add calendar months by bumping the month field and letting the day overflow.

    Days past the end of the target month roll forward into the following
    month, so 2025-01-31 plus one month is 2025-03-03.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=start.day - 1)

def add_days(start: date, days: int) -> date:
    """Add whole days to a calendar date."""
    return start + timedelta(days=days)
