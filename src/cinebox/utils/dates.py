"""Date and clock helpers."""

import calendar
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from cinebox.config import settings


def add_months(d: date, months: int) -> date:
    """
    Add calendar months to a date, clamping to the end of the target month.

    Examples:
        >>> add_months(date(2026, 1, 31), 1)
        datetime.date(2026, 2, 28)
        >>> add_months(date(2026, 12, 31), 2)
        datetime.date(2027, 2, 28)
        >>> add_months(date(2026, 3, 15), -2)
        datetime.date(2026, 1, 15)
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def local_today(tz_name: str | None = None) -> date:
    """Today's date in the configured business timezone."""
    return datetime.now(ZoneInfo(tz_name or settings.timezone)).date()
