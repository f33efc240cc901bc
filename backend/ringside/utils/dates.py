"""
Calendar helpers for roster dates.

Month arithmetic clamps to the last day of the target month, so
2026-05-31 minus 3 months is 2026-02-28.
"""
import calendar
from datetime import date, timedelta


def subtract_months(value: date, months: int) -> date:
    total = value.year * 12 + (value.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def tomorrow(today: date = None) -> date:
    return (today or date.today()) + timedelta(days=1)


def yesterday(today: date = None) -> date:
    return (today or date.today()) - timedelta(days=1)
