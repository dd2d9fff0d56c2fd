"""Calendar helpers for the day / month / year report granularities."""

import calendar
from datetime import date, datetime
from typing import Tuple, Union

DateLike = Union[str, date]


def parse_date(value: DateLike) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string (or pass a date through).

    Datetimes, and ISO timestamps with a ``T`` or space separator, are
    truncated to their date.  Raises ValueError on anything else, including
    trailing text after the date.

    >>> parse_date("2025-06-01")
    datetime.date(2025, 6, 1)
    >>> parse_date("2025-06-01 14:30:00")
    datetime.date(2025, 6, 1)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def validate_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month} (must be between 1-12)")
    if not 1 <= year <= 9999:
        raise ValueError(f"Invalid year: {year}")


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of the month.

    >>> month_bounds(2024, 2)
    (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    """
    validate_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the month before.

    >>> previous_month(2025, 1)
    (2024, 12)
    """
    if month == 1:
        return year - 1, 12
    return year, month - 1
