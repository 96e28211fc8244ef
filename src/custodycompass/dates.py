import re
from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, str]

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

_ISO_DATE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')


def parse_iso(value: str) -> date:
    """Nur YYYY-MM-DD; Wochen-, Ordinal- und Kurzformen werden abgelehnt."""
    if not _ISO_DATE.fullmatch(value):
        raise ValueError(f"Invalid ISO date {value!r}, expected YYYY-MM-DD")
    return datetime.strptime(value, '%Y-%m-%d').date()


def to_date(value: DateLike) -> date:
    """Nimmt ein date, datetime oder einen ISO-String (YYYY-MM-DD) und liefert ein date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso(value)
    raise TypeError(f"Expected date or ISO string, got {type(value).__name__}")


def add_days(value: DateLike, days: int) -> date:
    """Date-only addition; month and year boundaries are handled by date itself."""
    return to_date(value) + timedelta(days=days)


def days_between(first: DateLike, second: DateLike) -> int:
    """
    Difference in whole days, positive when `first` is after `second`.
      days_between('2025-01-15', '2025-01-01') -> 14
    """
    return (to_date(first) - to_date(second)).days


def is_weekend(value: DateLike) -> bool:
    return to_date(value).weekday() >= 5


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
