from datetime import datetime, timedelta
from typing import Optional, Tuple
import re

from ..exceptions import ValidationError

MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")

DateRange = Tuple[datetime, datetime]


def parse_month(month: str) -> Tuple[int, int]:
    match = MONTH_RE.match(month or "")
    if not match:
        raise ValidationError(f"Invalid month '{month}', expected YYYY-MM")
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12 or year < 1:
        raise ValidationError(f"Invalid month '{month}', expected YYYY-MM")
    return year, mon


def shift_month(month: str, delta: int) -> str:
    """'2024-01', -1 -> '2023-12'"""
    year, mon = parse_month(month)
    index = year * 12 + (mon - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_range(month: str) -> DateRange:
    """
    Inclusive local-time interval covering a calendar month:
    first day 00:00:00 through the last microsecond of the last day.
    """
    year, mon = parse_month(month)
    start = datetime(year, mon, 1)
    next_year, next_mon = parse_month(shift_month(month, 1))
    end = datetime(next_year, next_mon, 1) - timedelta(microseconds=1)
    return start, end


def month_label(month: str) -> str:
    year, mon = parse_month(month)
    return datetime(year, mon, 1).strftime("%b")


def current_month(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%Y-%m")


def day_range(now: Optional[datetime] = None) -> DateRange:
    """[start of today, start of tomorrow) in local time."""
    today = (now or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)
    return today, today + timedelta(days=1)
