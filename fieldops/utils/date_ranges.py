# fieldops/utils/date_ranges.py
import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

RANGE_KEYS = ("this-week", "this-month", "last-month", "last-6-months", "last-12-months")


def month_bounds(d: date) -> Tuple[date, date]:
    last = calendar.monthrange(d.year, d.month)[1]
    return d.replace(day=1), d.replace(day=last)


def shift_months(d: date, months: int) -> date:
    idx = d.year * 12 + (d.month - 1) + months
    year, month = divmod(idx, 12)
    return date(year, month + 1, 1)


def week_bounds(d: date) -> Tuple[date, date]:
    # weeks start on Sunday
    start = d - timedelta(days=(d.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def resolve_range(key: Optional[str], today: date) -> Tuple[date, date]:
    """Map a dashboard preset to an inclusive (from, to) date pair."""
    if key == "this-week":
        return week_bounds(today)
    if key == "last-month":
        return month_bounds(shift_months(today, -1))
    if key == "last-6-months":
        return shift_months(today, -6), month_bounds(today)[1]
    if key == "last-12-months":
        return shift_months(today, -12), month_bounds(today)[1]
    return month_bounds(today)


def parse_month(value: Optional[str], today: date) -> Tuple[date, date]:
    """'YYYY-MM' -> month bounds; anything unparsable falls back to ``today``'s month."""
    if value:
        try:
            year, month = (int(part) for part in value.split("-"))
            if 1 <= month <= 12:
                return month_bounds(date(year, month, 1))
        except ValueError:
            pass
    return month_bounds(today)


def day_span(frm: date, to: date) -> Tuple[datetime, datetime]:
    return datetime.combine(frm, datetime.min.time()), datetime.combine(to, datetime.max.time())
