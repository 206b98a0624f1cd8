# -*- coding: utf-8 -*-
"""Calendar arithmetic and day bucketing for the planner, diet and workout views.

Month arguments of the grid/navigation helpers are zero-based (0 = January),
matching the client calendar widgets. ``DayKey.month`` is one-based like
``datetime.date``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, TypeVar, Union

from .errors import ValidationFailure

T = TypeVar("T")

DateLike = Union[date, datetime, str]

_DAY_PREFIX_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")
_ISO_TAIL_RE = re.compile(
    r"^(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.\d{1,9})?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


class DayKey(NamedTuple):
    year: int
    month: int
    day: int

    def iso(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


def day_key(value: DateLike) -> DayKey:
    """Calendar day of ``value``, ignoring time of day and time zone."""
    if isinstance(value, datetime):
        return DayKey(value.year, value.month, value.day)
    if isinstance(value, date):
        return DayKey(value.year, value.month, value.day)
    if isinstance(value, str):
        # ISO strings carry their calendar fields up front; read them as written.
        m = _DAY_PREFIX_RE.match(value)
        if m:
            year, month, day = (int(g) for g in m.groups())
            try:
                date(year, month, day)
            except ValueError as exc:
                raise ValidationFailure(f"Invalid date: {value!r}") from exc
            return DayKey(year, month, day)
    raise ValidationFailure(f"Not a date: {value!r}")


def parse_day(value: str) -> date:
    return day_key(value).to_date()


def _first_of_month(year: int, month: int) -> date:
    carry, m = divmod(month, 12)
    try:
        return date(year + carry, m + 1, 1)
    except ValueError as exc:
        raise ValidationFailure(f"Month out of range: {year}-{month}") from exc


def days_in_month(year: int, month: int) -> int:
    if month % 12 == 11:
        # December always has 31 days; its "next month" may be past year 9999.
        _first_of_month(year, month)
        return 31
    # Day 0 of the next month is the last day of this one.
    return (_first_of_month(year, month + 1) - timedelta(days=1)).day


def first_weekday_of_month(year: int, month: int) -> int:
    """Weekday of the 1st, Sunday = 0."""
    return (_first_of_month(year, month).weekday() + 1) % 7


def week_containing(value: date) -> List[date]:
    """The Sunday-start week around ``value``."""
    if isinstance(value, datetime):
        value = value.date()
    start = value - timedelta(days=(value.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(7)]


def month_grid(year: int, month: int) -> List[Optional[int]]:
    blanks: List[Optional[int]] = [None] * first_weekday_of_month(year, month)
    return blanks + list(range(1, days_in_month(year, month) + 1))


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Navigate ``delta`` months from (year, month); rolls over year boundaries."""
    return divmod(year * 12 + month + delta, 12)


def move_selection(selected: date, year: int, month: int) -> date:
    """Re-target ``selected`` into (year, month), clamping to the month's last day."""
    target = _first_of_month(year, month)
    last = days_in_month(target.year, target.month - 1)
    return target.replace(day=min(selected.day, last))


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return day_key(a) == day_key(b)


def _today() -> date:
    return date.today()


def today() -> date:
    return _today()


def is_today(value: DateLike, reference: Optional[date] = None) -> bool:
    return day_key(value) == day_key(reference or _today())


def _entry_date(entry: Any) -> Any:
    if isinstance(entry, dict):
        return entry.get("date")
    return getattr(entry, "date", None)


def _safe_key(entry: Any) -> Optional[DayKey]:
    raw = _entry_date(entry)
    if raw is None:
        return None
    try:
        return day_key(raw)
    except ValidationFailure:
        return None


def filter_by_day(entries: Iterable[T], key: Union[DayKey, DateLike]) -> List[T]:
    """Entries whose ``date`` falls on ``key``; undated entries never match."""
    if not isinstance(key, DayKey):
        key = day_key(key)
    return [e for e in entries if _safe_key(e) == key]


def group_by_day(entries: Iterable[T]) -> Dict[DayKey, List[T]]:
    buckets: Dict[DayKey, List[T]] = {}
    for entry in entries:
        k = _safe_key(entry)
        if k is None:
            continue
        buckets.setdefault(k, []).append(entry)
    return dict(sorted(buckets.items()))


def check_iso(value: Optional[str]) -> Optional[str]:
    """Field validator helper: ``value`` must be a whole ISO date or timestamp.

    Reads stay lenient (``day_key`` only looks at the prefix); writes must not
    add values that carry trailing garbage.
    """
    if value is None:
        return value
    if not isinstance(value, str):
        raise ValidationFailure(f"Expected an ISO date string, got {value!r}")
    stripped = value.strip()
    day_key(stripped)
    tail = _ISO_TAIL_RE.match(stripped[10:])
    if tail is None:
        raise ValidationFailure(f"Not an ISO date or timestamp: {value!r}")
    hour, minute, second = tail.groups()
    if hour is not None and (int(hour) > 23 or int(minute) > 59 or int(second or 0) > 59):
        raise ValidationFailure(f"Time out of range: {value!r}")
    return value


def iso_now() -> str:
    """Current UTC time in the client's ``toISOString`` shape."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")
