# -*- coding: utf-8 -*-
"""Planner — per-day views over the task list."""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..dates import DateLike, DayKey, day_key, filter_by_day, group_by_day
from .models import DayProgress, Todo


def day_progress(todos: Iterable[Todo], day: DateLike) -> DayProgress:
    key = day_key(day)
    todays = filter_by_day(todos, key)
    done = sum(1 for t in todays if t.completed)
    rate = done / len(todays) if todays else 0.0
    return DayProgress(date=key.iso(), total=len(todays), completed=done, completion_rate=rate)


def busy_days(todos: Iterable[Todo]) -> Dict[str, int]:
    """Task count per day (YYYY-MM-DD), for calendar intensity dots."""
    buckets: Dict[DayKey, List[Todo]] = group_by_day(todos)
    return {key.iso(): len(items) for key, items in buckets.items()}
