# -*- coding: utf-8 -*-
"""Diet — daily totals and turning confirmed estimates into log entries."""

from __future__ import annotations

from typing import Iterable, Optional

from ..dates import DayKey, DateLike, day_key, filter_by_day, iso_now
from ..oracle.models import NutritionEstimate
from .models import DietDailySummary, DietItem, DietItemCreate, MacroTotals


def compute_totals(items: Iterable[DietItem]) -> MacroTotals:
    calories = protein = carbs = fat = 0
    for item in items:
        calories += item.calories
        protein += item.protein
        carbs += item.carbs
        fat += item.fat
    return MacroTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def daily_summary(items: Iterable[DietItem], day: DateLike) -> DietDailySummary:
    key: DayKey = day_key(day)
    todays = filter_by_day(items, key)
    return DietDailySummary(date=key.iso(), totals=compute_totals(todays), entry_count=len(todays))


def estimate_to_diet_item(estimate: NutritionEstimate, when: Optional[str] = None) -> DietItemCreate:
    return DietItemCreate(
        name=estimate.name,
        calories=estimate.calories,
        protein=estimate.protein,
        carbs=estimate.carbs,
        fat=estimate.fat,
        time=estimate.time_label(),
        date=when or iso_now(),
    )
