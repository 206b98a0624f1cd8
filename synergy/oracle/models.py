# -*- coding: utf-8 -*-
"""Oracle — Pydantic models for normalized estimates and schedule proposals."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NutritionSource(str, Enum):
    manual = "manual"
    text = "text"
    image = "image"


_TIME_LABELS = {
    NutritionSource.manual: "Manual",
    NutritionSource.text: "AI Calc",
    NutritionSource.image: "AI Scan",
}


class NutritionEstimate(BaseModel):
    name: str = Field(..., min_length=1)
    calories: int = Field(0, ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fat: int = Field(0, ge=0)
    source: NutritionSource

    def time_label(self) -> str:
        return _TIME_LABELS[self.source]


class PlanScope(str, Enum):
    """How many days a generated workout plan may cover."""

    auto = "auto"
    single = "single"
    week = "week"

    @property
    def max_offset(self) -> int:
        return 0 if self is PlanScope.single else 6


class ProposedExercise(BaseModel):
    name: str = Field(..., min_length=1)
    details: str = ""
    time: str = "Anytime"


class ScheduleDay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day_offset: int = Field(..., ge=0, alias="dayOffset", description="0 = anchor date")
    exercises: List[ProposedExercise] = Field(default_factory=list)


class WorkoutScheduleProposal(BaseModel):
    anchor: str = Field(..., description="YYYY-MM-DD")
    scope: PlanScope = PlanScope.auto
    days: List[ScheduleDay] = Field(default_factory=list)

    def offsets(self) -> List[int]:
        return [d.day_offset for d in self.days]
