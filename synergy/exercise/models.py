# -*- coding: utf-8 -*-
"""Exercise domain — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..dates import check_iso
from ..oracle.models import PlanScope, WorkoutScheduleProposal

_DAY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class ExerciseCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    details: str = ""
    time: str = "Anytime"
    completed: bool = False
    is_ai_generated: Optional[bool] = Field(None, alias="isAiGenerated")
    date: str = Field(..., pattern=_DAY_PATTERN, description="YYYY-MM-DD")

    @field_validator("date")
    @classmethod
    def _date_is_day(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class Exercise(ExerciseCreate):
    id: int


class ExerciseUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    details: Optional[str] = None
    time: Optional[str] = None
    completed: Optional[bool] = None
    is_ai_generated: Optional[bool] = Field(None, alias="isAiGenerated")
    date: Optional[str] = Field(None, pattern=_DAY_PATTERN, description="YYYY-MM-DD")

    @field_validator("date")
    @classmethod
    def _date_is_day(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class GenerateScheduleRequest(BaseModel):
    goal: str = Field(..., min_length=1, max_length=2000)
    anchor: Optional[str] = Field(None, pattern=_DAY_PATTERN, description="YYYY-MM-DD; defaults to today")
    scope: PlanScope = PlanScope.auto
    commit: bool = Field(True, description="Persist the proposed exercises")

    @field_validator("anchor")
    @classmethod
    def _anchor_is_day(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class GenerateScheduleResponse(BaseModel):
    proposal: WorkoutScheduleProposal
    created: List[Exercise] = Field(default_factory=list)
