# -*- coding: utf-8 -*-
"""Diet — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..dates import check_iso
from ..oracle.models import NutritionEstimate


class DietItemCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Food name, e.g. 'rice', 'apple'")
    calories: int = Field(0, ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fat: int = Field(0, ge=0)
    time: str = Field("Manual", description="Log label, e.g. 'Breakfast', 'AI Scan'")
    date: str = Field(..., description="ISO8601 timestamp")

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class DietItem(DietItemCreate):
    id: int


class DietItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    calories: Optional[int] = Field(None, ge=0)
    protein: Optional[int] = Field(None, ge=0)
    carbs: Optional[int] = Field(None, ge=0)
    fat: Optional[int] = Field(None, ge=0)
    time: Optional[str] = None
    date: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class MacroTotals(BaseModel):
    calories: int = Field(0, ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fat: int = Field(0, ge=0)


class DietDailySummary(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    totals: MacroTotals
    entry_count: int = Field(0, ge=0)


class EstimateTextRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=2000)


class EstimateImageRequest(BaseModel):
    image_base64: str = Field(..., min_length=16, description="Base64 image, bare or as a data URL")


class DietLogRequest(BaseModel):
    estimate: NutritionEstimate
    date: Optional[str] = Field(None, description="ISO8601 timestamp; defaults to now")

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)
