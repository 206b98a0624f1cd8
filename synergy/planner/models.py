# -*- coding: utf-8 -*-
"""Planner — Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..dates import check_iso

TodoType = Literal["task", "meeting", "card"]


class TodoCreate(BaseModel):
    text: str = Field(..., min_length=1)
    completed: bool = False
    description: str = ""
    date: str = Field(..., description="ISO8601 timestamp")
    time: str = "Anytime"
    type: Optional[TodoType] = None

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class Todo(TodoCreate):
    id: int


class TodoUpdate(BaseModel):
    text: Optional[str] = Field(None, min_length=1)
    completed: Optional[bool] = None
    description: Optional[str] = None
    date: Optional[str] = Field(None, description="ISO8601 timestamp")
    time: Optional[str] = None
    type: Optional[TodoType] = None

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class DayProgress(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    total: int = Field(0, ge=0)
    completed: int = Field(0, ge=0)
    completion_rate: float = Field(0.0, ge=0, le=1)
