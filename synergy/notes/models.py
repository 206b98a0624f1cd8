# -*- coding: utf-8 -*-
"""Notes — Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..dates import check_iso


class NoteCreate(BaseModel):
    title: str = ""
    content: str = Field("", description="Serialized block list")
    date: str = Field(..., description="ISO8601 timestamp of the last edit")
    category: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class Note(NoteCreate):
    id: int


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[str] = None
    category: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_is_iso(cls, value: Optional[str]) -> Optional[str]:
        return check_iso(value)


class NoteSaveRequest(BaseModel):
    note_id: Optional[int] = Field(None, description="Existing note id; omit for a new note")
    title: str = ""
    blocks: List[Dict[str, Any]] = Field(default_factory=list)


class NotePreview(BaseModel):
    id: int
    title: str
    preview: str
    date: str
    category: Optional[str] = None


class NoteBlocksResponse(BaseModel):
    id: int
    title: str
    blocks: List[Dict[str, Any]]
