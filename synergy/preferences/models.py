# -*- coding: utf-8 -*-
"""Preferences — Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

Theme = Literal["light", "dark"]


class UserPreferences(BaseModel):
    theme: Theme = "dark"


class UserPreferencesUpdate(BaseModel):
    theme: Optional[Theme] = None
