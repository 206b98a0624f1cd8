# -*- coding: utf-8 -*-
"""Preferences — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..crud import raise_http
from ..deps import get_theme
from ..errors import SynergyError
from .models import UserPreferences, UserPreferencesUpdate
from .theme import ThemeContext

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.get("", response_model=UserPreferences, summary="Current preferences")
def get_preferences(theme: ThemeContext = Depends(get_theme)):
    return theme.preferences


@router.put("", response_model=UserPreferences, summary="Update preferences (partial)")
def update_preferences(request: UserPreferencesUpdate, theme: ThemeContext = Depends(get_theme)):
    try:
        return theme.update(request)
    except SynergyError as exc:
        raise_http(exc)


@router.post("/theme/toggle", response_model=UserPreferences, summary="Switch between light and dark")
def toggle_theme(theme: ThemeContext = Depends(get_theme)):
    try:
        return theme.toggle()
    except SynergyError as exc:
        raise_http(exc)
