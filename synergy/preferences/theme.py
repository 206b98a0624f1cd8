# -*- coding: utf-8 -*-
"""Preferences — the app-wide theme, persisted as a singleton document."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from pydantic import ValidationError

from ..errors import StoreUnavailable, ValidationFailure
from ..store import DocumentStore
from .models import Theme, UserPreferences, UserPreferencesUpdate

logger = logging.getLogger(__name__)

COLLECTION = "preferences"
SINGLETON_ID = 1


class ThemeContext:
    """Current preferences for one app instance.

    Created at startup from the stored document (or the default theme) and
    handed to routes through dependency injection; every change is written
    through to the store before it becomes visible.
    """

    def __init__(self, store: DocumentStore, prefs: UserPreferences) -> None:
        self._store: Optional[DocumentStore] = store
        self._prefs = prefs
        self._lock = threading.Lock()

    @classmethod
    def load(cls, store: DocumentStore, default: Theme = "dark") -> "ThemeContext":
        doc = store.get(COLLECTION, SINGLETON_ID)
        prefs = UserPreferences(theme=default)
        if doc is not None:
            try:
                prefs = UserPreferences.model_validate(doc)
            except ValidationError as exc:
                logger.warning("stored preferences are invalid, using %s theme: %s", default, exc)
        return cls(store, prefs)

    @property
    def preferences(self) -> UserPreferences:
        return self._prefs

    @property
    def theme(self) -> Theme:
        return self._prefs.theme

    def _write(self, prefs: UserPreferences) -> UserPreferences:
        if self._store is None:
            raise StoreUnavailable("Theme context is closed")
        self._store.put(COLLECTION, SINGLETON_ID, prefs.model_dump())
        self._prefs = prefs
        return prefs

    def update(self, changes: UserPreferencesUpdate) -> UserPreferences:
        with self._lock:
            merged = {**self._prefs.model_dump(), **changes.model_dump(exclude_unset=True, exclude_none=True)}
            try:
                prefs = UserPreferences.model_validate(merged)
            except ValidationError as exc:
                raise ValidationFailure(f"Invalid preferences: {exc}") from exc
            return self._write(prefs)

    def set(self, theme: str) -> UserPreferences:
        try:
            changes = UserPreferencesUpdate(theme=theme)
        except ValidationError as exc:
            raise ValidationFailure(f"Unknown theme: {theme!r}") from exc
        return self.update(changes)

    def toggle(self) -> UserPreferences:
        with self._lock:
            flipped = "light" if self._prefs.theme == "dark" else "dark"
            return self._write(self._prefs.model_copy(update={"theme": flipped}))

    def close(self) -> None:
        self._store = None
        logger.info("theme context closed (theme=%s)", self._prefs.theme)
