# -*- coding: utf-8 -*-
"""FastAPI dependency providers."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from fastapi import Depends, Request

from .config import settings
from .crud import raise_http
from .diet.models import DietItem, DietItemCreate, DietItemUpdate
from .errors import StoreUnavailable
from .exercise.models import Exercise, ExerciseCreate, ExerciseUpdate
from .notes.models import Note, NoteCreate, NoteUpdate
from .oracle.client import ChatCompletionsClient, OracleClient
from .planner.models import Todo, TodoCreate, TodoUpdate
from .preferences.theme import ThemeContext
from .repository import EntryRepository
from .store import DocumentStore

logger = logging.getLogger(__name__)

_store: Optional[DocumentStore] = None
_store_lock = threading.Lock()


def open_store() -> DocumentStore:
    """Process-wide store at ``settings.db_path``, opened on first use."""
    global _store
    with _store_lock:
        if _store is None:
            _store = DocumentStore(settings.db_path)
            logger.info("document store ready at %s", settings.db_path)
        return _store


def get_store() -> DocumentStore:
    try:
        return open_store()
    except StoreUnavailable as exc:
        raise_http(exc)


def get_todo_repo(store: DocumentStore = Depends(get_store)) -> EntryRepository[Todo]:
    return EntryRepository(store, "todos", Todo, TodoCreate, TodoUpdate, kind="Todo")


def get_note_repo(store: DocumentStore = Depends(get_store)) -> EntryRepository[Note]:
    return EntryRepository(store, "notes", Note, NoteCreate, NoteUpdate, kind="Note")


def get_diet_repo(store: DocumentStore = Depends(get_store)) -> EntryRepository[DietItem]:
    return EntryRepository(store, "dietItems", DietItem, DietItemCreate, DietItemUpdate, kind="Diet item")


def get_exercise_repo(store: DocumentStore = Depends(get_store)) -> EntryRepository[Exercise]:
    return EntryRepository(store, "exercises", Exercise, ExerciseCreate, ExerciseUpdate, kind="Exercise")


def get_oracle_client() -> OracleClient:
    return ChatCompletionsClient()


def get_theme(request: Request) -> ThemeContext:
    theme = getattr(request.app.state, "theme", None)
    if theme is None:
        # App used without its lifespan (plain TestClient, embedding).
        theme = ThemeContext.load(get_store(), default=settings.default_theme)
        request.app.state.theme = theme
    return theme
