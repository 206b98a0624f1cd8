# -*- coding: utf-8 -*-
"""Shared route helpers: domain errors to HTTP, day filters for list endpoints."""

from __future__ import annotations

from typing import List, NoReturn, Optional, Sequence, TypeVar

from fastapi import HTTPException

from .dates import filter_by_day
from .errors import NotFoundError, OracleFailure, StoreUnavailable, SynergyError, ValidationFailure

T = TypeVar("T")

_STATUS = (
    (NotFoundError, 404),
    (ValidationFailure, 400),
    (OracleFailure, 502),
    (StoreUnavailable, 503),
)


def status_for(exc: SynergyError) -> int:
    for kind, status in _STATUS:
        if isinstance(exc, kind):
            return status
    return 500


def raise_http(exc: SynergyError) -> NoReturn:
    raise HTTPException(status_code=status_for(exc), detail=str(exc)) from exc


def on_day(entries: Sequence[T], day: Optional[str]) -> List[T]:
    """``entries`` unchanged without ``day``; otherwise only those on that day."""
    if day is None:
        return list(entries)
    try:
        return filter_by_day(entries, day)
    except ValidationFailure as exc:
        raise_http(exc)
