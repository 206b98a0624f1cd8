# -*- coding: utf-8 -*-
"""Error taxonomy shared by the store, the repositories and the oracle adapter."""

from __future__ import annotations


class SynergyError(Exception):
    """Base class for failures reported to callers (never crashes the app)."""


class NotFoundError(SynergyError):
    """Update/delete/get target is absent."""

    def __init__(self, kind: str, entry_id: object) -> None:
        super().__init__(f"{kind} {entry_id} not found")
        self.kind = kind
        self.entry_id = entry_id


class ValidationFailure(SynergyError, ValueError):
    """Malformed create/update payload; the operation was not applied."""


class OracleFailure(SynergyError):
    """Estimation/generation call failed or returned an unusable structure."""


class StoreUnavailable(SynergyError):
    """Persistence layer unreachable or failing."""
