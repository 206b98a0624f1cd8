# -*- coding: utf-8 -*-
"""Generic create/read/update/delete facade over the document store."""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .errors import NotFoundError, ValidationFailure
from .store import DocumentStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

Fields = Union[BaseModel, Mapping[str, Any]]


def _validate(model: Type[BaseModel], data: Any) -> BaseModel:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailure(f"Invalid {model.__name__}: {exc}") from exc


def _fields(value: Fields, *, partial: bool) -> Dict[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_unset=partial)
    if isinstance(value, Mapping):
        return dict(value)
    raise ValidationFailure(f"Expected an object, got {type(value).__name__}")


class EntryRepository(Generic[M]):
    """One entity kind stored as documents in ``collection``.

    ``create_model`` validates new payloads (everything but ``id``),
    ``update_model`` validates partial payloads; the merged result is re-checked
    against ``model`` before anything is written.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        model: Type[M],
        create_model: Type[BaseModel],
        update_model: Type[BaseModel],
        kind: str,
    ) -> None:
        self.store = store
        self.collection = collection
        self.model = model
        self.create_model = create_model
        self.update_model = update_model
        self.kind = kind

    def _dump(self, entry: BaseModel) -> Dict[str, Any]:
        return entry.model_dump(by_alias=True, exclude_none=True)

    def list(self, newest_first: bool = False) -> List[M]:
        entries: List[M] = []
        for doc in self.store.list(self.collection):
            try:
                entries.append(self.model.model_validate(doc))
            except ValidationError as exc:
                logger.warning("skipping malformed %s document %s: %s", self.kind, doc.get("id"), exc)
        if newest_first:
            entries.reverse()
        return entries

    def get(self, entry_id: int) -> M:
        doc = self.store.get(self.collection, entry_id)
        if doc is None:
            raise NotFoundError(self.kind, entry_id)
        return _validate(self.model, doc)  # type: ignore[return-value]

    def create(self, fields: Fields) -> M:
        return self.bulk_create([fields])[0]

    def bulk_create(self, items: Iterable[Fields]) -> List[M]:
        # Validate everything first so a bad item never leaves half a batch behind.
        payloads = [
            self._dump(_validate(self.create_model, _fields(item, partial=False)))
            for item in items
        ]
        if not payloads:
            return []
        docs = self.store.insert_many(self.collection, payloads)
        return [_validate(self.model, d) for d in docs]  # type: ignore[misc]

    def update(self, entry_id: int, partial: Fields) -> M:
        changes = _validate(self.update_model, _fields(partial, partial=True))
        updates = changes.model_dump(by_alias=True, exclude_unset=True)
        updates.pop("id", None)
        current = self.store.get(self.collection, entry_id)
        if current is None:
            raise NotFoundError(self.kind, entry_id)
        merged = _validate(self.model, {**current, **updates, "id": entry_id})
        if not self.store.replace(self.collection, entry_id, self._dump(merged)):
            raise NotFoundError(self.kind, entry_id)
        return merged  # type: ignore[return-value]

    def delete(self, entry_id: int) -> None:
        if not self.store.delete(self.collection, entry_id):
            raise NotFoundError(self.kind, entry_id)
