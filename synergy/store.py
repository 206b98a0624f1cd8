# -*- coding: utf-8 -*-
"""Document store (SQLite) keyed by collection + numeric id."""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .app_db import db_conn, init_app_db
from .errors import StoreUnavailable

logger = logging.getLogger(__name__)

# JSON clients hold ids as doubles; stay in the exactly representable range.
MAX_SAFE_ID = 2**53 - 1


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class IdAllocator:
    """Strictly increasing integer ids (microseconds since the epoch).

    Successive calls never collide, even inside one bulk insert, and ids sort in
    creation order so "newest first" is "largest id first".
    """

    def __init__(self, floor: int = 0) -> None:
        self._last = floor
        self._lock = threading.Lock()

    def observe(self, value: int) -> None:
        with self._lock:
            self._last = max(self._last, value)

    def next_id(self) -> int:
        with self._lock:
            candidate = time.time_ns() // 1000
            if candidate <= self._last:
                candidate = self._last + 1
            if candidate > MAX_SAFE_ID:
                raise StoreUnavailable("Id space exhausted")
            self._last = candidate
            return candidate


class DocumentStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        try:
            init_app_db(db_path)
        except (sqlite3.Error, OSError) as exc:
            logger.warning("document store init failed (%s): %s", db_path, exc)
            raise StoreUnavailable(f"Document store unavailable: {exc}") from exc
        with self._connection() as conn:
            row = conn.execute("SELECT MAX(id) AS max_id FROM documents").fetchone()
        self.ids = IdAllocator(int(row["max_id"] or 0))

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            with db_conn(self.db_path) as conn:
                yield conn
        except (sqlite3.Error, OSError) as exc:
            logger.warning("document store failure (%s): %s", self.db_path, exc)
            raise StoreUnavailable(f"Document store unavailable: {exc}") from exc

    @staticmethod
    def _row_to_doc(row: sqlite3.Row) -> Dict[str, Any]:
        payload = json.loads(row["payload_json"])
        payload.pop("id", None)
        return {"id": int(row["id"]), **payload}

    def list(self, collection: str) -> List[Dict[str, Any]]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT id, payload_json FROM documents WHERE collection = ? ORDER BY id ASC",
                (collection,),
            ).fetchall()
        return [self._row_to_doc(r) for r in rows]

    def get(self, collection: str, doc_id: int) -> Optional[Dict[str, Any]]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT id, payload_json FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        return self._row_to_doc(row) if row else None

    def insert(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.insert_many(collection, [payload])[0]

    def insert_many(self, collection: str, payloads: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        now = _iso_now()
        docs: List[Dict[str, Any]] = []
        for payload in payloads:
            body = {k: v for k, v in payload.items() if k != "id"}
            docs.append({"id": self.ids.next_id(), **body})
        with self._connection() as conn:
            conn.executemany(
                """
                INSERT INTO documents (collection, id, payload_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (collection, d["id"], json.dumps({k: v for k, v in d.items() if k != "id"}, ensure_ascii=False), now, now)
                    for d in docs
                ],
            )
        return docs

    def replace(self, collection: str, doc_id: int, payload: Dict[str, Any]) -> bool:
        body = {k: v for k, v in payload.items() if k != "id"}
        with self._connection() as conn:
            cur = conn.execute(
                "UPDATE documents SET payload_json = ?, updated_at = ? WHERE collection = ? AND id = ?",
                (json.dumps(body, ensure_ascii=False), _iso_now(), collection, doc_id),
            )
            return cur.rowcount > 0

    def put(self, collection: str, doc_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or overwrite a document with a caller-chosen id (singletons)."""
        body = {k: v for k, v in payload.items() if k != "id"}
        now = _iso_now()
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO documents (collection, id, payload_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(collection, id) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                (collection, doc_id, json.dumps(body, ensure_ascii=False), now, now),
            )
        return {"id": doc_id, **body}

    def delete(self, collection: str, doc_id: int) -> bool:
        with self._connection() as conn:
            cur = conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            return cur.rowcount > 0
