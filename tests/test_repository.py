# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from synergy.errors import NotFoundError, StoreUnavailable, ValidationFailure
from synergy.exercise.models import Exercise, ExerciseCreate, ExerciseUpdate
from synergy.planner.models import Todo, TodoCreate, TodoUpdate
from synergy.repository import EntryRepository
from synergy.store import MAX_SAFE_ID, DocumentStore, IdAllocator


class TestIdAllocator(unittest.TestCase):
    def test_strictly_increasing_when_the_clock_stalls(self) -> None:
        ids = IdAllocator()
        with mock.patch("synergy.store.time.time_ns", return_value=1_700_000_000_000_000_000):
            values = [ids.next_id() for _ in range(5)]
        self.assertEqual(values, list(range(values[0], values[0] + 5)))

    def test_never_goes_below_observed(self) -> None:
        ids = IdAllocator()
        ids.observe(MAX_SAFE_ID - 10)
        self.assertGreater(ids.next_id(), MAX_SAFE_ID - 10)

    def test_exhausted(self) -> None:
        ids = IdAllocator(MAX_SAFE_ID)
        with self.assertRaises(StoreUnavailable):
            ids.next_id()


class TestEntryRepository(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="synergy-test-"))
        self.db_path = self._tmp / "synergy.db"
        self.store = DocumentStore(self.db_path)
        self.todos = EntryRepository(self.store, "todos", Todo, TodoCreate, TodoUpdate, kind="Todo")
        self.exercises = EntryRepository(
            self.store, "exercises", Exercise, ExerciseCreate, ExerciseUpdate, kind="Exercise"
        )

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def test_create_get_and_list(self) -> None:
        created = self.todos.create({"text": "Write report", "date": "2024-03-01T09:00:00.000Z"})
        self.assertEqual(created.time, "Anytime")
        self.assertFalse(created.completed)
        self.assertEqual(self.todos.get(created.id), created)
        self.assertEqual(self.todos.list(), [created])

    def test_update_changes_only_supplied_fields(self) -> None:
        created = self.todos.create(
            TodoCreate(text="Call", description="dentist", date="2024-03-01", type="task")
        )
        updated = self.todos.update(created.id, {"completed": True})
        self.assertTrue(updated.completed)
        self.assertEqual(updated.description, "dentist")
        self.assertEqual(updated.type, "task")
        self.assertEqual(self.todos.get(created.id), updated)

        again = self.todos.update(created.id, TodoUpdate(text="Call back"))
        self.assertEqual(again.text, "Call back")
        self.assertTrue(again.completed)

    def test_missing_ids(self) -> None:
        with self.assertRaises(NotFoundError):
            self.todos.get(123)
        with self.assertRaises(NotFoundError):
            self.todos.update(123, {"completed": True})
        with self.assertRaises(NotFoundError):
            self.todos.delete(123)

    def test_delete(self) -> None:
        created = self.todos.create({"text": "x", "date": "2024-03-01"})
        self.todos.delete(created.id)
        self.assertEqual(self.todos.list(), [])
        with self.assertRaises(NotFoundError):
            self.todos.get(created.id)

    def test_invalid_payloads_write_nothing(self) -> None:
        with self.assertRaises(ValidationFailure):
            self.todos.create({"text": "", "date": "2024-03-01"})
        with self.assertRaises(ValidationFailure):
            self.todos.create({"text": "x", "date": "2024-02-30"})
        with self.assertRaises(ValidationFailure):
            self.todos.create({"text": "x", "date": "2024-03-01 this is not a timestamp"})
        created = self.todos.create({"text": "keep", "date": "2024-03-01"})
        with self.assertRaises(ValidationFailure):
            self.todos.update(created.id, {"type": "holiday"})
        self.assertEqual(self.todos.list(), [created])

    def test_models_reject_dates_with_trailing_text(self) -> None:
        with self.assertRaises(ValidationError):
            TodoCreate(text="x", date="2024-03-01 this is not a timestamp")
        with self.assertRaises(ValidationError):
            TodoUpdate(date="2024-03-01T09:00:00Z and then some")
        self.assertEqual(TodoCreate(text="x", date="2024-03-01T09:00:00.000Z").date, "2024-03-01T09:00:00.000Z")

    def test_bulk_create_is_all_or_nothing(self) -> None:
        batch = [
            {"name": "Squat", "date": "2024-03-01"},
            {"name": "Bench", "date": "03/02/2024"},
        ]
        with self.assertRaises(ValidationFailure):
            self.exercises.bulk_create(batch)
        self.assertEqual(self.exercises.list(), [])

    def test_bulk_ids_distinct_and_ordered(self) -> None:
        created = self.exercises.bulk_create(
            [{"name": f"Lift {i}", "date": "2024-03-01", "isAiGenerated": True} for i in range(7)]
        )
        ids = [e.id for e in created]
        self.assertEqual(len(set(ids)), 7)
        self.assertEqual(ids, sorted(ids))
        self.assertTrue(all(e.is_ai_generated for e in created))
        self.assertEqual([e.id for e in self.exercises.list(newest_first=True)], ids[::-1])

    def test_collections_are_separate(self) -> None:
        self.todos.create({"text": "x", "date": "2024-03-01"})
        self.assertEqual(self.exercises.list(), [])

    def test_malformed_documents_are_skipped(self) -> None:
        self.store.insert("todos", {"text": "", "date": "garbage"})
        good = self.todos.create({"text": "ok", "date": "2024-03-01"})
        self.assertEqual(self.todos.list(), [good])

    def test_ids_survive_reopen(self) -> None:
        first = self.todos.create({"text": "x", "date": "2024-03-01"})
        reopened = DocumentStore(self.db_path)
        repo = EntryRepository(reopened, "todos", Todo, TodoCreate, TodoUpdate, kind="Todo")
        with mock.patch("synergy.store.time.time_ns", return_value=0):
            second = repo.create({"text": "y", "date": "2024-03-01"})
        self.assertGreater(second.id, first.id)

    def test_unreachable_store(self) -> None:
        # A directory cannot be opened as a database file.
        with self.assertRaises(StoreUnavailable):
            DocumentStore(self._tmp)


if __name__ == "__main__":
    unittest.main()
