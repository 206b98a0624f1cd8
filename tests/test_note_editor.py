# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from synergy.errors import NotFoundError
from synergy.notes.blocks import TextBlock, add_block, make_block, parse
from synergy.notes.editor import display_title, load_note, new_note_blocks, save_note
from synergy.notes.models import Note, NoteCreate, NoteUpdate
from synergy.repository import EntryRepository
from synergy.store import DocumentStore

NOW = "2024-03-01T10:00:00.000Z"


class TestNoteEditor(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="synergy-test-"))
        store = DocumentStore(self._tmp / "synergy.db")
        self.repo = EntryRepository(store, "notes", Note, NoteCreate, NoteUpdate, kind="Note")

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def test_empty_new_note_is_discarded(self) -> None:
        self.assertIsNone(save_note(self.repo, note_id=None, title="  ", blocks=new_note_blocks()))
        self.assertEqual(self.repo.list(), [])

    def test_new_note_defaults(self) -> None:
        blocks = add_block(new_note_blocks(), "table")
        note = save_note(self.repo, note_id=None, title="", blocks=blocks, now=NOW)
        assert note is not None
        self.assertEqual(note.title, "Untitled Note")
        self.assertEqual(note.category, "General")
        self.assertEqual(note.date, NOW)
        stored = json.loads(note.content)
        self.assertEqual([b["type"] for b in stored], ["table"])

    def test_title_only_note_keeps_one_block(self) -> None:
        note = save_note(self.repo, note_id=None, title="Ideas", blocks=new_note_blocks(), now=NOW)
        assert note is not None
        self.assertEqual(len(parse(note.content)), 1)

    def test_legacy_note_migrates_on_save(self) -> None:
        legacy = self.repo.create(NoteCreate(title="Old", content="remember the milk", date=NOW))
        blocks = load_note(legacy)
        self.assertEqual(len(blocks), 1)
        self.assertIsInstance(blocks[0], TextBlock)
        self.assertEqual(blocks[0].content, "remember the milk")
        # Loading alone never rewrites the stored content.
        self.assertEqual(self.repo.get(legacy.id).content, "remember the milk")

        blocks = [*blocks, make_block("text", "and bread")]
        saved = save_note(self.repo, note_id=legacy.id, title="Old", blocks=blocks, now="2024-03-02T08:00:00.000Z")
        assert saved is not None
        self.assertEqual(saved.id, legacy.id)
        self.assertEqual([b.content for b in parse(saved.content)], ["remember the milk", "and bread"])
        self.assertEqual(saved.date, "2024-03-02T08:00:00.000Z")

    def test_emptied_existing_note_is_left_alone(self) -> None:
        note = self.repo.create(NoteCreate(title="Keep", content="body", date=NOW))
        self.assertIsNone(save_note(self.repo, note_id=note.id, title="", blocks=[make_block("text", " ")]))
        self.assertEqual(self.repo.get(note.id), note)

    def test_missing_note(self) -> None:
        with self.assertRaises(NotFoundError):
            save_note(self.repo, note_id=42, title="x", blocks=new_note_blocks())

    def test_display_title(self) -> None:
        self.assertEqual(display_title(Note(id=1, title=" ", content="", date=NOW)), "Untitled")
        self.assertEqual(display_title(Note(id=1, title="Plan", content="", date=NOW)), "Plan")


if __name__ == "__main__":
    unittest.main()
