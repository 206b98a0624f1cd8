# -*- coding: utf-8 -*-
"""Note editor — load/save rules around the block document model."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..dates import iso_now
from ..repository import EntryRepository
from .blocks import Block, has_content, make_block, parse, prune_for_save, serialize
from .models import Note, NoteCreate

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
NEW_NOTE_TITLE = "Untitled Note"
DEFAULT_CATEGORY = "General"


def new_note_blocks() -> List[Block]:
    return [make_block("text")]


def load_note(note: Note) -> List[Block]:
    # Legacy plain-text content comes back as a single text block; it is only
    # rewritten as blocks when this note is saved again.
    return parse(note.content)


def display_title(note: Note) -> str:
    return note.title if note.title.strip() else UNTITLED


def save_note(
    repo: EntryRepository[Note],
    *,
    note_id: Optional[int],
    title: str,
    blocks: Sequence[Block],
    now: Optional[str] = None,
) -> Optional[Note]:
    """Persist the editor state, or discard it.

    A blank title with no non-blank block is discarded: nothing is written and
    ``None`` is returned, for new and existing notes alike.
    """
    if not title.strip() and not has_content(blocks):
        logger.info("discarding empty note (id=%s)", note_id)
        return None

    content = serialize(prune_for_save(blocks))
    stamp = now or iso_now()
    if note_id is None:
        return repo.create(
            NoteCreate(
                title=title if title.strip() else NEW_NOTE_TITLE,
                content=content,
                date=stamp,
                category=DEFAULT_CATEGORY,
            )
        )
    return repo.update(note_id, {"title": title, "content": content, "date": stamp})
