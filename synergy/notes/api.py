# -*- coding: utf-8 -*-
"""Notes — API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response

from ..crud import raise_http
from ..deps import get_note_repo
from ..errors import SynergyError
from ..repository import EntryRepository
from .blocks import preview, validate_blocks
from .editor import display_title, load_note, save_note
from .models import Note, NoteBlocksResponse, NoteCreate, NotePreview, NoteSaveRequest, NoteUpdate

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get("", response_model=List[Note], summary="List notes")
def list_notes(repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        return repo.list()
    except SynergyError as exc:
        raise_http(exc)


@router.get("/previews", response_model=List[NotePreview], summary="Note cards, newest first")
def list_previews(repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        notes = repo.list(newest_first=True)
    except SynergyError as exc:
        raise_http(exc)
    return [
        NotePreview(
            id=n.id,
            title=display_title(n),
            preview=preview(n.content),
            date=n.date,
            category=n.category,
        )
        for n in notes
    ]


@router.post("/save", response_model=Note, summary="Save editor state (204 when discarded)")
def save_editor(request: NoteSaveRequest, repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        blocks = validate_blocks(request.blocks)
        note = save_note(repo, note_id=request.note_id, title=request.title, blocks=blocks)
    except SynergyError as exc:
        raise_http(exc)
    if note is None:
        return Response(status_code=204)
    return note


@router.get("/{note_id}/blocks", response_model=NoteBlocksResponse, summary="Open a note in the editor")
def get_note_blocks(note_id: int, repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        note = repo.get(note_id)
    except SynergyError as exc:
        raise_http(exc)
    return NoteBlocksResponse(
        id=note.id,
        title=note.title,
        blocks=[b.model_dump(mode="json") for b in load_note(note)],
    )


@router.get("/{note_id}", response_model=Note, summary="Get a note")
def get_note(note_id: int, repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        return repo.get(note_id)
    except SynergyError as exc:
        raise_http(exc)


@router.post("", response_model=Note, status_code=201, summary="Create a note")
def create_note(request: NoteCreate, repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        return repo.create(request)
    except SynergyError as exc:
        raise_http(exc)


@router.put("/{note_id}", response_model=Note, summary="Update a note (partial)")
def update_note(note_id: int, request: NoteUpdate, repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        return repo.update(note_id, request)
    except SynergyError as exc:
        raise_http(exc)


@router.delete("/{note_id}", status_code=204, summary="Delete a note")
def delete_note(note_id: int, repo: EntryRepository[Note] = Depends(get_note_repo)):
    try:
        repo.delete(note_id)
    except SynergyError as exc:
        raise_http(exc)
    return Response(status_code=204)
