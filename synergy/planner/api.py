# -*- coding: utf-8 -*-
"""Planner — task endpoints."""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..crud import on_day, raise_http
from ..deps import get_todo_repo
from ..errors import SynergyError
from ..repository import EntryRepository
from .models import DayProgress, Todo, TodoCreate, TodoUpdate
from .views import busy_days, day_progress

router = APIRouter(prefix="/api/todos", tags=["Planner"])

_DAY = Query(None, description="YYYY-MM-DD; only entries on that day")


@router.get("", response_model=List[Todo], summary="List tasks")
def list_todos(date: Optional[str] = _DAY, repo: EntryRepository[Todo] = Depends(get_todo_repo)):
    try:
        return on_day(repo.list(), date)
    except SynergyError as exc:
        raise_http(exc)


@router.get("/progress", response_model=DayProgress, summary="Completion for one day")
def get_progress(
    date: str = Query(..., description="YYYY-MM-DD"),
    repo: EntryRepository[Todo] = Depends(get_todo_repo),
):
    try:
        return day_progress(repo.list(), date)
    except SynergyError as exc:
        raise_http(exc)


@router.get("/busy-days", response_model=Dict[str, int], summary="Task count per day")
def get_busy_days(repo: EntryRepository[Todo] = Depends(get_todo_repo)):
    try:
        return busy_days(repo.list())
    except SynergyError as exc:
        raise_http(exc)


@router.get("/{todo_id}", response_model=Todo, summary="Get a task")
def get_todo(todo_id: int, repo: EntryRepository[Todo] = Depends(get_todo_repo)):
    try:
        return repo.get(todo_id)
    except SynergyError as exc:
        raise_http(exc)


@router.post("", response_model=Todo, status_code=201, summary="Create a task")
def create_todo(request: TodoCreate, repo: EntryRepository[Todo] = Depends(get_todo_repo)):
    try:
        return repo.create(request)
    except SynergyError as exc:
        raise_http(exc)


@router.put("/{todo_id}", response_model=Todo, summary="Update a task (partial)")
def update_todo(todo_id: int, request: TodoUpdate, repo: EntryRepository[Todo] = Depends(get_todo_repo)):
    try:
        return repo.update(todo_id, request)
    except SynergyError as exc:
        raise_http(exc)


@router.delete("/{todo_id}", status_code=204, summary="Delete a task")
def delete_todo(todo_id: int, repo: EntryRepository[Todo] = Depends(get_todo_repo)):
    try:
        repo.delete(todo_id)
    except SynergyError as exc:
        raise_http(exc)
    return Response(status_code=204)
