# -*- coding: utf-8 -*-
"""Exercise — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..crud import on_day, raise_http
from ..dates import parse_day, today
from ..deps import get_exercise_repo, get_oracle_client
from ..errors import SynergyError
from ..oracle.client import OracleClient
from ..oracle.workout import propose_schedule
from ..repository import EntryRepository
from .models import (
    Exercise,
    ExerciseCreate,
    ExerciseUpdate,
    GenerateScheduleRequest,
    GenerateScheduleResponse,
)
from .service import schedule_to_exercises

router = APIRouter(prefix="/api/exercises", tags=["Exercise"])


@router.get("", response_model=List[Exercise], summary="List exercises")
def list_exercises(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; only entries on that day"),
    repo: EntryRepository[Exercise] = Depends(get_exercise_repo),
):
    try:
        return on_day(repo.list(), date)
    except SynergyError as exc:
        raise_http(exc)


@router.post("/bulk", response_model=List[Exercise], status_code=201, summary="Create several exercises at once")
def bulk_create(request: List[ExerciseCreate], repo: EntryRepository[Exercise] = Depends(get_exercise_repo)):
    try:
        return repo.bulk_create(request)
    except SynergyError as exc:
        raise_http(exc)


@router.post("/generate", response_model=GenerateScheduleResponse, summary="Generate a workout schedule")
def generate_schedule(
    request: GenerateScheduleRequest,
    repo: EntryRepository[Exercise] = Depends(get_exercise_repo),
    client: OracleClient = Depends(get_oracle_client),
):
    try:
        anchor = parse_day(request.anchor) if request.anchor else today()
        proposal = propose_schedule(request.goal, anchor, client, scope=request.scope)
        created = repo.bulk_create(schedule_to_exercises(proposal)) if request.commit else []
    except SynergyError as exc:
        raise_http(exc)
    return GenerateScheduleResponse(proposal=proposal, created=created)


@router.get("/{exercise_id}", response_model=Exercise, summary="Get an exercise")
def get_exercise(exercise_id: int, repo: EntryRepository[Exercise] = Depends(get_exercise_repo)):
    try:
        return repo.get(exercise_id)
    except SynergyError as exc:
        raise_http(exc)


@router.post("", response_model=Exercise, status_code=201, summary="Create an exercise")
def create_exercise(request: ExerciseCreate, repo: EntryRepository[Exercise] = Depends(get_exercise_repo)):
    try:
        return repo.create(request)
    except SynergyError as exc:
        raise_http(exc)


@router.put("/{exercise_id}", response_model=Exercise, summary="Update an exercise (partial)")
def update_exercise(
    exercise_id: int,
    request: ExerciseUpdate,
    repo: EntryRepository[Exercise] = Depends(get_exercise_repo),
):
    try:
        return repo.update(exercise_id, request)
    except SynergyError as exc:
        raise_http(exc)


@router.delete("/{exercise_id}", status_code=204, summary="Delete an exercise")
def delete_exercise(exercise_id: int, repo: EntryRepository[Exercise] = Depends(get_exercise_repo)):
    try:
        repo.delete(exercise_id)
    except SynergyError as exc:
        raise_http(exc)
    return Response(status_code=204)
