# -*- coding: utf-8 -*-
"""Diet — API endpoints."""

from __future__ import annotations

import base64
import binascii
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..config import settings
from ..crud import on_day, raise_http
from ..deps import get_diet_repo, get_oracle_client
from ..errors import SynergyError
from ..oracle.client import OracleClient
from ..oracle.models import NutritionEstimate
from ..oracle.nutrition import estimate_from_image, estimate_from_text
from ..repository import EntryRepository
from .models import (
    DietDailySummary,
    DietItem,
    DietItemCreate,
    DietItemUpdate,
    DietLogRequest,
    EstimateImageRequest,
    EstimateTextRequest,
)
from .service import daily_summary, estimate_to_diet_item

router = APIRouter(prefix="/api/diet", tags=["Diet"])


def _decode_image_or_400(image_base64: str, max_bytes: int) -> bytes:
    raw = image_base64.strip()
    if raw.startswith("data:") and "," in raw:
        raw = raw.split(",", 1)[1]
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {exc}") from exc
    if len(data) > max_bytes:
        raise HTTPException(status_code=400, detail=f"Image too large: {len(data)} bytes > {max_bytes}")
    return data


@router.get("", response_model=List[DietItem], summary="List food log entries")
def list_items(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; only entries on that day"),
    repo: EntryRepository[DietItem] = Depends(get_diet_repo),
):
    try:
        return on_day(repo.list(), date)
    except SynergyError as exc:
        raise_http(exc)


@router.get("/summary", response_model=DietDailySummary, summary="Macro totals for one day")
def get_summary(
    date: str = Query(..., description="YYYY-MM-DD"),
    repo: EntryRepository[DietItem] = Depends(get_diet_repo),
):
    try:
        return daily_summary(repo.list(), date)
    except SynergyError as exc:
        raise_http(exc)


@router.post("/estimate/text", response_model=NutritionEstimate, summary="Estimate nutrition from a description (no storage)")
def estimate_text(request: EstimateTextRequest, client: OracleClient = Depends(get_oracle_client)):
    try:
        return estimate_from_text(request.query, client)
    except SynergyError as exc:
        raise_http(exc)


@router.post("/estimate/image", response_model=NutritionEstimate, summary="Estimate nutrition from a photo (no storage)")
def estimate_image(request: EstimateImageRequest, client: OracleClient = Depends(get_oracle_client)):
    image_bytes = _decode_image_or_400(request.image_base64, max_bytes=settings.max_image_bytes)
    try:
        return estimate_from_image(image_bytes, client)
    except SynergyError as exc:
        raise_http(exc)


@router.post("/log", response_model=DietItem, status_code=201, summary="Log a confirmed estimate")
def log_estimate(request: DietLogRequest, repo: EntryRepository[DietItem] = Depends(get_diet_repo)):
    try:
        return repo.create(estimate_to_diet_item(request.estimate, request.date))
    except SynergyError as exc:
        raise_http(exc)


@router.get("/{item_id}", response_model=DietItem, summary="Get a food log entry")
def get_item(item_id: int, repo: EntryRepository[DietItem] = Depends(get_diet_repo)):
    try:
        return repo.get(item_id)
    except SynergyError as exc:
        raise_http(exc)


@router.post("", response_model=DietItem, status_code=201, summary="Create a food log entry")
def create_item(request: DietItemCreate, repo: EntryRepository[DietItem] = Depends(get_diet_repo)):
    try:
        return repo.create(request)
    except SynergyError as exc:
        raise_http(exc)


@router.put("/{item_id}", response_model=DietItem, summary="Update a food log entry (partial)")
def update_item(item_id: int, request: DietItemUpdate, repo: EntryRepository[DietItem] = Depends(get_diet_repo)):
    try:
        return repo.update(item_id, request)
    except SynergyError as exc:
        raise_http(exc)


@router.delete("/{item_id}", status_code=204, summary="Delete a food log entry")
def delete_item(item_id: int, repo: EntryRepository[DietItem] = Depends(get_diet_repo)):
    try:
        repo.delete(item_id)
    except SynergyError as exc:
        raise_http(exc)
    return Response(status_code=204)
