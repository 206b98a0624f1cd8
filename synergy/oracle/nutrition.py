# -*- coding: utf-8 -*-
"""Oracle — nutrition estimates from a food description or a meal photo."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from ..config import settings
from ..errors import OracleFailure, ValidationFailure
from .client import OracleClient, OracleImage
from .imaging import prepare_image
from .models import NutritionEstimate, NutritionSource
from .parsing import coerce_number, first_present, parse_json_object

logger = logging.getLogger(__name__)

SCANNED_FOOD = "Scanned Food"

# Accepted spellings per macro, first match wins.
_MACRO_KEYS = {
    "calories": ["calories", "calories_kcal", "kcal", "energy_kcal"],
    "protein": ["protein", "protein_g"],
    "carbs": ["carbs", "carbs_g", "carbohydrates", "carbohydrate_g"],
    "fat": ["fat", "fat_g", "total_fat"],
}

SYSTEM_PROMPT = (
    "You are a nutrition assistant. Return STRICT JSON only. "
    "Do NOT wrap in markdown or code fences. "
    "Output MUST start with '{' and end with '}'. "
    'Use the keys "name", "calories", "protein", "carbs", "fat". '
    "Numbers are integers: calories in kcal, macros in grams."
)


def _text_prompt(query: str) -> str:
    return (
        f'Identify nutritional info for: "{query}".\n'
        "Rules:\n"
        "1. Estimate values for a standard serving size if not specified.\n"
        "2. Use integer values.\n"
        "3. Values are 0 only when the food actually has none (like water).\n"
    )


IMAGE_PROMPT = (
    "Identify the main food in this image.\n"
    "Rules: Estimate values for the visible portion. Use rounded integers.\n"
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _macro(raw: Dict[str, Any], field: str) -> int:
    value = first_present(raw, _MACRO_KEYS[field])
    if value is None:
        return 0
    number = coerce_number(value)
    if number is None:
        raise OracleFailure(f"Oracle returned a non-numeric {field}: {value!r}")
    return max(0, round_half_up(number))


def normalize_estimate(
    raw: Any,
    *,
    fallback_name: str,
    source: NutritionSource,
) -> NutritionEstimate:
    """Rounded, non-negative estimate from an oracle object.

    Missing macros become 0. Any present but unusable value fails the whole
    estimate.
    """
    if not isinstance(raw, dict):
        raise OracleFailure("Oracle estimate is not an object")
    name = raw.get("name")
    name = name.strip() if isinstance(name, str) else ""
    return NutritionEstimate(
        name=name or fallback_name,
        calories=_macro(raw, "calories"),
        protein=_macro(raw, "protein"),
        carbs=_macro(raw, "carbs"),
        fat=_macro(raw, "fat"),
        source=source,
    )


def estimate_from_text(query: str, client: OracleClient) -> NutritionEstimate:
    text = (query or "").strip()
    if not text:
        raise ValidationFailure("Food description is empty")
    content = client.complete(system=SYSTEM_PROMPT, prompt=_text_prompt(text))
    estimate = normalize_estimate(
        parse_json_object(content),
        fallback_name=text,
        source=NutritionSource.text,
    )
    logger.info("text estimate %r -> %s kcal", estimate.name, estimate.calories)
    return estimate


def estimate_from_image(
    image_bytes: bytes,
    client: OracleClient,
    *,
    max_dimension: Optional[int] = None,
    quality: Optional[int] = None,
) -> NutritionEstimate:
    prepared = prepare_image(
        image_bytes,
        max_dimension=max_dimension or settings.image_max_dimension,
        quality=quality or settings.image_quality,
    )
    content = client.complete(
        system=SYSTEM_PROMPT,
        prompt=IMAGE_PROMPT,
        image=OracleImage(data=prepared.data, mime=prepared.mime),
    )
    estimate = normalize_estimate(
        parse_json_object(content),
        fallback_name=SCANNED_FOOD,
        source=NutritionSource.image,
    )
    logger.info("image estimate %r -> %s kcal", estimate.name, estimate.calories)
    return estimate


def manual_estimate(
    name: str,
    calories: Any = 0,
    protein: Any = 0,
    carbs: Any = 0,
    fat: Any = 0,
) -> NutritionEstimate:
    """Hand-entered values; unparseable numbers count as 0."""
    label = (name or "").strip()
    if not label:
        raise ValidationFailure("Food name is empty")

    def num(value: Any) -> int:
        number = coerce_number(value)
        return 0 if number is None else max(0, round_half_up(number))

    return NutritionEstimate(
        name=label,
        calories=num(calories),
        protein=num(protein),
        carbs=num(carbs),
        fat=num(fat),
        source=NutritionSource.manual,
    )
