# -*- coding: utf-8 -*-

from __future__ import annotations

import io
import unittest
from typing import List, Optional

from PIL import Image

from synergy.diet.service import compute_totals, daily_summary, estimate_to_diet_item
from synergy.diet.models import DietItem
from synergy.errors import OracleFailure, ValidationFailure
from synergy.oracle.client import OracleClient, OracleImage
from synergy.oracle.models import NutritionSource
from synergy.oracle.nutrition import (
    estimate_from_image,
    estimate_from_text,
    manual_estimate,
    normalize_estimate,
)


class FakeOracle(OracleClient):
    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []
        self.images: List[OracleImage] = []

    def complete(self, *, system: str, prompt: str, image: Optional[OracleImage] = None) -> str:
        self.prompts.append(prompt)
        if image is not None:
            self.images.append(image)
        if self.error is not None:
            raise self.error
        return self.reply


def _png(width: int, height: int) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), (200, 30, 30, 128)).save(buf, format="PNG")
    return buf.getvalue()


class TestNormalizeEstimate(unittest.TestCase):
    def test_negative_rounds_then_floors(self) -> None:
        est = normalize_estimate(
            {"name": "Soup", "calories": -5.7, "carbs": 12.5, "fat": "3.4g"},
            fallback_name="soup",
            source=NutritionSource.text,
        )
        self.assertEqual(est.calories, 0)
        self.assertEqual(est.protein, 0)
        self.assertEqual(est.carbs, 13)
        self.assertEqual(est.fat, 3)
        self.assertEqual(est.name, "Soup")

    def test_name_falls_back(self) -> None:
        est = normalize_estimate({"calories": 95, "name": "  "}, fallback_name="1 apple", source=NutritionSource.text)
        self.assertEqual(est.name, "1 apple")

    def test_unusable_fields_fail_whole_estimate(self) -> None:
        for raw in ({"calories": "lots"}, {"protein": True}, {"fat": [1]}, ["not", "an", "object"]):
            with self.subTest(raw=raw):
                with self.assertRaises(OracleFailure):
                    normalize_estimate(raw, fallback_name="x", source=NutritionSource.text)

    def test_alias_keys(self) -> None:
        est = normalize_estimate(
            {"calories_kcal": 260, "protein_g": 5, "carbohydrates": 57, "fat_g": 1},
            fallback_name="rice",
            source=NutritionSource.image,
        )
        self.assertEqual((est.calories, est.protein, est.carbs, est.fat), (260, 5, 57, 1))


class TestEstimateFromText(unittest.TestCase):
    def test_fenced_reply_with_trailing_comma(self) -> None:
        oracle = FakeOracle('```json\n{"name": "Banana", "calories": 105.4, "protein": 1.3, "carbs": 27, "fat": 0.4,}\n```')
        est = estimate_from_text("  a banana ", oracle)
        self.assertEqual(est.name, "Banana")
        self.assertEqual((est.calories, est.protein, est.carbs, est.fat), (105, 1, 27, 0))
        self.assertEqual(est.source, NutritionSource.text)
        self.assertEqual(est.time_label(), "AI Calc")
        self.assertIn('"a banana"', oracle.prompts[0])

    def test_blank_query_never_calls_oracle(self) -> None:
        oracle = FakeOracle("{}")
        with self.assertRaises(ValidationFailure):
            estimate_from_text("   ", oracle)
        self.assertEqual(oracle.prompts, [])

    def test_unparseable_reply(self) -> None:
        with self.assertRaises(OracleFailure):
            estimate_from_text("toast", FakeOracle("I think it's about 80 calories"))

    def test_oracle_errors_propagate(self) -> None:
        with self.assertRaises(OracleFailure):
            estimate_from_text("toast", FakeOracle(error=OracleFailure("quota exceeded")))


class TestEstimateFromImage(unittest.TestCase):
    def test_image_is_downscaled_before_the_call(self) -> None:
        oracle = FakeOracle('{"calories": 400, "protein": 20, "carbs": 50, "fat": 12}')
        est = estimate_from_image(_png(1600, 400), oracle)
        self.assertEqual(est.name, "Scanned Food")
        self.assertEqual(est.time_label(), "AI Scan")
        sent = oracle.images[0]
        self.assertEqual(sent.mime, "image/jpeg")
        with Image.open(io.BytesIO(sent.data)) as img:
            self.assertEqual(img.size, (800, 200))
        self.assertTrue(sent.data_url().startswith("data:image/jpeg;base64,"))

    def test_undecodable_image(self) -> None:
        oracle = FakeOracle("{}")
        with self.assertRaises(ValidationFailure):
            estimate_from_image(b"definitely not an image", oracle)
        self.assertEqual(oracle.prompts, [])


class TestManualAndLogging(unittest.TestCase):
    def test_manual_estimate(self) -> None:
        est = manual_estimate("Apple", calories="95", protein="abc", carbs=25.2, fat=None)
        self.assertEqual((est.calories, est.protein, est.carbs, est.fat), (95, 0, 25, 0))
        self.assertEqual(est.time_label(), "Manual")
        with self.assertRaises(ValidationFailure):
            manual_estimate(" ")

    def test_estimate_to_diet_item_and_totals(self) -> None:
        est = manual_estimate("Oats", calories=150, protein=5, carbs=27, fat=3)
        record = estimate_to_diet_item(est, "2024-03-01T08:00:00.000Z")
        self.assertEqual(record.time, "Manual")
        self.assertEqual(record.date, "2024-03-01T08:00:00.000Z")

        items = [
            DietItem(id=1, **record.model_dump()),
            DietItem(id=2, name="Egg", calories=70, protein=6, carbs=0, fat=5, date="2024-03-01T12:00:00"),
            DietItem(id=3, name="Pizza", calories=800, date="2024-03-02"),
        ]
        totals = compute_totals(items[:2])
        self.assertEqual((totals.calories, totals.protein, totals.carbs, totals.fat), (220, 11, 27, 8))
        summary = daily_summary(items, "2024-03-01")
        self.assertEqual(summary.entry_count, 2)
        self.assertEqual(summary.totals, totals)


if __name__ == "__main__":
    unittest.main()
