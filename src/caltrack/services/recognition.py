"""Food recognition and barcode providers that yield food candidates."""

import base64
from dataclasses import dataclass
from typing import Protocol

from caltrack.domain.recognition import DetectedFood
from caltrack.services.nutrition import NutritionService

_NUTRIENT_PROPERTIES: dict[str, object] = {
    "name": {"type": "string"},
    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
    "calories": {"type": "number", "minimum": 0.0},
    "protein_g": {"type": "number", "minimum": 0.0},
    "carbs_g": {"type": "number", "minimum": 0.0},
    "fat_g": {"type": "number", "minimum": 0.0},
    "serving_size": {"type": "number", "exclusiveMinimum": 0.0},
    "serving_unit": {"type": "string"},
}

_CANDIDATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": _NUTRIENT_PROPERTIES,
    "required": list(_NUTRIENT_PROPERTIES),
    "additionalProperties": False,
}

RECOGNITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        **_NUTRIENT_PROPERTIES,
        "alternatives": {"type": "array", "items": _CANDIDATE_SCHEMA},
    },
    "required": [*_NUTRIENT_PROPERTIES, "alternatives"],
    "additionalProperties": False,
}

RECOGNITION_PROMPT = (
    "Identify the main dish in the image. Return its name, confidence (0-1), "
    "calories and macros for one typical serving, the serving size and unit, "
    "and up to two alternative dishes in the same shape."
)


class FoodRecognitionProvider(Protocol):
    """Turns a food photo into a candidate."""

    async def recognize(self, image: bytes) -> DetectedFood:
        """Return the best candidate with alternatives."""


class BarcodeProductProvider(Protocol):
    """Turns a scanned barcode into a candidate."""

    async def lookup(self, code: str) -> DetectedFood:
        """Return the product for a barcode."""


@dataclass
class MockFoodRecognitionProvider(FoodRecognitionProvider):
    """Returns the same salad candidates for any image."""

    async def recognize(self, image: bytes) -> DetectedFood:
        return DetectedFood(
            name="Grilled Chicken Salad",
            confidence=0.92,
            calories=320,
            protein_g=35,
            carbs_g=12,
            fat_g=15,
            serving_size=250,
            serving_unit="g",
            alternatives=[
                DetectedFood(
                    name="Caesar Salad",
                    confidence=0.78,
                    calories=450,
                    protein_g=20,
                    carbs_g=20,
                    fat_g=35,
                    serving_size=300,
                    serving_unit="g",
                ),
                DetectedFood(
                    name="Greek Salad",
                    confidence=0.65,
                    calories=280,
                    protein_g=15,
                    carbs_g=18,
                    fat_g=20,
                    serving_size=280,
                    serving_unit="g",
                ),
            ],
        )


@dataclass
class MockBarcodeProductProvider(BarcodeProductProvider):
    """Returns a fixed yogurt product for any barcode."""

    async def lookup(self, code: str) -> DetectedFood:
        return DetectedFood(
            name="Greek Yogurt",
            brand="Healthy Choice",
            barcode=code,
            calories=150,
            protein_g=15,
            carbs_g=12,
            fat_g=5,
            serving_size=170,
            serving_unit="g",
        )


@dataclass
class NutritionBarcodeProductProvider(BarcodeProductProvider):
    """Resolves barcodes through the food database search."""

    nutrition_service: NutritionService

    async def lookup(self, code: str) -> DetectedFood:
        food = await self.nutrition_service.lookup_barcode(code)
        nutrients = food.nutrients
        return DetectedFood(
            name=food.label,
            barcode=code,
            calories=nutrients.calories,
            protein_g=nutrients.protein_g,
            carbs_g=nutrients.carbs_g,
            fat_g=nutrients.fat_g,
            serving_size=100,
            serving_unit="g",
        )


def image_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[4:12] in {b"ftypheic", b"ftypheix", b"ftypmif1"}:
        return "image/heic"
    return "image/jpeg"
