"""Domain models for logged food entries."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from caltrack.domain.profile import NutritionTargets


class MealType(str, Enum):
    """Meal categories in diary display order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macros."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )


ZERO_TOTALS = MacroTotals(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class FoodEntry:
    """One logged food occurrence.

    Nutrients are per reference serving of ``serving_size`` units and
    ``quantity`` is the consumed amount in the same unit.
    """

    id: UUID
    user_id: UUID
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: float
    serving_unit: str
    quantity: float
    meal_type: MealType
    timestamp: datetime
    brand: str | None = None
    barcode: str | None = None
    image_url: str | None = None
    fiber_g: float | None = None
    sugar_g: float | None = None
    sodium_mg: float | None = None


@dataclass(frozen=True)
class DiaryDay:
    """A single diary day grouped by meal with totals and progress."""

    day: date
    meals: list[tuple[MealType, list[FoodEntry]]]
    totals: MacroTotals
    targets: NutritionTargets
    progress: dict[str, float]
