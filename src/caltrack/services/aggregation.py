"""Per-entry totals and grouping of logged entries."""

from collections.abc import Callable, Iterable
from datetime import date, datetime

from caltrack.domain.entries import ZERO_TOTALS, FoodEntry, MacroTotals, MealType
from caltrack.domain.profile import NutritionTargets
from caltrack.errors import DivisionByZero

DayFn = Callable[[datetime], date]


def calendar_day(timestamp: datetime) -> date:
    """Default day boundary: the calendar date the timestamp carries."""
    return timestamp.date()


def per_entry_totals(entry: FoodEntry) -> MacroTotals:
    """Scale per-serving nutrients to the consumed quantity."""
    if entry.serving_size <= 0:
        raise DivisionByZero(
            f"Entry {entry.name!r} has serving size {entry.serving_size}"
        )
    factor = entry.quantity / entry.serving_size
    return MacroTotals(
        calories=entry.calories * factor,
        protein_g=entry.protein_g * factor,
        carbs_g=entry.carbs_g * factor,
        fat_g=entry.fat_g * factor,
    )


def daily_totals(entries: Iterable[FoodEntry]) -> MacroTotals:
    """Sum per-entry totals."""
    total = ZERO_TOTALS
    for entry in entries:
        total = total + per_entry_totals(entry)
    return total


def group_by_day(
    entries: Iterable[FoodEntry], day_fn: DayFn = calendar_day
) -> dict[date, list[FoodEntry]]:
    """Partition entries by day. Days without entries are absent."""
    grouped: dict[date, list[FoodEntry]] = {}
    for entry in entries:
        grouped.setdefault(day_fn(entry.timestamp), []).append(entry)
    return grouped


def group_by_meal(
    entries: Iterable[FoodEntry],
) -> list[tuple[MealType, list[FoodEntry]]]:
    """Group a day's entries by meal type in fixed meal order, skipping empty."""
    buckets: dict[MealType, list[FoodEntry]] = {meal: [] for meal in MealType}
    for entry in entries:
        buckets[entry.meal_type].append(entry)
    return [(meal, items) for meal, items in buckets.items() if items]


def remaining_against(totals: MacroTotals, targets: NutritionTargets) -> MacroTotals:
    """Target minus consumed for each macro; negative once exceeded."""
    return MacroTotals(
        calories=targets.calories - totals.calories,
        protein_g=targets.protein_g - totals.protein_g,
        carbs_g=targets.carbs_g - totals.carbs_g,
        fat_g=targets.fat_g - totals.fat_g,
    )


def progress_against(
    totals: MacroTotals, targets: NutritionTargets
) -> dict[str, float]:
    """Fraction of each target reached, clamped to ``[0, 1]``."""
    pairs = {
        "calories": (totals.calories, targets.calories),
        "protein_g": (totals.protein_g, targets.protein_g),
        "carbs_g": (totals.carbs_g, targets.carbs_g),
        "fat_g": (totals.fat_g, targets.fat_g),
    }
    return {
        key: min(max(value / target, 0.0), 1.0) if target > 0 else 0.0
        for key, (value, target) in pairs.items()
    }
