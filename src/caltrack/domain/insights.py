"""Domain models for trends and progress views."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from caltrack.domain.entries import MacroTotals
from caltrack.domain.profile import NutritionTargets


class TimeRange(str, Enum):
    """Look-back windows for the insights view."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"

    @property
    def days(self) -> int:
        return {"week": 7, "month": 30, "three_months": 90}[self.value]


class Metric(str, Enum):
    """Series metrics. ``WEIGHT`` has no history and always reads 0."""

    CALORIES = "calories"
    PROTEIN = "protein"
    CARBS = "carbs"
    FAT = "fat"
    WEIGHT = "weight"


@dataclass(frozen=True)
class SeriesPoint:
    """Daily value of a metric."""

    day: date
    value: float


@dataclass(frozen=True)
class FavoriteFood:
    """Most often logged food name in a window."""

    name: str
    count: int


@dataclass(frozen=True)
class Highlights:
    """Notable patterns over a set of entries."""

    favorite_food: FavoriteFood | None
    average_protein_per_entry: float
    is_protein_champion: bool


@dataclass(frozen=True)
class InsightsReport:
    """Trend series and progress summary for a time range."""

    time_range: TimeRange
    metric: Metric
    series: list[SeriesPoint]
    average_calories: float
    days_on_track: int
    current_streak: int
    highlights: Highlights


@dataclass(frozen=True)
class DailyProgress:
    """Today's totals measured against the targets."""

    day: date
    totals: MacroTotals
    targets: NutritionTargets
    remaining: MacroTotals
    progress: dict[str, float]


@dataclass(frozen=True)
class LifetimeStats:
    """All-time logging statistics."""

    total_entries: int
    days_tracked: int
    average_calories_per_entry: float
