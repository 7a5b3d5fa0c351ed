"""Trend series, on-track days and streaks over logged entries."""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from caltrack.domain.entries import ZERO_TOTALS, FoodEntry, MacroTotals
from caltrack.domain.insights import (
    FavoriteFood,
    Highlights,
    LifetimeStats,
    Metric,
    SeriesPoint,
)
from caltrack.services.aggregation import (
    DayFn,
    calendar_day,
    daily_totals,
    group_by_day,
    per_entry_totals,
)

DEFAULT_TOLERANCE = 0.10
PROTEIN_CHAMPION_G = 30.0


def metric_value(totals: MacroTotals, metric: Metric) -> float:
    """Read a metric off a totals record."""
    if metric == Metric.CALORIES:
        return totals.calories
    if metric == Metric.PROTEIN:
        return totals.protein_g
    if metric == Metric.CARBS:
        return totals.carbs_g
    if metric == Metric.FAT:
        return totals.fat_g
    # No weight history is tracked.
    return 0.0


def build_series(
    entries: Iterable[FoodEntry],
    metric: Metric,
    start: datetime,
    end: datetime,
    day_fn: DayFn = calendar_day,
) -> list[SeriesPoint]:
    """Return one point per day with entries in ``[start, end]``, ascending.

    Days without entries are not zero-filled.
    """
    in_window = [entry for entry in entries if start <= entry.timestamp <= end]
    grouped = group_by_day(in_window, day_fn)
    return [
        SeriesPoint(day=day, value=metric_value(daily_totals(items), metric))
        for day, items in sorted(grouped.items())
    ]


def average_per_day(
    entries: Sequence[FoodEntry], day_fn: DayFn = calendar_day
) -> MacroTotals:
    """Average of the daily totals over days that have entries."""
    grouped = group_by_day(entries, day_fn)
    if not grouped:
        return ZERO_TOTALS
    total = daily_totals(entries)
    days = len(grouped)
    return MacroTotals(
        calories=total.calories / days,
        protein_g=total.protein_g / days,
        carbs_g=total.carbs_g / days,
        fat_g=total.fat_g / days,
    )


def is_on_track(
    total_calories: float,
    calorie_target: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
    """Return True when calories are within ``tolerance`` of the target."""
    return abs(total_calories - calorie_target) <= calorie_target * tolerance


def days_on_track(
    entries: Iterable[FoodEntry],
    calorie_target: float,
    tolerance: float = DEFAULT_TOLERANCE,
    day_fn: DayFn = calendar_day,
) -> int:
    """Count distinct days whose calories fall inside the tolerance band."""
    grouped = group_by_day(entries, day_fn)
    return sum(
        1
        for items in grouped.values()
        if is_on_track(daily_totals(items).calories, calorie_target, tolerance)
    )


def current_streak(
    entries: Iterable[FoodEntry], today: date, day_fn: DayFn = calendar_day
) -> int:
    """Count consecutive logged days ending at ``today``.

    The first day without entries ends the streak; no entry today means 0.
    """
    logged_days = {day_fn(entry.timestamp) for entry in entries}
    streak = 0
    expected = today
    while expected in logged_days:
        streak += 1
        expected -= timedelta(days=1)
    return streak


def lifetime_stats(
    entries: Sequence[FoodEntry], day_fn: DayFn = calendar_day
) -> LifetimeStats:
    """Count entries and tracked days, and the mean calories per entry."""
    if not entries:
        return LifetimeStats(
            total_entries=0, days_tracked=0, average_calories_per_entry=0.0
        )
    calories = sum(per_entry_totals(entry).calories for entry in entries)
    return LifetimeStats(
        total_entries=len(entries),
        days_tracked=len({day_fn(entry.timestamp) for entry in entries}),
        average_calories_per_entry=calories / len(entries),
    )


def insights(entries: Sequence[FoodEntry]) -> Highlights:
    """Favorite food and average protein per entry.

    Ties for the favorite go to the name logged first. The protein badge
    needs an average strictly above ``PROTEIN_CHAMPION_G``.
    """
    counts = Counter(entry.name for entry in entries)
    favorite = None
    if counts:
        name, count = counts.most_common(1)[0]
        favorite = FavoriteFood(name=name, count=count)
    average_protein = (
        sum(per_entry_totals(entry).protein_g for entry in entries) / len(entries)
        if entries
        else 0.0
    )
    return Highlights(
        favorite_food=favorite,
        average_protein_per_entry=average_protein,
        is_protein_champion=average_protein > PROTEIN_CHAMPION_G,
    )
