"""Food entry logging and diary views."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from caltrack.domain.drafts import FoodEntryDraft
from caltrack.domain.entries import DiaryDay, FoodEntry, MealType
from caltrack.domain.nutrition import FoodItem
from caltrack.domain.recognition import DetectedFood
from caltrack.domain.session import SessionContext
from caltrack.errors import EntryNotFound
from caltrack.services.aggregation import (
    daily_totals,
    group_by_meal,
    progress_against,
)
from caltrack.services.session import session_targets

FOOD_DATABASE_SERVING_G = 100.0

_logger = logging.getLogger(__name__)


class FoodEntryRepository(Protocol):
    """Persistence interface for food entries."""

    def add_entry(self, entry: FoodEntry) -> FoodEntry:
        """Insert an entry and return it."""

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return an entry by id, if present."""

    def update_entry(self, entry: FoodEntry) -> FoodEntry:
        """Replace an existing entry and return it."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""

    def delete_entries(self, user_id: UUID, start: datetime, end: datetime) -> int:
        """Delete entries in ``[start, end)`` and return how many were removed."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodEntry]:
        """Return entries in ``[start, end)`` ordered by timestamp."""

    def list_all_entries(self, user_id: UUID) -> list[FoodEntry]:
        """Return every entry of a user ordered by timestamp."""


@dataclass
class FoodEntryService:
    """Service that builds, persists and groups food entries.

    ``FoodEntry.quantity`` always holds the consumed amount in the serving
    unit. Serving counts coming from input are converted here, once.
    """

    repository: FoodEntryRepository

    def log_entry(self, session: SessionContext, draft: FoodEntryDraft) -> FoodEntry:
        """Persist a manually entered food."""
        entry = FoodEntry(
            id=uuid4(),
            user_id=session.user_id,
            name=draft.name,
            calories=draft.calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            serving_size=draft.serving_size,
            serving_unit=draft.serving_unit,
            quantity=draft.servings * draft.serving_size,
            meal_type=draft.meal_type,
            timestamp=_resolve_timestamp(session, draft.timestamp),
            brand=draft.brand,
            barcode=draft.barcode,
            image_url=draft.image_url,
            fiber_g=draft.fiber_g,
            sugar_g=draft.sugar_g,
            sodium_mg=draft.sodium_mg,
        )
        return self._add(entry)

    def log_detected(
        self,
        session: SessionContext,
        detected: DetectedFood,
        servings: float,
        meal_type: MealType,
    ) -> FoodEntry:
        """Persist a camera or barcode candidate."""
        draft = FoodEntryDraft(
            name=detected.name,
            calories=detected.calories,
            protein_g=detected.protein_g,
            carbs_g=detected.carbs_g,
            fat_g=detected.fat_g,
            serving_size=detected.serving_size,
            serving_unit=detected.serving_unit,
            servings=servings,
            meal_type=meal_type,
            brand=detected.brand,
            barcode=detected.barcode,
        )
        return self.log_entry(session, draft)

    def log_food_item(
        self,
        session: SessionContext,
        food: FoodItem,
        grams: float,
        meal_type: MealType,
    ) -> FoodEntry:
        """Persist a food database result; its nutrients are per 100 g."""
        draft = FoodEntryDraft(
            name=food.label,
            calories=food.nutrients.calories,
            protein_g=food.nutrients.protein_g,
            carbs_g=food.nutrients.carbs_g,
            fat_g=food.nutrients.fat_g,
            fiber_g=food.nutrients.fiber_g,
            sugar_g=food.nutrients.sugar_g,
            serving_size=FOOD_DATABASE_SERVING_G,
            serving_unit="g",
            servings=grams / FOOD_DATABASE_SERVING_G,
            meal_type=meal_type,
            image_url=food.image,
        )
        return self.log_entry(session, draft)

    def get_entry(self, entry_id: UUID) -> FoodEntry:
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            raise EntryNotFound(f"Entry {entry_id} not found")
        return entry

    def edit_entry(
        self, session: SessionContext, entry_id: UUID, draft: FoodEntryDraft
    ) -> FoodEntry:
        """Replace an entry's fields in place, keeping its id and owner.

        A new timestamp is resolved like one given to ``log_entry``; without
        one the entry keeps its current time.
        """
        current = self.get_entry(entry_id)
        updated = replace(
            current,
            name=draft.name,
            calories=draft.calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            serving_size=draft.serving_size,
            serving_unit=draft.serving_unit,
            quantity=draft.servings * draft.serving_size,
            meal_type=draft.meal_type,
            timestamp=(
                _resolve_timestamp(session, draft.timestamp)
                if draft.timestamp is not None
                else current.timestamp
            ),
            brand=draft.brand,
            barcode=draft.barcode,
            image_url=draft.image_url,
            fiber_g=draft.fiber_g,
            sugar_g=draft.sugar_g,
            sodium_mg=draft.sodium_mg,
        )
        try:
            return self.repository.update_entry(updated)
        except Exception:
            _logger.exception("Failed to update entry %s", entry_id)
            raise

    def delete_entry(self, entry_id: UUID) -> None:
        self.get_entry(entry_id)
        self.repository.delete_entry(entry_id)

    def duplicate_entry(self, entry_id: UUID, keep_timestamp: bool = True) -> FoodEntry:
        """Copy an entry under a new id.

        Every field is copied, timestamp included, unless ``keep_timestamp``
        is False, in which case the copy is stamped now.
        """
        original = self.get_entry(entry_id)
        timestamp = original.timestamp if keep_timestamp else datetime.now(tz=UTC)
        return self._add(replace(original, id=uuid4(), timestamp=timestamp))

    def entries_for_day(self, session: SessionContext, day: date) -> list[FoodEntry]:
        """Return a local day's entries in timestamp order."""
        start, end = session.day_bounds(day)
        return self.repository.list_entries(
            session.user_id, start.astimezone(UTC), end.astimezone(UTC)
        )

    def clear_day(self, session: SessionContext, day: date) -> int:
        """Delete all entries of a local day."""
        start, end = session.day_bounds(day)
        removed = self.repository.delete_entries(
            session.user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        _logger.info("Cleared %s entries for %s", removed, day)
        return removed

    def diary_for_day(self, session: SessionContext, day: date) -> DiaryDay:
        """Group a day's entries by meal with totals against targets."""
        entries = self.entries_for_day(session, day)
        totals = daily_totals(entries)
        targets = session_targets(session)
        return DiaryDay(
            day=day,
            meals=group_by_meal(entries),
            totals=totals,
            targets=targets,
            progress=progress_against(totals, targets),
        )

    def _add(self, entry: FoodEntry) -> FoodEntry:
        try:
            return self.repository.add_entry(entry)
        except Exception:
            _logger.exception("Failed to save entry %r", entry.name)
            raise


def _resolve_timestamp(session: SessionContext, value: datetime | None) -> datetime:
    if value is None:
        return datetime.now(tz=UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=session.tz)
    return value
