"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from caltrack.domain.entries import FoodEntry, MealType
from caltrack.errors import PersistenceError
from caltrack.services.entries import FoodEntryRepository

_COLUMNS = (
    "id, user_id, name, brand, barcode, image_url, calories, protein_g, carbs_g, "
    "fat_g, fiber_g, sugar_g, sodium_mg, serving_size, serving_unit, quantity, "
    "meal_type, logged_at"
)


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entries."""

    client: Client

    def add_entry(self, entry: FoodEntry) -> FoodEntry:
        response = self.client.table("food_entries").insert(_to_row(entry)).execute()
        if not response.data:
            raise PersistenceError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        response = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_entry(self, entry: FoodEntry) -> FoodEntry:
        row = _to_row(entry)
        row.pop("id")
        response = (
            self.client.table("food_entries")
            .update(row)
            .eq("id", str(entry.id))
            .execute()
        )
        if not response.data:
            raise PersistenceError(f"Failed to update food entry {entry.id}")
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        self.client.table("food_entries").delete().eq("id", str(entry_id)).execute()

    def delete_entries(self, user_id: UUID, start: datetime, end: datetime) -> int:
        response = (
            self.client.table("food_entries")
            .delete()
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .execute()
        )
        return len(response.data or [])

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodEntry]:
        response = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_all_entries(self, user_id: UUID) -> list[FoodEntry]:
        response = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _to_row(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "user_id": str(entry.user_id),
        "name": entry.name,
        "brand": entry.brand,
        "barcode": entry.barcode,
        "image_url": entry.image_url,
        "calories": entry.calories,
        "protein_g": entry.protein_g,
        "carbs_g": entry.carbs_g,
        "fat_g": entry.fat_g,
        "fiber_g": entry.fiber_g,
        "sugar_g": entry.sugar_g,
        "sodium_mg": entry.sodium_mg,
        "serving_size": entry.serving_size,
        "serving_unit": entry.serving_unit,
        "quantity": entry.quantity,
        "meal_type": entry.meal_type.value,
        "logged_at": entry.timestamp.isoformat(),
    }


def _optional_float(value: object) -> float | None:
    return float(value) if isinstance(value, int | float) else None


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    return FoodEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        barcode=row.get("barcode"),
        image_url=row.get("image_url"),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        fiber_g=_optional_float(row.get("fiber_g")),
        sugar_g=_optional_float(row.get("sugar_g")),
        sodium_mg=_optional_float(row.get("sodium_mg")),
        serving_size=float(row.get("serving_size", 0.0)),
        serving_unit=str(row.get("serving_unit", "g")),
        quantity=float(row.get("quantity", 0.0)),
        meal_type=MealType(row["meal_type"]),
        timestamp=datetime.fromisoformat(str(row["logged_at"])),
    )
