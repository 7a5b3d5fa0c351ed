"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from caltrack.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Goal,
    NutritionTargets,
    Sex,
    UserProfile,
)
from caltrack.errors import PersistenceError
from caltrack.services.profiles import ProfileRepository

_COLUMNS = (
    "user_id, name, email, age, sex, height_cm, weight_kg, activity_level, goal, "
    "daily_calorie_target, daily_protein_target, daily_carb_target, "
    "daily_fat_target, created_at, updated_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the one-per-user profile."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        response = (
            self.client.table("user_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Upsert the profile row keyed by user id."""
        biometrics = profile.biometrics
        targets = profile.targets
        response = (
            self.client.table("user_profiles")
            .upsert(
                {
                    "user_id": str(profile.user_id),
                    "name": profile.name,
                    "email": profile.email,
                    "age": biometrics.age,
                    "sex": biometrics.sex.value,
                    "height_cm": biometrics.height_cm,
                    "weight_kg": biometrics.weight_kg,
                    "activity_level": biometrics.activity_level.value,
                    "goal": biometrics.goal.value,
                    "daily_calorie_target": targets.calories,
                    "daily_protein_target": targets.protein_g,
                    "daily_carb_target": targets.carbs_g,
                    "daily_fat_target": targets.fat_g,
                    "created_at": profile.created_at.isoformat(),
                    "updated_at": profile.updated_at.isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to save profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        biometrics=BiometricProfile(
            age=int(row["age"]),
            sex=Sex(row["sex"]),
            height_cm=float(row["height_cm"]),
            weight_kg=float(row["weight_kg"]),
            activity_level=ActivityLevel(row["activity_level"]),
            goal=Goal(row["goal"]),
        ),
        targets=NutritionTargets(
            calories=float(row.get("daily_calorie_target", 0.0)),
            protein_g=float(row.get("daily_protein_target", 0.0)),
            carbs_g=float(row.get("daily_carb_target", 0.0)),
            fat_g=float(row.get("daily_fat_target", 0.0)),
        ),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
