"""Validated input models for creating and editing records."""

from datetime import datetime

from pydantic import BaseModel, Field

from caltrack.domain.entries import MealType
from caltrack.domain.profile import ActivityLevel, BiometricProfile, Goal, Sex


class ProfileDraft(BaseModel):
    """Editable profile fields captured at onboarding or on edit."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    age: int = Field(ge=0)
    sex: Sex
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    activity_level: ActivityLevel
    goal: Goal

    def biometrics(self) -> BiometricProfile:
        return BiometricProfile(
            age=self.age,
            sex=self.sex,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            goal=self.goal,
        )


class FoodEntryDraft(BaseModel):
    """Food entry input. ``servings`` is a count of reference servings."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    serving_size: float = Field(gt=0)
    serving_unit: str = "g"
    servings: float = Field(default=1.0, gt=0)
    meal_type: MealType
    timestamp: datetime | None = None
    brand: str | None = None
    barcode: str | None = None
    image_url: str | None = None
    fiber_g: float | None = Field(default=None, ge=0)
    sugar_g: float | None = Field(default=None, ge=0)
    sodium_mg: float | None = Field(default=None, ge=0)


class IngredientDraft(BaseModel):
    name: str = Field(min_length=1)
    amount: float = Field(gt=0)
    unit: str = "g"
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)


class RecipeDraft(BaseModel):
    name: str = Field(min_length=1)
    instructions: str = ""
    servings: int = Field(gt=0)
    prep_minutes: int = Field(default=0, ge=0)
    cook_minutes: int = Field(default=0, ge=0)
    ingredients: list[IngredientDraft] = Field(default_factory=list)
    image_url: str | None = None
