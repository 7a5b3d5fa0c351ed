"""Request bodies specific to the HTTP API."""

from pydantic import BaseModel, Field

from caltrack.domain.entries import MealType
from caltrack.domain.nutrition import FoodItem
from caltrack.domain.recognition import DetectedFood


class LogDetectedRequest(BaseModel):
    """Confirm a camera or barcode candidate."""

    candidate: DetectedFood
    servings: float = Field(default=1.0, gt=0)
    meal_type: MealType


class LogFoodItemRequest(BaseModel):
    """Log a food database result by weight."""

    food: FoodItem
    grams: float = Field(gt=0)
    meal_type: MealType


class LogRecipeRequest(BaseModel):
    servings: float = Field(default=1.0, gt=0)
    meal_type: MealType


class FavoriteRequest(BaseModel):
    is_favorite: bool


class TimezoneRequest(BaseModel):
    timezone: str = Field(min_length=1)


class UnitsRequest(BaseModel):
    units: str = Field(pattern="^(metric|imperial)$")
