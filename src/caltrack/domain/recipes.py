"""Domain models for recipes."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Ingredient:
    """Ingredient owned by a recipe; nutrients are for the listed amount."""

    name: str
    amount: float
    unit: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class Recipe:
    """Recipe with its ordered ingredient list."""

    id: UUID
    user_id: UUID
    name: str
    instructions: str
    servings: int
    prep_minutes: int
    cook_minutes: int
    created_at: datetime
    ingredients: list[Ingredient] = field(default_factory=list)
    is_favorite: bool = False
    image_url: str | None = None
