"""Recipe storage, nutrition totals and logging."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from caltrack.domain.drafts import FoodEntryDraft, RecipeDraft
from caltrack.domain.entries import ZERO_TOTALS, FoodEntry, MacroTotals, MealType
from caltrack.domain.recipes import Ingredient, Recipe
from caltrack.domain.session import SessionContext
from caltrack.errors import DivisionByZero, RecipeNotFound
from caltrack.services.entries import FoodEntryService

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes and their ingredients."""

    def add_recipe(self, recipe: Recipe) -> Recipe:
        """Insert a recipe with its ingredients."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe with ingredients, if present."""

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes, favorites first."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe and all of its ingredients."""

    def set_favorite(self, recipe_id: UUID, is_favorite: bool) -> None:
        """Mark or unmark a recipe as favorite."""


def recipe_totals(recipe: Recipe) -> MacroTotals:
    """Sum nutrients over all ingredients."""
    total = ZERO_TOTALS
    for ingredient in recipe.ingredients:
        total = total + MacroTotals(
            calories=ingredient.calories,
            protein_g=ingredient.protein_g,
            carbs_g=ingredient.carbs_g,
            fat_g=ingredient.fat_g,
        )
    return total


def recipe_per_serving(recipe: Recipe) -> MacroTotals:
    """Nutrients of one serving."""
    if recipe.servings <= 0:
        raise DivisionByZero(f"Recipe {recipe.name!r} has no servings")
    total = recipe_totals(recipe)
    return MacroTotals(
        calories=total.calories / recipe.servings,
        protein_g=total.protein_g / recipe.servings,
        carbs_g=total.carbs_g / recipe.servings,
        fat_g=total.fat_g / recipe.servings,
    )


@dataclass
class RecipeService:
    """Application service for recipes."""

    repository: RecipeRepository
    entry_service: FoodEntryService

    def create_recipe(self, user_id: UUID, draft: RecipeDraft) -> Recipe:
        recipe = Recipe(
            id=uuid4(),
            user_id=user_id,
            name=draft.name,
            instructions=draft.instructions,
            servings=draft.servings,
            prep_minutes=draft.prep_minutes,
            cook_minutes=draft.cook_minutes,
            created_at=datetime.now(tz=UTC),
            ingredients=[
                Ingredient(**ingredient.model_dump())
                for ingredient in draft.ingredients
            ],
            image_url=draft.image_url,
        )
        try:
            return self.repository.add_recipe(recipe)
        except Exception:
            _logger.exception("Failed to save recipe %r", draft.name)
            raise

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFound(f"Recipe {recipe_id} not found")
        return recipe

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        return self.repository.list_recipes(user_id)

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.get_recipe(recipe_id)
        self.repository.delete_recipe(recipe_id)

    def set_favorite(self, recipe_id: UUID, is_favorite: bool) -> None:
        self.get_recipe(recipe_id)
        self.repository.set_favorite(recipe_id, is_favorite)

    def log_recipe(
        self,
        session: SessionContext,
        recipe_id: UUID,
        servings: float,
        meal_type: MealType,
    ) -> FoodEntry:
        """Log servings of a recipe as a single food entry."""
        recipe = self.get_recipe(recipe_id)
        per_serving = recipe_per_serving(recipe)
        draft = FoodEntryDraft(
            name=recipe.name,
            calories=per_serving.calories,
            protein_g=per_serving.protein_g,
            carbs_g=per_serving.carbs_g,
            fat_g=per_serving.fat_g,
            serving_size=1.0,
            serving_unit="serving",
            servings=servings,
            meal_type=meal_type,
            image_url=recipe.image_url,
        )
        return self.entry_service.log_entry(session, draft)
