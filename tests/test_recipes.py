"""Tests for recipes."""

from datetime import UTC, datetime

import pytest

from caltrack.domain.drafts import IngredientDraft, RecipeDraft
from caltrack.domain.entries import MealType
from caltrack.domain.recipes import Recipe
from caltrack.errors import DivisionByZero, RecipeNotFound
from caltrack.services.aggregation import per_entry_totals
from caltrack.services.entries import FoodEntryService
from caltrack.services.recipes import RecipeService, recipe_per_serving, recipe_totals
from tests.conftest import (
    USER_ID,
    InMemoryFoodEntryRepository,
    InMemoryRecipeRepository,
    make_session,
)


def _draft(servings: int = 4) -> RecipeDraft:
    return RecipeDraft(
        name="Chili",
        instructions="Simmer for an hour.",
        servings=servings,
        prep_minutes=15,
        cook_minutes=60,
        ingredients=[
            IngredientDraft(
                name="Beef", amount=500, calories=1250, protein_g=130,
                carbs_g=0, fat_g=80,
            ),
            IngredientDraft(
                name="Beans", amount=400, calories=350, protein_g=22,
                carbs_g=60, fat_g=2,
            ),
        ],
    )


def _service() -> tuple[RecipeService, InMemoryFoodEntryRepository]:
    entries = InMemoryFoodEntryRepository()
    service = RecipeService(InMemoryRecipeRepository(), FoodEntryService(entries))
    return service, entries


def test_totals_and_per_serving() -> None:
    service, _ = _service()
    recipe = service.create_recipe(USER_ID, _draft())

    totals = recipe_totals(recipe)
    per_serving = recipe_per_serving(recipe)

    assert [ingredient.name for ingredient in recipe.ingredients] == ["Beef", "Beans"]
    assert totals.calories == pytest.approx(1600)
    assert per_serving.calories == pytest.approx(400)
    assert per_serving.protein_g == pytest.approx(38)


def test_zero_servings_is_guarded() -> None:
    recipe = Recipe(
        id=USER_ID,
        user_id=USER_ID,
        name="Broken",
        instructions="",
        servings=0,
        prep_minutes=0,
        cook_minutes=0,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )

    with pytest.raises(DivisionByZero):
        recipe_per_serving(recipe)


def test_draft_requires_positive_servings() -> None:
    with pytest.raises(ValueError):
        _draft(servings=0)


def test_log_recipe_creates_single_entry() -> None:
    service, entries = _service()
    recipe = service.create_recipe(USER_ID, _draft())

    entry = service.log_recipe(make_session(), recipe.id, 1.5, MealType.DINNER)

    assert entry.serving_unit == "serving"
    assert entry.quantity == pytest.approx(1.5)
    assert per_entry_totals(entry).calories == pytest.approx(600)
    assert list(entries.entries) == [entry.id]


def test_favorites_sort_first() -> None:
    service, _ = _service()
    first = service.create_recipe(USER_ID, _draft())
    second = service.create_recipe(USER_ID, _draft())

    service.set_favorite(second.id, True)

    assert [recipe.id for recipe in service.list_recipes(USER_ID)] == [
        second.id,
        first.id,
    ]


def test_deleted_recipe_is_gone() -> None:
    service, _ = _service()
    recipe = service.create_recipe(USER_ID, _draft())

    service.delete_recipe(recipe.id)

    with pytest.raises(RecipeNotFound):
        service.get_recipe(recipe.id)
    with pytest.raises(RecipeNotFound):
        service.log_recipe(make_session(), recipe.id, 1, MealType.LUNCH)
