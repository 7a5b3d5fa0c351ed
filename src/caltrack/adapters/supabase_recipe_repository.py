"""Supabase repository for recipes and their ingredients."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from caltrack.domain.recipes import Ingredient, Recipe
from caltrack.errors import PersistenceError
from caltrack.services.recipes import RecipeRepository

_RECIPE_COLUMNS = (
    "id, user_id, name, instructions, servings, prep_minutes, cook_minutes, "
    "created_at, is_favorite, image_url"
)
_INGREDIENT_COLUMNS = (
    "recipe_id, position, name, amount, unit, calories, protein_g, carbs_g, fat_g"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes."""

    client: Client

    def add_recipe(self, recipe: Recipe) -> Recipe:
        """Insert the recipe, then its ingredients; undo the recipe on failure."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "id": str(recipe.id),
                    "user_id": str(recipe.user_id),
                    "name": recipe.name,
                    "instructions": recipe.instructions,
                    "servings": recipe.servings,
                    "prep_minutes": recipe.prep_minutes,
                    "cook_minutes": recipe.cook_minutes,
                    "created_at": recipe.created_at.isoformat(),
                    "is_favorite": recipe.is_favorite,
                    "image_url": recipe.image_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create recipe")
        if recipe.ingredients:
            try:
                self.client.table("recipe_ingredients").insert(
                    [
                        _ingredient_row(recipe.id, position, ingredient)
                        for position, ingredient in enumerate(recipe.ingredients)
                    ]
                ).execute()
            except Exception:
                self.client.table("recipes").delete().eq(
                    "id", str(recipe.id)
                ).execute()
                raise
        return recipe

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        response = (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0], self._ingredients([recipe_id]))

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        response = (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .eq("user_id", str(user_id))
            .order("is_favorite", desc=True)
            .order("created_at", desc=True)
            .execute()
        )
        rows = response.data or []
        ingredients = self._ingredients([UUID(str(row["id"])) for row in rows])
        return [_parse_recipe(row, ingredients) for row in rows]

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.client.table("recipe_ingredients").delete().eq(
            "recipe_id", str(recipe_id)
        ).execute()
        self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()

    def set_favorite(self, recipe_id: UUID, is_favorite: bool) -> None:
        self.client.table("recipes").update({"is_favorite": is_favorite}).eq(
            "id", str(recipe_id)
        ).execute()

    def _ingredients(self, recipe_ids: list[UUID]) -> dict[str, list[Ingredient]]:
        if not recipe_ids:
            return {}
        response = (
            self.client.table("recipe_ingredients")
            .select(_INGREDIENT_COLUMNS)
            .in_("recipe_id", [str(recipe_id) for recipe_id in recipe_ids])
            .order("position", desc=False)
            .execute()
        )
        grouped: dict[str, list[Ingredient]] = {}
        for row in response.data or []:
            grouped.setdefault(str(row["recipe_id"]), []).append(
                Ingredient(
                    name=str(row.get("name", "")),
                    amount=float(row.get("amount", 0.0)),
                    unit=str(row.get("unit", "g")),
                    calories=float(row.get("calories", 0.0)),
                    protein_g=float(row.get("protein_g", 0.0)),
                    carbs_g=float(row.get("carbs_g", 0.0)),
                    fat_g=float(row.get("fat_g", 0.0)),
                )
            )
        return grouped


def _ingredient_row(
    recipe_id: UUID, position: int, ingredient: Ingredient
) -> dict[str, object]:
    return {
        "recipe_id": str(recipe_id),
        "position": position,
        "name": ingredient.name,
        "amount": ingredient.amount,
        "unit": ingredient.unit,
        "calories": ingredient.calories,
        "protein_g": ingredient.protein_g,
        "carbs_g": ingredient.carbs_g,
        "fat_g": ingredient.fat_g,
    }


def _parse_recipe(
    row: dict[str, object], ingredients: dict[str, list[Ingredient]]
) -> Recipe:
    return Recipe(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        instructions=str(row.get("instructions") or ""),
        servings=int(row.get("servings", 0)),
        prep_minutes=int(row.get("prep_minutes") or 0),
        cook_minutes=int(row.get("cook_minutes") or 0),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        ingredients=ingredients.get(str(row["id"]), []),
        is_favorite=bool(row.get("is_favorite", False)),
        image_url=row.get("image_url"),
    )
