"""Models for the remote food database responses."""

from pydantic import BaseModel, ConfigDict, Field


class Nutrients(BaseModel):
    """Edamam nutrient block; every field is optional and reads as 0."""

    model_config = ConfigDict(populate_by_name=True)

    energy_kcal: float | None = Field(default=None, alias="ENERC_KCAL")
    protein: float | None = Field(default=None, alias="PROCNT")
    fat: float | None = Field(default=None, alias="FAT")
    carbohydrate: float | None = Field(default=None, alias="CHOCDF")
    fiber: float | None = Field(default=None, alias="FIBTG")
    sugar: float | None = Field(default=None, alias="SUGAR")

    @property
    def calories(self) -> float:
        return self.energy_kcal or 0.0

    @property
    def protein_g(self) -> float:
        return self.protein or 0.0

    @property
    def fat_g(self) -> float:
        return self.fat or 0.0

    @property
    def carbs_g(self) -> float:
        return self.carbohydrate or 0.0

    @property
    def fiber_g(self) -> float:
        return self.fiber or 0.0

    @property
    def sugar_g(self) -> float:
        return self.sugar or 0.0


class FoodItem(BaseModel):
    """Food returned by the database; nutrients are per 100 g."""

    model_config = ConfigDict(populate_by_name=True)

    food_id: str = Field(alias="foodId")
    label: str
    nutrients: Nutrients = Field(default_factory=Nutrients)
    category: str | None = None
    category_label: str | None = Field(default=None, alias="categoryLabel")
    image: str | None = None


class _FoodWrapper(BaseModel):
    food: FoodItem


class FoodSearchResult(BaseModel):
    """Parsed matches plus optional hints for a query."""

    parsed: list[FoodItem] = Field(default_factory=list)
    hints: list[FoodItem] | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "FoodSearchResult":
        """Flatten the ``parsed[].food`` / ``hints[].food`` response shape."""
        parsed = [
            _FoodWrapper.model_validate(row).food
            for row in payload.get("parsed") or []
        ]
        raw_hints = payload.get("hints")
        hints = (
            [_FoodWrapper.model_validate(row).food for row in raw_hints]
            if isinstance(raw_hints, list)
            else None
        )
        return cls(parsed=parsed, hints=hints)
