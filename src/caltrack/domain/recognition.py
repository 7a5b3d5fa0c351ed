"""Models for food candidates from camera or barcode capture."""

from pydantic import BaseModel, Field


class DetectedFood(BaseModel):
    """Candidate food with per-serving nutrients."""

    name: str
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    calories: float = Field(ge=0.0)
    protein_g: float = Field(ge=0.0)
    carbs_g: float = Field(ge=0.0)
    fat_g: float = Field(ge=0.0)
    serving_size: float = Field(gt=0.0)
    serving_unit: str = "g"
    brand: str | None = None
    barcode: str | None = None
    alternatives: list["DetectedFood"] = Field(default_factory=list)
