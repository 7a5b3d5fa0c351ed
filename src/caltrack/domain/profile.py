"""Domain models for the user profile and daily targets."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class Sex(str, Enum):
    """Biological sex category used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Ordered activity categories with their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"

    @property
    def multiplier(self) -> float:
        return _ACTIVITY_MULTIPLIERS[self]


class Goal(str, Enum):
    """Weight goal with its daily calorie adjustment."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN_WEIGHT = "maintain_weight"
    GAIN_WEIGHT = "gain_weight"
    BUILD_MUSCLE = "build_muscle"

    @property
    def calorie_adjustment(self) -> float:
        return _GOAL_ADJUSTMENTS[self]


_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

_GOAL_ADJUSTMENTS = {
    Goal.LOSE_WEIGHT: -500.0,
    Goal.MAINTAIN_WEIGHT: 0.0,
    Goal.GAIN_WEIGHT: 500.0,
    Goal.BUILD_MUSCLE: 300.0,
}


@dataclass(frozen=True)
class BiometricProfile:
    """Inputs that fully determine the daily targets."""

    age: int
    sex: Sex
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class UserProfile:
    """The single current profile of the local user."""

    user_id: UUID
    name: str
    email: str
    biometrics: BiometricProfile
    targets: NutritionTargets
    created_at: datetime
    updated_at: datetime


# Fallback shown when no profile exists yet; never used by the calculator.
DEFAULT_DISPLAY_TARGETS = NutritionTargets(
    calories=2000.0,
    protein_g=150.0,
    carbs_g=250.0,
    fat_g=65.0,
)
