"""Daily calorie and macro target calculator."""

from caltrack.domain.profile import BiometricProfile, Goal, NutritionTargets, Sex

KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARBS = 4.0
KCAL_PER_G_FAT = 9.0


def compute_bmr(profile: BiometricProfile) -> float:
    """Return the basal metabolic rate in kcal/day (Harris-Benedict, revised)."""
    if profile.sex == Sex.MALE:
        return (
            88.362
            + 13.397 * profile.weight_kg
            + 4.799 * profile.height_cm
            - 5.677 * profile.age
        )
    return (
        447.593
        + 9.247 * profile.weight_kg
        + 3.098 * profile.height_cm
        - 4.330 * profile.age
    )


def compute_targets(profile: BiometricProfile) -> NutritionTargets:
    """Compute daily targets from a validated biometric profile.

    Carbs take whatever calories remain after protein and fat. A negative
    carb target is returned as-is.
    """
    calories = (
        compute_bmr(profile) * profile.activity_level.multiplier
        + profile.goal.calorie_adjustment
    )
    if profile.goal == Goal.BUILD_MUSCLE:
        protein_g = profile.weight_kg * 2.2
        fat_g = calories * 0.25 / KCAL_PER_G_FAT
    else:
        protein_g = profile.weight_kg * 1.6
        fat_g = calories * 0.30 / KCAL_PER_G_FAT
    carbs_g = (
        calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    ) / KCAL_PER_G_CARBS
    return NutritionTargets(
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
    )
