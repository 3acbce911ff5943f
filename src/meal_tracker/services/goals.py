"""Calorie and macro goal calculator.

BMR uses the Mifflin-St Jeor equation. TDEE scales BMR by a fixed activity
multiplier, and the calorie target applies a goal multiplier on top. Protein
is set from body weight, fat from a share of the calorie target, and carbs
take whatever calories remain. Carbs are not clamped and go negative for
extreme inputs.
"""

import math

from meal_tracker.domain.profile import ActivityLevel, Gender, Goal, GoalTargets
from meal_tracker.services.validation import GoalsInput, validate_input

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

GOAL_MULTIPLIERS: dict[Goal, float] = {
    Goal.WEIGHT_LOSS: 0.8,
    Goal.MUSCLE_GAIN: 1.1,
    Goal.MAINTENANCE: 1.0,
}

PROTEIN_G_PER_KG = 2.2
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def compute_goals(  # noqa: PLR0913
    height: object,
    current_weight: object,
    goal: object,
    age: object = 30,
    gender: object = Gender.MALE,
    activity_level: object = ActivityLevel.LIGHTLY_ACTIVE,
) -> GoalTargets:
    """Return daily calorie and macro targets for the given biometrics."""
    body = validate_input(
        GoalsInput,
        {
            "height": height,
            "current_weight": current_weight,
            "goal": goal,
            "age": age,
            "gender": gender,
            "activity_level": activity_level,
        },
    )

    bmr = 10 * body.current_weight + 6.25 * body.height - 5 * body.age
    bmr += 5 if body.gender is Gender.MALE else -161
    tdee = bmr * ACTIVITY_MULTIPLIERS[body.activity_level]

    target_calories = round_half_away(tdee * GOAL_MULTIPLIERS[body.goal])
    target_protein = round_half_away(body.current_weight * PROTEIN_G_PER_KG)
    target_fat = round_half_away(target_calories * FAT_CALORIE_SHARE / KCAL_PER_G_FAT)
    remaining = (
        target_calories
        - target_protein * KCAL_PER_G_PROTEIN
        - target_fat * KCAL_PER_G_FAT
    )
    target_carbs = round_half_away(remaining / KCAL_PER_G_CARBS)

    return GoalTargets(
        target_calories=target_calories,
        target_protein=target_protein,
        target_carbs=target_carbs,
        target_fat=target_fat,
        bmr=round_half_away(bmr),
        tdee=round_half_away(tdee),
    )


def round_half_away(value: float) -> int:
    """Round to the nearest integer with ties going away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))

