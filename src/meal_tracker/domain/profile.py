"""Domain models for user profiles and nutrition goals."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Goal(str, Enum):
    """Body composition goal of a user."""

    WEIGHT_LOSS = "Weight Loss"
    MUSCLE_GAIN = "Muscle Gain"
    MAINTENANCE = "Maintenance"


class Gender(str, Enum):
    """Gender used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Daily activity level used to scale BMR."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


@dataclass(frozen=True)
class UserProfile:
    """Biometrics and daily macro targets of a user."""

    user_id: str
    email: str
    goal: Goal
    target_weight: float
    height: float
    current_weight: float
    target_calories: float
    target_protein: float
    target_carbs: float
    target_fat: float
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class GoalTargets:
    """Calorie and macro targets derived from biometrics."""

    target_calories: int
    target_protein: int
    target_carbs: int
    target_fat: int
    bmr: int
    tdee: int


def default_profile(user_id: str) -> UserProfile:
    """Return the profile a user starts with."""
    return UserProfile(
        user_id=user_id,
        email="user@example.com",
        goal=Goal.WEIGHT_LOSS,
        target_weight=70,
        height=175,
        current_weight=80,
        target_calories=2000,
        target_protein=150,
        target_carbs=200,
        target_fat=67,
    )
