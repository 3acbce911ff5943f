"""Domain models for nutrition aggregation."""

from dataclasses import dataclass
from datetime import date

from meal_tracker.domain.meals import MealType


@dataclass(frozen=True)
class DailyTotals:
    """Summed macros of every meal item logged on one day."""

    day: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float


@dataclass(frozen=True)
class MealTypeTotals:
    """Summed macros of one meal type on one day."""

    day: date
    type: MealType
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
