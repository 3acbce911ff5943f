"""Pydantic request models and JSON serializers for the HTTP API."""

from pydantic import Field

from meal_tracker.domain.foods import FoodItem
from meal_tracker.domain.meals import Meal
from meal_tracker.domain.profile import GoalTargets, UserProfile
from meal_tracker.domain.stats import DailyTotals, MealTypeTotals
from meal_tracker.services.aggregation import TrendSummary
from meal_tracker.services.validation import MealInput, ProfileInput


class MealPayload(MealInput):
    """Body of meal create and update requests."""

    user_id: str | None = Field(default=None, alias="userId")


class ProfilePayload(ProfileInput):
    """Body of profile updates."""

    user_id: str | None = Field(default=None, alias="userId")


def meal_to_json(meal: Meal) -> dict[str, object]:
    """Serialize a meal in the wire format."""
    return {
        "_id": str(meal.id),
        "userId": meal.user_id,
        "date": meal.date.isoformat(),
        "type": meal.type.value,
        "items": [item.to_dict() for item in meal.items],
        "createdAt": meal.created_at.isoformat(),
        "updatedAt": meal.updated_at.isoformat(),
    }


def food_to_json(food: FoodItem) -> dict[str, object]:
    """Serialize a catalog entry."""
    return {
        "_id": str(food.id),
        "name": food.name,
        "weight": food.weight,
        "calories": food.calories,
        "protein": food.protein,
        "carbs": food.carbs,
        "fat": food.fat,
        "createdAt": food.created_at.isoformat() if food.created_at else None,
        "updatedAt": food.updated_at.isoformat() if food.updated_at else None,
    }


def profile_to_json(profile: UserProfile) -> dict[str, object]:
    """Serialize a user profile."""
    return {
        "userId": profile.user_id,
        "email": profile.email,
        "goal": profile.goal.value,
        "targetWeight": profile.target_weight,
        "height": profile.height,
        "currentWeight": profile.current_weight,
        "targetCalories": profile.target_calories,
        "targetProtein": profile.target_protein,
        "targetCarbs": profile.target_carbs,
        "targetFat": profile.target_fat,
        "createdAt": profile.created_at.isoformat() if profile.created_at else None,
        "updatedAt": profile.updated_at.isoformat() if profile.updated_at else None,
    }


def goals_to_json(targets: GoalTargets) -> dict[str, int]:
    """Serialize calculated goals."""
    return {
        "targetCalories": targets.target_calories,
        "targetProtein": targets.target_protein,
        "targetCarbs": targets.target_carbs,
        "targetFat": targets.target_fat,
        "bmr": targets.bmr,
        "tdee": targets.tdee,
    }


def daily_totals_to_json(entry: DailyTotals) -> dict[str, object]:
    """Serialize a daily totals row keyed like a grouped aggregate."""
    return {
        "_id": {"date": entry.day.isoformat()},
        "totalCalories": entry.total_calories,
        "totalProtein": entry.total_protein,
        "totalCarbs": entry.total_carbs,
        "totalFat": entry.total_fat,
    }


def meal_type_totals_to_json(entry: MealTypeTotals) -> dict[str, object]:
    """Serialize a per-meal-type totals row."""
    return {
        "_id": {"date": entry.day.isoformat(), "type": entry.type.value},
        "totalCalories": entry.total_calories,
        "totalProtein": entry.total_protein,
        "totalCarbs": entry.total_carbs,
        "totalFat": entry.total_fat,
    }


def trend_to_json(summary: TrendSummary) -> dict[str, object]:
    """Serialize a dense trend window."""
    return {
        "daily": [daily_totals_to_json(entry) for entry in summary.daily],
        "averages": {
            "calories": summary.avg_calories,
            "protein": summary.avg_protein,
            "carbs": summary.avg_carbs,
            "fat": summary.avg_fat,
        },
    }
