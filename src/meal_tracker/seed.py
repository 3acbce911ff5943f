"""Seed the store with a starter food catalog, sample meals and a profile."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from meal_tracker.app_logging import configure_logging
from meal_tracker.containers import AppContainer, build_container
from meal_tracker.domain.meals import MealBucket, MealType
from meal_tracker.domain.profile import default_profile
from meal_tracker.errors import ConflictError

_logger = logging.getLogger(__name__)

FOOD_ITEMS: list[dict[str, object]] = [
    {"name": "Oatmeal", "weight": "100g", "calories": 389, "protein": 16.9, "carbs": 66.3, "fat": 6.9},  # noqa: E501
    {"name": "Banana", "weight": "120g", "calories": 107, "protein": 1.3, "carbs": 27, "fat": 0.4},  # noqa: E501
    {"name": "Grilled Chicken", "weight": "150g", "calories": 231, "protein": 43.5, "carbs": 0, "fat": 5},  # noqa: E501
    {"name": "Brown Rice", "weight": "100g", "calories": 111, "protein": 2.6, "carbs": 23, "fat": 0.9},  # noqa: E501
    {"name": "Apple", "weight": "100g", "calories": 52, "protein": 0.3, "carbs": 14, "fat": 0.2},  # noqa: E501
    {"name": "Salmon", "weight": "100g", "calories": 208, "protein": 20, "carbs": 0, "fat": 13},  # noqa: E501
    {"name": "Broccoli", "weight": "100g", "calories": 34, "protein": 2.8, "carbs": 7, "fat": 0.4},  # noqa: E501
    {"name": "Sweet Potato", "weight": "100g", "calories": 86, "protein": 1.6, "carbs": 20, "fat": 0.1},  # noqa: E501
    {"name": "Greek Yogurt", "weight": "150g", "calories": 100, "protein": 17, "carbs": 6, "fat": 0.4},  # noqa: E501
    {"name": "Almonds", "weight": "30g", "calories": 174, "protein": 6.4, "carbs": 6.1, "fat": 15.2},  # noqa: E501
    {"name": "Quinoa", "weight": "100g", "calories": 120, "protein": 4.4, "carbs": 22, "fat": 1.9},  # noqa: E501
    {"name": "Spinach", "weight": "100g", "calories": 23, "protein": 2.9, "carbs": 3.6, "fat": 0.4},  # noqa: E501
    {"name": "Avocado", "weight": "100g", "calories": 160, "protein": 2, "carbs": 9, "fat": 15},  # noqa: E501
    {"name": "Eggs", "weight": "100g", "calories": 155, "protein": 13, "carbs": 1.1, "fat": 11},  # noqa: E501
    {"name": "Whole Wheat Bread", "weight": "30g", "calories": 69, "protein": 3.6, "carbs": 12, "fat": 1.2},  # noqa: E501
]

SAMPLE_DATE = datetime(2024, 1, 15, tzinfo=UTC)

SAMPLE_MEALS: list[tuple[MealType, list[str]]] = [
    (MealType.BREAKFAST, ["Oatmeal", "Banana"]),
    (MealType.LUNCH, ["Grilled Chicken", "Brown Rice"]),
]


@dataclass(frozen=True)
class SeedReport:
    """Counts of records written by a seed run."""

    foods: int
    meals: int
    profile_created: bool


def seed(container: AppContainer, user_id: str) -> SeedReport:
    """Insert starter data without duplicating records on repeated runs."""
    foods = 0
    for payload in FOOD_ITEMS:
        try:
            container.food_catalog_service.create_food(payload)
        except ConflictError:
            continue
        foods += 1

    by_name = {str(item["name"]): item for item in FOOD_ITEMS}
    meals = 0
    ledger = container.meal_ledger
    for meal_type, names in SAMPLE_MEALS:
        bucket = MealBucket.for_meal(user_id, meal_type, SAMPLE_DATE)
        if ledger.repository.find_in_bucket(bucket) is not None:
            continue
        ledger.log_meal(
            user_id, SAMPLE_DATE, meal_type, [by_name[name] for name in names]
        )
        meals += 1

    profiles = container.profile_service.repository
    profile_created = profiles.get_profile(user_id) is None
    if profile_created:
        profiles.upsert_profile(default_profile(user_id))

    return SeedReport(foods=foods, meals=meals, profile_created=profile_created)


def main() -> None:
    """Seed the configured Supabase project."""
    container = build_container()
    configure_logging(container.settings.log_level)
    report = seed(container, container.settings.default_user_id)
    _logger.info(
        "Seed complete: foods=%s meals=%s profile_created=%s",
        report.foods,
        report.meals,
        report.profile_created,
    )


if __name__ == "__main__":
    main()
