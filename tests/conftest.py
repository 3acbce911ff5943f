"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from meal_tracker.config import Settings
from meal_tracker.containers import AppContainer
from meal_tracker.domain.foods import FoodItem
from meal_tracker.domain.meals import (
    Meal,
    MealBucket,
    MealItem,
    MealLogOutcome,
    MealType,
)
from meal_tracker.domain.profile import UserProfile
from meal_tracker.services.aggregation import AggregationEngine
from meal_tracker.services.foods import FoodCatalogService, FoodRepository
from meal_tracker.services.meals import MealLedger, MealRepository
from meal_tracker.services.profile import ProfileRepository, ProfileService


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)
    writes: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)

    def append_or_create(
        self, bucket: MealBucket, meal_date: datetime, items: list[MealItem]
    ) -> MealLogOutcome:
        with self.lock:
            self.writes += 1
            now = datetime.now(tz=UTC)
            existing = self._find(bucket)
            if existing is not None:
                merged = replace(
                    existing, items=[*existing.items, *items], updated_at=now
                )
                self.meals[merged.id] = merged
                return MealLogOutcome(meal=merged, created=False)
            meal = Meal(
                id=uuid4(),
                user_id=bucket.user_id,
                date=meal_date,
                type=bucket.meal_type,
                items=list(items),
                created_at=now,
                updated_at=now,
            )
            self.meals[meal.id] = meal
            return MealLogOutcome(meal=meal, created=True)

    def find_in_bucket(self, bucket: MealBucket) -> Meal | None:
        return self._find(bucket)

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def list_meals(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: MealType | None = None,
    ) -> list[Meal]:
        return [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id
            and (start is None or meal.date >= start)
            and (end is None or meal.date < end)
            and (meal_type is None or meal.type == meal_type)
        ]

    def replace_meal(  # noqa: PLR0913
        self,
        meal_id: UUID,
        user_id: str,
        meal_date: datetime,
        meal_type: MealType,
        items: list[MealItem],
    ) -> Meal | None:
        current = self.meals.get(meal_id)
        if current is None:
            return None
        self.writes += 1
        updated = replace(
            current,
            user_id=user_id,
            date=meal_date,
            type=meal_type,
            items=list(items),
            updated_at=datetime.now(tz=UTC),
        )
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: UUID) -> bool:
        if meal_id not in self.meals:
            return False
        self.writes += 1
        del self.meals[meal_id]
        return True

    def add(
        self, user_id: str, meal_date: datetime, meal_type: MealType, *items: MealItem
    ) -> Meal:
        """Store a meal directly, bypassing the bucket rule."""
        meal = Meal(
            id=uuid4(),
            user_id=user_id,
            date=meal_date,
            type=meal_type,
            items=list(items),
            created_at=meal_date,
            updated_at=meal_date,
        )
        self.meals[meal.id] = meal
        return meal

    def _find(self, bucket: MealBucket) -> Meal | None:
        for meal in self.meals.values():
            if meal.bucket == bucket:
                return meal
        return None


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog repository for tests."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        food = FoodItem(id=uuid4(), **payload)  # type: ignore[arg-type]
        self.foods[food.id] = food
        return food

    def update_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        if food_id not in self.foods:
            return None
        food = FoodItem(id=food_id, **payload)  # type: ignore[arg-type]
        self.foods[food_id] = food
        return food

    def get_food(self, food_id: UUID) -> FoodItem | None:
        return self.foods.get(food_id)

    def find_by_name(self, name: str) -> FoodItem | None:
        for food in self.foods.values():
            if food.name.lower() == name.lower():
                return food
        return None

    def search_foods(self, query: str | None, limit: int) -> list[FoodItem]:
        matches = [
            food
            for food in self.foods.values()
            if query is None or query.lower() in food.name.lower()
        ]
        return sorted(matches, key=lambda food: food.name)[:limit]

    def delete_food(self, food_id: UUID) -> bool:
        return self.foods.pop(food_id, None) is not None


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    upserts: int = 0

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        self.upserts += 1
        stored = replace(profile, updated_at=datetime.now(tz=UTC))
        self.profiles[profile.user_id] = stored
        return stored


def meal_item(
    name: str,
    calories: float,
    protein: float = 0.0,
    carbs: float = 0.0,
    fat: float = 0.0,
) -> dict[str, object]:
    """Build a meal item payload as a client would submit it."""
    return {
        "name": name,
        "weight": "100g",
        "calories": calories,
        "protein": protein,
        "carbs": carbs,
        "fat": fat,
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        environment="test",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    meal_repository: InMemoryMealRepository,
    food_repository: InMemoryFoodRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        meal_ledger=MealLedger(meal_repository),
        aggregation_engine=AggregationEngine(meal_repository),
        food_catalog_service=FoodCatalogService(food_repository),
        profile_service=ProfileService(profile_repository),
    )
