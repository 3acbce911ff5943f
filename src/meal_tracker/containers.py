"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from meal_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from meal_tracker.config import Settings
from meal_tracker.services.aggregation import AggregationEngine
from meal_tracker.services.foods import FoodCatalogService
from meal_tracker.services.meals import MealLedger
from meal_tracker.services.profile import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_ledger: MealLedger
    aggregation_engine: AggregationEngine
    food_catalog_service: FoodCatalogService
    profile_service: ProfileService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        meal_ledger=MealLedger(meal_repository),
        aggregation_engine=AggregationEngine(meal_repository),
        food_catalog_service=FoodCatalogService(
            SupabaseFoodRepository(supabase_client)
        ),
        profile_service=ProfileService(SupabaseProfileRepository(supabase_client)),
    )
