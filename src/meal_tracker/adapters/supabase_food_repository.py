"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_tracker.adapters.supabase_support import (
    escape_like,
    execute,
    parse_timestamp,
)
from meal_tracker.domain.foods import FoodItem
from meal_tracker.errors import StoreError
from meal_tracker.services.foods import FoodRepository, duplicate_food_error

FOODS_TABLE = "food_items"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for the food catalog."""

    client: Client

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food entry and return it."""
        response = execute(
            self.client.table(FOODS_TABLE).insert(payload),
            "create food item",
            on_conflict=lambda: duplicate_food_error(str(payload.get("name"))),
        )
        if not response.data:
            raise StoreError("Failed to create food item")
        return _parse_food(response.data[0])

    def update_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        """Update a food entry and return it."""
        response = execute(
            self.client.table(FOODS_TABLE)
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(food_id)),
            "update food item",
            on_conflict=lambda: duplicate_food_error(str(payload.get("name"))),
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food entry by id, if present."""
        response = execute(
            self.client.table(FOODS_TABLE).select("*").eq("id", str(food_id)).limit(1),
            "get food item",
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def find_by_name(self, name: str) -> FoodItem | None:
        """Return the food with the same name ignoring case."""
        response = execute(
            self.client.table(FOODS_TABLE)
            .select("*")
            .ilike("name", escape_like(name)),
            "find food item",
        )
        wanted = name.lower()
        for row in response.data or []:
            if str(row.get("name", "")).lower() == wanted:
                return _parse_food(row)
        return None

    def search_foods(self, query: str | None, limit: int) -> list[FoodItem]:
        """Return foods whose name contains the query."""
        request = self.client.table(FOODS_TABLE).select("*")
        if query:
            request = request.ilike("name", f"%{escape_like(query)}%")
        response = execute(
            request.order("name", desc=False).limit(limit),
            "search food items",
        )
        return [_parse_food(row) for row in response.data or []]

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food entry."""
        response = execute(
            self.client.table(FOODS_TABLE).delete().eq("id", str(food_id)),
            "delete food item",
        )
        return bool(response.data)


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a catalog row into a domain model."""
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        weight=str(row.get("weight", "")),
        calories=float(row.get("calories", 0.0)),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fat=float(row.get("fat", 0.0)),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
