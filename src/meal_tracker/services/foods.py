"""Services for managing the food catalog."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_tracker.domain.foods import FoodItem
from meal_tracker.errors import ConflictError, NotFoundError
from meal_tracker.services.validation import FoodInput, validate_input

DEFAULT_LIST_LIMIT = 50
DUPLICATE_FOOD_ERROR = "Food item already exists"


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food entry and return it."""

    def update_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        """Update a food entry and return it, or None if absent."""

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food entry by id, if present."""

    def find_by_name(self, name: str) -> FoodItem | None:
        """Return the food whose name equals the input ignoring case."""

    def search_foods(self, query: str | None, limit: int) -> list[FoodItem]:
        """Return foods whose name contains the query, ordered by name."""

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food entry and report whether it existed."""


@dataclass
class FoodCatalogService:
    """Application service for catalog operations."""

    repository: FoodRepository

    def list_foods(
        self, search: str | None = None, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[FoodItem]:
        """Search the catalog by name, or list it when no search is given."""
        query = search.strip() if search else None
        return self.repository.search_foods(query or None, max(limit, 1))

    def get_food(self, food_id: UUID) -> FoodItem:
        """Return a food entry by id."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food item not found")
        return food

    def create_food(self, payload: Mapping[str, object] | FoodInput) -> FoodItem:
        """Create a food entry with a unique name."""
        cleaned = validate_food_payload(payload)
        self._ensure_unique(str(cleaned["name"]))
        return self.repository.create_food(cleaned)

    def update_food(
        self, food_id: UUID, payload: Mapping[str, object] | FoodInput
    ) -> FoodItem:
        """Replace a food entry, keeping names unique."""
        cleaned = validate_food_payload(payload)
        self._ensure_unique(str(cleaned["name"]), exclude=food_id)
        food = self.repository.update_food(food_id, cleaned)
        if food is None:
            raise NotFoundError("Food item not found")
        return food

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food entry."""
        if not self.repository.delete_food(food_id):
            raise NotFoundError("Food item not found")

    def _ensure_unique(self, name: str, exclude: UUID | None = None) -> None:
        existing = self.repository.find_by_name(name)
        if existing is not None and existing.id != exclude:
            raise duplicate_food_error(name)


def duplicate_food_error(name: str) -> ConflictError:
    """Return the conflict raised for a taken food name."""
    return ConflictError(
        f'A food item with the name "{name}" already exists.',
        error=DUPLICATE_FOOD_ERROR,
    )


def validate_food_payload(
    payload: Mapping[str, object] | FoodInput,
) -> dict[str, object]:
    """Validate a catalog payload and return the cleaned fields."""
    return validate_input(FoodInput, payload).model_dump()
