"""Food catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from meal_tracker.api.dependencies import get_container
from meal_tracker.api.models import food_to_json
from meal_tracker.containers import AppContainer
from meal_tracker.services.foods import DEFAULT_LIST_LIMIT
from meal_tracker.services.validation import FoodInput

router = APIRouter(prefix="/food-items", tags=["food-items"])


@router.get("")
async def list_foods(
    search: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return catalog entries, optionally filtered by name."""
    foods = container.food_catalog_service.list_foods(search, limit)
    return [food_to_json(food) for food in foods]


@router.get("/{food_id}")
async def get_food(
    food_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a single catalog entry."""
    return food_to_json(container.food_catalog_service.get_food(food_id))


@router.post("")
async def create_food(
    payload: FoodInput,
    container: AppContainer = Depends(get_container),
) -> JSONResponse:
    """Create a catalog entry with a unique name."""
    food = container.food_catalog_service.create_food(payload)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=food_to_json(food))


@router.put("/{food_id}")
async def update_food(
    food_id: UUID,
    payload: FoodInput,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace a catalog entry."""
    return food_to_json(container.food_catalog_service.update_food(food_id, payload))


@router.delete("/{food_id}")
async def delete_food(
    food_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """Delete a catalog entry."""
    container.food_catalog_service.delete_food(food_id)
    return {"message": "Food item deleted successfully"}
