"""Meal logging and analytics endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from meal_tracker.api.dependencies import get_container, resolve_user_id
from meal_tracker.api.models import (
    MealPayload,
    daily_totals_to_json,
    meal_to_json,
    meal_type_totals_to_json,
    trend_to_json,
)
from meal_tracker.containers import AppContainer
from meal_tracker.domain.meals import MealType
from meal_tracker.errors import FieldError, ValidationError
from meal_tracker.services.aggregation import DEFAULT_TREND_DAYS

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("")
async def list_meals(  # noqa: PLR0913
    on_date: date | None = Query(default=None, alias="date"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    meal_type: MealType | None = Query(default=None, alias="type"),
    user_id: str | None = Query(default=None, alias="userId"),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return meals for one day or a day range, newest first."""
    meals = container.meal_ledger.list_meals(
        resolve_user_id(container, user_id),
        day=on_date,
        start_day=start_date,
        end_day=end_date,
        meal_type=meal_type,
    )
    return [meal_to_json(meal) for meal in meals]


@router.get("/analytics/daily-totals")
async def daily_totals(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    user_id: str | None = Query(default=None, alias="userId"),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return per-day nutrition totals for days that have meals."""
    start_day, end_day = _require_range(start_date, end_date)
    totals = container.aggregation_engine.daily_totals(
        resolve_user_id(container, user_id), start_day, end_day
    )
    return [daily_totals_to_json(entry) for entry in totals]


@router.get("/analytics/meal-type-totals")
async def meal_type_totals(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    user_id: str | None = Query(default=None, alias="userId"),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return per-day, per-meal-type nutrition totals."""
    start_day, end_day = _require_range(start_date, end_date)
    totals = container.aggregation_engine.meal_type_totals(
        resolve_user_id(container, user_id), start_day, end_day
    )
    return [meal_type_totals_to_json(entry) for entry in totals]


@router.get("/analytics/weekly-trend")
async def weekly_trend(
    end_date: date | None = Query(default=None, alias="endDate"),
    days: int = DEFAULT_TREND_DAYS,
    user_id: str | None = Query(default=None, alias="userId"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a zero-filled trend window ending at endDate."""
    if end_date is None:
        raise ValidationError.single("endDate", "End date is required")
    summary = container.aggregation_engine.weekly_trend(
        resolve_user_id(container, user_id), end_date, days
    )
    return trend_to_json(summary)


@router.get("/{meal_id}")
async def get_meal(
    meal_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a single meal."""
    return meal_to_json(container.meal_ledger.get_meal(meal_id))


@router.post("")
async def log_meal(
    payload: MealPayload, container: AppContainer = Depends(get_container)
) -> JSONResponse:
    """Log items, merging them into the existing meal of the same day and type."""
    outcome = container.meal_ledger.log_meal(
        resolve_user_id(container, payload.user_id),
        payload.date,
        payload.type,
        payload.items,
    )
    body = meal_to_json(outcome.meal)
    if outcome.created:
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=body)
    return JSONResponse(
        status_code=status.HTTP_200_OK, content={**body, "message": outcome.message}
    )


@router.put("/{meal_id}")
async def update_meal(
    meal_id: UUID,
    payload: MealPayload,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace a meal's date, type and items."""
    meal = container.meal_ledger.update_meal(
        meal_id,
        payload.date,
        payload.type,
        payload.items,
        user_id=payload.user_id,
    )
    return meal_to_json(meal)


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """Delete a meal."""
    container.meal_ledger.delete_meal(meal_id)
    return {"message": "Meal deleted successfully"}


def _require_range(
    start_date: date | None, end_date: date | None
) -> tuple[date, date]:
    if start_date is None or end_date is None:
        message = "Start date and end date are required"
        missing = (("startDate", start_date), ("endDate", end_date))
        errors = [
            FieldError(field, message) for field, value in missing if value is None
        ]
        raise ValidationError(errors, message)
    return start_date, end_date
