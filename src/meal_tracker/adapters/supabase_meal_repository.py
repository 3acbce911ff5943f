"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_tracker.adapters.supabase_support import execute, parse_timestamp
from meal_tracker.domain.meals import (
    Meal,
    MealBucket,
    MealItem,
    MealLogOutcome,
    MealType,
    utc_day,
)
from meal_tracker.errors import ConflictError, StoreError
from meal_tracker.services.meals import MealRepository

MEALS_TABLE = "meals"
LOG_MEAL_FUNCTION = "log_meal"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals.

    Every meal row carries a ``meal_day`` column holding the UTC day of its
    ``date``; a unique index on ``(user_id, type, meal_day)`` enforces one
    meal per bucket. Logging goes through the ``log_meal`` database function
    so the append-or-create happens in a single statement.
    """

    client: Client

    def append_or_create(
        self, bucket: MealBucket, meal_date: datetime, items: list[MealItem]
    ) -> MealLogOutcome:
        """Atomically append items to the bucket's meal, creating it if absent."""
        response = execute(
            self.client.rpc(
                LOG_MEAL_FUNCTION,
                {
                    "p_user_id": bucket.user_id,
                    "p_type": bucket.meal_type.value,
                    "p_meal_day": bucket.day.isoformat(),
                    "p_date": meal_date.isoformat(),
                    "p_items": [item.to_dict() for item in items],
                },
            ),
            "log meal",
        )
        if not response.data:
            raise StoreError("Failed to log meal")
        row = response.data[0]
        return MealLogOutcome(meal=_parse_meal(row), created=bool(row.get("created")))

    def find_in_bucket(self, bucket: MealBucket) -> Meal | None:
        """Return the meal occupying a bucket, if any."""
        response = execute(
            self.client.table(MEALS_TABLE)
            .select("*")
            .eq("user_id", bucket.user_id)
            .eq("type", bucket.meal_type.value)
            .eq("meal_day", bucket.day.isoformat())
            .limit(1),
            "find meal",
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""
        response = execute(
            self.client.table(MEALS_TABLE).select("*").eq("id", str(meal_id)).limit(1),
            "get meal",
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: MealType | None = None,
    ) -> list[Meal]:
        """Return a user's meals in the time range, newest first."""
        query = self.client.table(MEALS_TABLE).select("*").eq("user_id", user_id)
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lt("date", end.isoformat())
        if meal_type is not None:
            query = query.eq("type", meal_type.value)
        response = execute(
            query.order("date", desc=True).order("created_at", desc=True),
            "list meals",
        )
        return [_parse_meal(row) for row in response.data or []]

    def replace_meal(  # noqa: PLR0913
        self,
        meal_id: UUID,
        user_id: str,
        meal_date: datetime,
        meal_type: MealType,
        items: list[MealItem],
    ) -> Meal | None:
        """Replace every field of a meal."""
        response = execute(
            self.client.table(MEALS_TABLE)
            .update(
                {
                    "user_id": user_id,
                    "date": meal_date.isoformat(),
                    "meal_day": utc_day(meal_date).isoformat(),
                    "type": meal_type.value,
                    "items": [item.to_dict() for item in items],
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(meal_id)),
            "update meal",
            on_conflict=lambda: ConflictError(
                f"A {meal_type.value.lower()} meal already exists "
                f"for {utc_day(meal_date).isoformat()}",
                error="Meal already exists",
            ),
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: UUID) -> bool:
        """Delete a meal row."""
        response = execute(
            self.client.table(MEALS_TABLE).delete().eq("id", str(meal_id)),
            "delete meal",
        )
        return bool(response.data)


def _parse_meal(row: dict[str, object]) -> Meal:
    created_at = parse_timestamp(row.get("created_at")) or datetime.now(tz=UTC)
    return Meal(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        date=parse_timestamp(row["date"]) or created_at,
        type=MealType(row["type"]),
        items=[_parse_item(item) for item in row.get("items") or []],
        created_at=created_at,
        updated_at=parse_timestamp(row.get("updated_at")) or created_at,
    )


def _parse_item(raw: dict[str, object]) -> MealItem:
    return MealItem(
        name=str(raw.get("name", "")),
        weight=str(raw.get("weight", "")),
        calories=float(raw.get("calories", 0.0)),
        protein=float(raw.get("protein", 0.0)),
        carbs=float(raw.get("carbs", 0.0)),
        fat=float(raw.get("fat", 0.0)),
    )
