"""Meal ledger: merge-or-create logging and meal maintenance."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from meal_tracker.domain.meals import (
    Meal,
    MealBucket,
    MealItem,
    MealLogOutcome,
    MealType,
    day_window,
)
from meal_tracker.errors import ConflictError, NotFoundError, ValidationError
from meal_tracker.services.validation import (
    MealInput,
    require_user_id,
    validate_input,
)

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def append_or_create(
        self, bucket: MealBucket, meal_date: datetime, items: list[MealItem]
    ) -> MealLogOutcome:
        """Atomically append items to the bucket's meal, creating it if absent."""

    def find_in_bucket(self, bucket: MealBucket) -> Meal | None:
        """Return the meal occupying a bucket, if any."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""

    def list_meals(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: MealType | None = None,
    ) -> list[Meal]:
        """Return a user's meals with start <= date < end."""

    def replace_meal(  # noqa: PLR0913
        self,
        meal_id: UUID,
        user_id: str,
        meal_date: datetime,
        meal_type: MealType,
        items: list[MealItem],
    ) -> Meal | None:
        """Replace every field of a meal and return it, or None if absent."""

    def delete_meal(self, meal_id: UUID) -> bool:
        """Delete a meal and report whether it existed."""


@dataclass
class MealLedger:
    """Service that keeps one consolidated meal per user, type and day."""

    repository: MealRepository

    def log_meal(
        self,
        user_id: str,
        meal_date: object,
        meal_type: object,
        items: Sequence[object],
    ) -> MealLogOutcome:
        """Merge items into the bucket's meal or create it."""
        owner = require_user_id(user_id)
        meal = validate_meal_input(meal_date, meal_type, items)
        bucket = MealBucket.for_meal(owner, meal.type, meal.date)
        outcome = self.repository.append_or_create(
            bucket, meal.date, [item.to_item() for item in meal.items]
        )
        _logger.info(
            "Meal %s: id=%s type=%s day=%s items=%s",
            "created" if outcome.created else "merged",
            outcome.meal.id,
            bucket.meal_type.value,
            bucket.day,
            len(meal.items),
        )
        return outcome

    def update_meal(
        self,
        meal_id: UUID,
        meal_date: object,
        meal_type: object,
        items: Sequence[object],
        user_id: str | None = None,
    ) -> Meal:
        """Replace a meal's fields; refuses to move it into an occupied bucket."""
        meal = validate_meal_input(meal_date, meal_type, items)
        current = self.repository.get_meal(meal_id)
        if current is None:
            raise NotFoundError("Meal not found")
        owner = require_user_id(user_id) if user_id is not None else current.user_id
        bucket = MealBucket.for_meal(owner, meal.type, meal.date)
        occupant = self.repository.find_in_bucket(bucket)
        if occupant is not None and occupant.id != meal_id:
            raise ConflictError(
                f"A {bucket.meal_type.value.lower()} meal already exists "
                f"for {bucket.day.isoformat()}",
                error="Meal already exists",
            )
        updated = self.repository.replace_meal(
            meal_id,
            owner,
            meal.date,
            meal.type,
            [item.to_item() for item in meal.items],
        )
        if updated is None:
            raise NotFoundError("Meal not found")
        return updated

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal by id."""
        if not self.repository.delete_meal(meal_id):
            raise NotFoundError("Meal not found")
        _logger.info("Meal deleted: id=%s", meal_id)

    def get_meal(self, meal_id: UUID) -> Meal:
        """Return a meal by id."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal not found")
        return meal

    def list_meals(
        self,
        user_id: str,
        day: date | None = None,
        start_day: date | None = None,
        end_day: date | None = None,
        meal_type: MealType | None = None,
    ) -> list[Meal]:
        """Return a user's meals, newest first."""
        owner = require_user_id(user_id)
        start: datetime | None = None
        end: datetime | None = None
        if day is not None:
            start, end = day_window(day)
        elif start_day is not None and end_day is not None:
            if start_day > end_day:
                raise ValidationError.single(
                    "endDate", "End date must not be before start date"
                )
            start, end = day_window(start_day, end_day)
        meals = self.repository.list_meals(owner, start, end, meal_type)
        return sorted(
            meals, key=lambda meal: (meal.date, meal.created_at), reverse=True
        )


def validate_meal_input(
    meal_date: object, meal_type: object, items: object
) -> MealInput:
    """Validate every meal field at once, reporting all problems together."""
    return validate_input(
        MealInput, {"date": meal_date, "type": meal_type, "items": items}
    )
