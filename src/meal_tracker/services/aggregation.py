"""Time-bucketed nutrition aggregation over logged meals."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol

from meal_tracker.domain.meals import (
    MacroTotals,
    Meal,
    MealItem,
    MealType,
    day_window,
)
from meal_tracker.domain.stats import DailyTotals, MealTypeTotals
from meal_tracker.errors import ValidationError
from meal_tracker.services.validation import require_user_id

DEFAULT_TREND_DAYS = 7
MAX_TREND_DAYS = 366


class MealHistoryRepository(Protocol):
    """Read-only persistence interface used for aggregation."""

    def list_meals(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: MealType | None = None,
    ) -> list[Meal]:
        """Return a user's meals with start <= date < end."""


@dataclass
class TrendSummary:
    """Dense per-day totals and averages for a window of days."""

    daily: list[DailyTotals]
    avg_calories: float
    avg_protein: float
    avg_carbs: float
    avg_fat: float


@dataclass
class AggregationEngine:
    """Computes nutrition totals from meals on demand."""

    repository: MealHistoryRepository

    def daily_totals(
        self, user_id: str, start_day: date, end_day: date
    ) -> list[DailyTotals]:
        """Return totals for each day in range that has at least one meal."""
        sums: dict[date, MacroTotals] = {}
        for day, _, item in self._unwind(user_id, start_day, end_day):
            sums[day] = sums.get(day, MacroTotals()).add(item)
        return [
            DailyTotals(
                day=day,
                total_calories=total.calories,
                total_protein=total.protein,
                total_carbs=total.carbs,
                total_fat=total.fat,
            )
            for day, total in sorted(sums.items())
        ]

    def meal_type_totals(
        self, user_id: str, start_day: date, end_day: date
    ) -> list[MealTypeTotals]:
        """Return totals for each (day, meal type) pair in range."""
        sums: dict[tuple[date, MealType], MacroTotals] = {}
        for day, meal_type, item in self._unwind(user_id, start_day, end_day):
            key = (day, meal_type)
            sums[key] = sums.get(key, MacroTotals()).add(item)
        ordered = sorted(
            sums.items(), key=lambda entry: (entry[0][0], entry[0][1].value)
        )
        return [
            MealTypeTotals(
                day=day,
                type=meal_type,
                total_calories=total.calories,
                total_protein=total.protein,
                total_carbs=total.carbs,
                total_fat=total.fat,
            )
            for (day, meal_type), total in ordered
        ]

    def weekly_trend(
        self, user_id: str, end_day: date, days: int = DEFAULT_TREND_DAYS
    ) -> TrendSummary:
        """Return a zero-filled series of the days ending at end_day."""
        if days < 1 or days > MAX_TREND_DAYS:
            raise ValidationError.single(
                "days", f"Days must be between 1 and {MAX_TREND_DAYS}"
            )
        try:
            start_day = end_day - timedelta(days=days - 1)
        except OverflowError as exc:
            raise ValidationError.single(
                "endDate", f"End date leaves no room for {days} days"
            ) from exc
        present = {
            entry.day: entry
            for entry in self.daily_totals(user_id, start_day, end_day)
        }
        daily = []
        for offset in range(days):
            day = start_day + timedelta(days=offset)
            daily.append(
                present.get(day)
                or DailyTotals(
                    day=day,
                    total_calories=0.0,
                    total_protein=0.0,
                    total_carbs=0.0,
                    total_fat=0.0,
                )
            )
        return TrendSummary(
            daily=daily,
            avg_calories=sum(entry.total_calories for entry in daily) / days,
            avg_protein=sum(entry.total_protein for entry in daily) / days,
            avg_carbs=sum(entry.total_carbs for entry in daily) / days,
            avg_fat=sum(entry.total_fat for entry in daily) / days,
        )

    def _unwind(
        self, user_id: str, start_day: date, end_day: date
    ) -> Iterator[tuple[date, MealType, MealItem]]:
        owner = require_user_id(user_id)
        if start_day > end_day:
            raise ValidationError.single(
                "endDate", "End date must not be before start date"
            )
        start, end = day_window(start_day, end_day)
        for meal in self.repository.list_meals(owner, start, end):
            day = meal.day
            if day < start_day or day > end_day:
                continue
            for item in meal.items:
                yield day, meal.type, item
