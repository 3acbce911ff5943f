"""Tests for nutrition aggregation."""

from datetime import UTC, date, datetime

import pytest

from meal_tracker.domain.meals import MealItem, MealType
from meal_tracker.errors import ValidationError
from meal_tracker.services.aggregation import AggregationEngine
from tests.conftest import InMemoryMealRepository


def _item(
    calories: float, protein: float = 0.0, carbs: float = 0.0, fat: float = 0.0
) -> MealItem:
    return MealItem(
        name="food",
        weight="100g",
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
    )


def _at(day: int, hour: int = 8) -> datetime:
    return datetime(2024, 1, day, hour, tzinfo=UTC)


@pytest.fixture
def history() -> InMemoryMealRepository:
    repository = InMemoryMealRepository()
    repository.add("u1", _at(15), MealType.BREAKFAST, _item(389, 16.9, 66.3, 6.9))
    repository.add(
        "u1",
        _at(15, 12),
        MealType.LUNCH,
        _item(231, 43.5, 0, 5),
        _item(111, 2.6, 23, 0.9),
    )
    repository.add("u1", _at(17, 19), MealType.DINNER, _item(500, 30, 40, 20))
    repository.add("u2", _at(15), MealType.BREAKFAST, _item(999))
    return repository


def test_daily_totals_sums_items_per_day(history: InMemoryMealRepository) -> None:
    engine = AggregationEngine(history)

    totals = engine.daily_totals("u1", date(2024, 1, 15), date(2024, 1, 17))

    assert [entry.day for entry in totals] == [date(2024, 1, 15), date(2024, 1, 17)]
    first = totals[0]
    assert first.total_calories == pytest.approx(731)
    assert first.total_protein == pytest.approx(63.0)
    assert first.total_carbs == pytest.approx(89.3)
    assert first.total_fat == pytest.approx(12.8)


def test_daily_totals_include_both_range_ends(
    history: InMemoryMealRepository,
) -> None:
    engine = AggregationEngine(history)

    single = engine.daily_totals("u1", date(2024, 1, 17), date(2024, 1, 17))
    empty = engine.daily_totals("u1", date(2024, 1, 16), date(2024, 1, 16))

    assert [entry.total_calories for entry in single] == [500]
    assert empty == []


def test_daily_totals_are_repeatable(history: InMemoryMealRepository) -> None:
    engine = AggregationEngine(history)

    first = engine.daily_totals("u1", date(2024, 1, 1), date(2024, 1, 31))
    second = engine.daily_totals("u1", date(2024, 1, 1), date(2024, 1, 31))

    assert first == second


def test_meal_type_totals_order_by_day_then_type(
    history: InMemoryMealRepository,
) -> None:
    history.add("u1", _at(15, 16), MealType.SNACK, _item(52))
    engine = AggregationEngine(history)

    totals = engine.meal_type_totals("u1", date(2024, 1, 15), date(2024, 1, 17))

    assert [(entry.day.day, entry.type) for entry in totals] == [
        (15, MealType.BREAKFAST),
        (15, MealType.LUNCH),
        (15, MealType.SNACK),
        (17, MealType.DINNER),
    ]
    assert totals[1].total_calories == pytest.approx(342)


def test_aggregation_rejects_inverted_range(
    history: InMemoryMealRepository,
) -> None:
    engine = AggregationEngine(history)

    with pytest.raises(ValidationError):
        engine.daily_totals("u1", date(2024, 1, 17), date(2024, 1, 15))
    with pytest.raises(ValidationError):
        engine.meal_type_totals("", date(2024, 1, 15), date(2024, 1, 17))


def test_weekly_trend_fills_missing_days(history: InMemoryMealRepository) -> None:
    engine = AggregationEngine(history)

    trend = engine.weekly_trend("u1", date(2024, 1, 17), days=3)

    assert [entry.day for entry in trend.daily] == [
        date(2024, 1, 15),
        date(2024, 1, 16),
        date(2024, 1, 17),
    ]
    assert trend.daily[1].total_calories == 0
    assert trend.avg_calories == pytest.approx((731 + 500) / 3)


def test_weekly_trend_rejects_bad_window(history: InMemoryMealRepository) -> None:
    engine = AggregationEngine(history)

    with pytest.raises(ValidationError) as excinfo:
        engine.weekly_trend("u1", date(2024, 1, 17), days=0)

    assert excinfo.value.errors[0].field == "days"


def test_weekly_trend_rejects_window_before_the_first_day(
    history: InMemoryMealRepository,
) -> None:
    engine = AggregationEngine(history)

    with pytest.raises(ValidationError) as excinfo:
        engine.weekly_trend("u1", date.min)

    assert excinfo.value.errors[0].field == "endDate"
    assert len(engine.weekly_trend("u1", date.min, days=1).daily) == 1


def test_daily_totals_reach_the_last_representable_day(
    history: InMemoryMealRepository,
) -> None:
    engine = AggregationEngine(history)

    totals = engine.daily_totals("u1", date(2024, 1, 1), date.max)

    assert [entry.day for entry in totals] == [date(2024, 1, 15), date(2024, 1, 17)]
    assert engine.weekly_trend("u1", date.max).daily[-1].day == date.max
