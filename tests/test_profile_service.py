"""Tests for the profile service."""

import pytest

from meal_tracker.domain.profile import Goal
from meal_tracker.errors import ValidationError
from meal_tracker.services.profile import ProfileService
from tests.conftest import InMemoryProfileRepository


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "email": "Someone@Example.com",
        "goal": "Muscle Gain",
        "targetWeight": 82,
        "height": 180,
        "currentWeight": 78,
        "targetCalories": 2900,
        "targetProtein": 170,
        "targetCarbs": 350,
        "targetFat": 80,
    }
    payload.update(overrides)
    return payload


def test_get_profile_creates_default_once() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)

    first = service.get_profile("u1")
    second = service.get_profile("u1")

    assert first.goal is Goal.WEIGHT_LOSS
    assert first.target_calories == 2000
    assert second == first
    assert repository.upserts == 1


def test_update_profile_upserts_validated_fields() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    service.get_profile("u1")

    profile = service.update_profile("u1", _payload())

    assert profile.email == "someone@example.com"
    assert profile.goal is Goal.MUSCLE_GAIN
    assert profile.current_weight == 78
    assert repository.profiles["u1"].target_calories == 2900


def test_update_profile_collects_errors() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)

    with pytest.raises(ValidationError) as excinfo:
        service.update_profile(
            "u1", _payload(email="nope", goal="Bulk", height=-1, targetFat="x")
        )

    fields = {error.field for error in excinfo.value.errors}
    assert fields == {"email", "goal", "height", "targetFat"}
    assert repository.profiles == {}


def test_calculate_goals_uses_defaults() -> None:
    targets = ProfileService.calculate_goals(
        height=175, current_weight=80, goal="Weight Loss"
    )

    assert targets.target_calories == 1924
    assert targets.bmr == 1749
