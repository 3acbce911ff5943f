"""User profile and goal calculation endpoints."""

from fastapi import APIRouter, Depends, Query

from meal_tracker.api.dependencies import get_container, resolve_user_id
from meal_tracker.api.models import ProfilePayload, goals_to_json, profile_to_json
from meal_tracker.containers import AppContainer
from meal_tracker.services.validation import GoalsInput

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    user_id: str | None = Query(default=None, alias="userId"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the user's profile, creating the default one if needed."""
    profile = container.profile_service.get_profile(
        resolve_user_id(container, user_id)
    )
    return profile_to_json(profile)


@router.put("")
async def update_profile(
    payload: ProfilePayload,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Upsert the user's profile."""
    user_id = resolve_user_id(container, payload.user_id)
    profile = container.profile_service.update_profile(user_id, payload)
    return profile_to_json(profile)


@router.post("/calculate-goals")
async def calculate_goals(
    payload: GoalsInput, container: AppContainer = Depends(get_container)
) -> dict[str, int]:
    """Return calorie and macro targets for the submitted biometrics."""
    targets = container.profile_service.calculate_goals(
        height=payload.height,
        current_weight=payload.current_weight,
        goal=payload.goal,
        age=payload.age,
        gender=payload.gender,
        activity_level=payload.activity_level,
    )
    return goals_to_json(targets)
