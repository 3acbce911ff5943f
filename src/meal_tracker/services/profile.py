"""User profile service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from meal_tracker.domain.profile import GoalTargets, UserProfile, default_profile
from meal_tracker.services.goals import compute_goals
from meal_tracker.services.validation import (
    ProfileInput,
    require_user_id,
    validate_input,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user, if present."""

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or replace a user's profile and return the stored row."""


@dataclass
class ProfileService:
    """Service for user profiles and goal calculation."""

    repository: ProfileRepository

    def get_profile(self, user_id: str) -> UserProfile:
        """Return the user's profile, creating the default one on first read."""
        owner = require_user_id(user_id)
        existing = self.repository.get_profile(owner)
        if existing is not None:
            return existing
        _logger.info("Creating default profile: user_id=%s", owner)
        return self.repository.upsert_profile(default_profile(owner))

    def update_profile(
        self, user_id: str, payload: Mapping[str, object] | ProfileInput
    ) -> UserProfile:
        """Validate and upsert a user's profile."""
        profile = validate_profile_payload(require_user_id(user_id), payload)
        return self.repository.upsert_profile(profile)

    @staticmethod
    def calculate_goals(  # noqa: PLR0913
        height: object,
        current_weight: object,
        goal: object,
        age: object = 30,
        gender: object = "male",
        activity_level: object = "lightly_active",
    ) -> GoalTargets:
        """Return calorie and macro targets for the given biometrics."""
        return compute_goals(
            height=height,
            current_weight=current_weight,
            goal=goal,
            age=age,
            gender=gender,
            activity_level=activity_level,
        )


def validate_profile_payload(
    user_id: str, payload: Mapping[str, object] | ProfileInput
) -> UserProfile:
    """Validate a profile payload keyed by wire field names."""
    profile = validate_input(ProfileInput, payload)
    fields = profile.model_dump(include=set(ProfileInput.model_fields))
    return UserProfile(user_id=user_id, **fields)
