"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_tracker.adapters.supabase_support import execute, parse_timestamp
from meal_tracker.domain.profile import Goal, UserProfile
from meal_tracker.errors import StoreError
from meal_tracker.services.profile import ProfileRepository

PROFILES_TABLE = "user_profiles"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = execute(
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .limit(1),
            "get profile",
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or replace the user's profile row."""
        response = execute(
            self.client.table(PROFILES_TABLE).upsert(
                {
                    "user_id": profile.user_id,
                    "email": profile.email,
                    "goal": profile.goal.value,
                    "target_weight": profile.target_weight,
                    "height": profile.height,
                    "current_weight": profile.current_weight,
                    "target_calories": profile.target_calories,
                    "target_protein": profile.target_protein,
                    "target_carbs": profile.target_carbs,
                    "target_fat": profile.target_fat,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            ),
            "save profile",
        )
        if not response.data:
            raise StoreError("Failed to save profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        user_id=str(row["user_id"]),
        email=str(row.get("email", "")),
        goal=Goal(row.get("goal")),
        target_weight=float(row.get("target_weight", 0.0)),
        height=float(row.get("height", 0.0)),
        current_weight=float(row.get("current_weight", 0.0)),
        target_calories=float(row.get("target_calories", 0.0)),
        target_protein=float(row.get("target_protein", 0.0)),
        target_carbs=float(row.get("target_carbs", 0.0)),
        target_fat=float(row.get("target_fat", 0.0)),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
