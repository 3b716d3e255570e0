"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from pocketfit.domain.profile import Profile
from pocketfit.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile reads."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("profiles")
            .select(
                "age, gender, height, weight, experience, goal, dietary_preference"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(
            user_id=user_id,
            age=int(row.get("age", 0)),
            gender=str(row.get("gender", "")),
            height_cm=float(row.get("height", 0.0)),
            weight_kg=float(row.get("weight", 0.0)),
            experience=str(row.get("experience", "")),
            goal=str(row.get("goal", "")),
            dietary_preference=str(row.get("dietary_preference", "")),
        )
