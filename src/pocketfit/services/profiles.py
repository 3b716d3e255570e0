"""Profile lookup and daily target calculation."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pocketfit.domain.profile import DailyTargets, Profile
from pocketfit.services.progress import round_half_up

ACTIVITY_MULTIPLIERS = {"advanced": 1.725, "intermediate": 1.55}
DEFAULT_ACTIVITY_MULTIPLIER = 1.375
GOAL_CALORIE_OFFSETS = {"bulk": 400, "cut": -400}
PROTEIN_G_PER_KG = 2


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if onboarding is done."""


@dataclass
class ProfileService:
    """Service for profile-derived targets."""

    repository: ProfileRepository

    def get_daily_targets(self, user_id: UUID) -> DailyTargets | None:
        """Return daily targets, or None when there is no profile."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        return calculate_daily_targets(profile)


def calculate_daily_targets(profile: Profile) -> DailyTargets:
    """Mifflin-St Jeor BMR scaled by training experience and goal."""
    bmr = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    bmr += 5 if profile.gender == "male" else -161
    multiplier = ACTIVITY_MULTIPLIERS.get(
        profile.experience, DEFAULT_ACTIVITY_MULTIPLIER
    )
    tdee = round_half_up(bmr * multiplier)
    return DailyTargets(
        bmr=bmr,
        tdee=tdee,
        calorie_target=tdee + GOAL_CALORIE_OFFSETS.get(profile.goal, 0),
        protein_target_g=round_half_up(profile.weight_kg * PROTEIN_G_PER_KG),
    )
