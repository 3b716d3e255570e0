"""Domain models for user profiles."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Profile:
    """Onboarding data for a user."""

    user_id: UUID
    age: int
    gender: str
    height_cm: float
    weight_kg: float
    experience: str
    goal: str
    dietary_preference: str


@dataclass(frozen=True)
class DailyTargets:
    """Daily calorie and protein targets."""

    bmr: float
    tdee: int
    calorie_target: int
    protein_target_g: int
