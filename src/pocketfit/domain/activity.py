"""Domain models for activity records and commitments."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class ActivityKind(StrEnum):
    """Kinds of activity a user can log."""

    WORKOUT = "workout"
    CHECKIN = "checkin"
    MEAL = "meal"


COMMITMENT_TYPES: dict[ActivityKind, str] = {
    ActivityKind.WORKOUT: "workouts_per_week",
    ActivityKind.CHECKIN: "checkins_per_week",
    ActivityKind.MEAL: "meals_logged_per_week",
}


def kind_from_commitment_type(commitment_type: str) -> ActivityKind:
    """Map a stored commitment type to its activity kind."""
    for kind, stored in COMMITMENT_TYPES.items():
        if stored == commitment_type:
            return kind
    raise ValueError(f"Unknown commitment type: {commitment_type}")


@dataclass(frozen=True)
class ActivityRecord:
    """A single dated activity fact."""

    date: date
    kind: ActivityKind


@dataclass(frozen=True)
class Commitment:
    """A weekly activity target over a fixed number of weeks."""

    id: UUID
    kind: ActivityKind
    target_per_week: int
    duration_weeks: int
    start_date: date
    is_active: bool = True


@dataclass(frozen=True)
class WorkoutLogRow:
    """Summary data for a logged workout."""

    workout_date: date
    completed: bool


@dataclass(frozen=True)
class MealLogRow:
    """Summary data for a logged meal."""

    meal_date: date
    total_calories: float
    total_protein: float


@dataclass(frozen=True)
class WeightLogRow:
    """A body weight measurement."""

    log_date: date
    weight: float
