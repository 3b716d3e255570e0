"""Domain models for achievements."""

from dataclasses import dataclass
from enum import StrEnum


class AchievementCategory(StrEnum):
    """Grouping used when displaying achievements."""

    WORKOUT = "workout"
    NUTRITION = "nutrition"
    CONSISTENCY = "consistency"
    MILESTONE = "milestone"


class AchievementMetric(StrEnum):
    """Activity figure an achievement measures."""

    TOTAL_WORKOUTS = "total_workouts"
    WEEKLY_WORKOUTS = "weekly_workouts"
    TOTAL_MEALS = "total_meals"
    CURRENT_STREAK = "current_streak"
    TOTAL_CHECKINS = "total_checkins"


@dataclass(frozen=True)
class AchievementDefinition:
    """Static description of an achievement."""

    id: str
    name: str
    description: str
    icon: str
    target: int
    xp: int
    category: AchievementCategory
    metric: AchievementMetric


@dataclass(frozen=True)
class AchievementProgress:
    """An achievement evaluated against current activity figures."""

    definition: AchievementDefinition
    progress: int
    unlocked: bool

    @property
    def achievement_id(self) -> str:
        return self.definition.id
