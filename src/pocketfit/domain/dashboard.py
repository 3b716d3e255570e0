"""Domain models for the dashboard summary."""

from dataclasses import dataclass
from datetime import date

from pocketfit.domain.achievements import AchievementProgress
from pocketfit.domain.progress import LevelState, StreakState


@dataclass(frozen=True)
class WeeklyActivity:
    """Per-day activity counts for one Monday-aligned week."""

    week_start: date
    workouts: list[int]
    meals: list[int]
    checkins: list[int]


@dataclass(frozen=True)
class DashboardStats:
    """Everything the dashboard shows for a user on a given day."""

    today: date
    weekly: WeeklyActivity
    streak: StreakState
    total_days_active: int
    today_calories: float
    today_protein: float
    weekly_workout_count: int
    avg_daily_calories: int
    total_xp: int
    level: LevelState
    achievements: list[AchievementProgress]
    today_workout_done: bool
    streak_label: str
    motivational_message: str
