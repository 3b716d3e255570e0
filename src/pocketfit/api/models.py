"""Pydantic models for API requests and responses."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from pocketfit.domain.activity import ActivityKind


class CreateCommitmentRequest(BaseModel):
    """Request body for a new commitment."""

    kind: ActivityKind
    target_per_week: int = Field(gt=0)
    duration_weeks: int = Field(gt=0)


class LogWorkoutRequest(BaseModel):
    """Request body for a workout log."""

    workout_date: date | None = None
    completed: bool = True
    exercises: list[dict[str, object]] = Field(default_factory=list)
    notes: str | None = None


class LogMealRequest(BaseModel):
    """Request body for a meal log."""

    meal_date: date | None = None
    meal_type: str = Field(min_length=1)
    items: list[dict[str, object]] = Field(default_factory=list)
    total_calories: float = Field(ge=0)
    total_protein: float = Field(ge=0)


class LogCheckinRequest(BaseModel):
    """Request body for a gym check-in."""

    checkin_date: date | None = None
    photo_url: str = Field(min_length=1)


class LogWeightRequest(BaseModel):
    """Request body for a weight measurement."""

    log_date: date | None = None
    weight: float = Field(gt=0)


class WorkoutLogModel(BaseModel):
    workout_date: date
    completed: bool


class MealLogModel(BaseModel):
    meal_date: date
    total_calories: float
    total_protein: float


class CheckinModel(BaseModel):
    checkin_date: date


class WeightLogModel(BaseModel):
    log_date: date
    weight: float


class ProgressModel(BaseModel):
    """Weekly progress for a commitment."""

    current_week: int
    total_weeks: int
    this_week_count: int
    weekly_results: list[bool]
    overall_progress: int


class CommitmentModel(BaseModel):
    """A commitment, with progress when it has been evaluated."""

    id: UUID
    kind: ActivityKind
    target_per_week: int
    duration_weeks: int
    start_date: date
    is_active: bool
    on_track: bool | None = None
    progress: ProgressModel | None = None


class StreakModel(BaseModel):
    """Current and longest streaks."""

    current: int
    longest: int
    label: str


class LevelModel(BaseModel):
    """Level derived from XP."""

    level: int
    current_level_xp: int
    xp_to_next_level: int


class AchievementModel(BaseModel):
    """An achievement with its progress."""

    id: str
    name: str
    description: str
    icon: str
    category: str
    target: int
    xp: int
    progress: int
    unlocked: bool


class WeeklyActivityModel(BaseModel):
    """Per-day counts for Monday to Sunday."""

    week_start: date
    workouts: list[int]
    meals: list[int]
    checkins: list[int]


class DashboardModel(BaseModel):
    """Dashboard summary."""

    today: date
    weekly: WeeklyActivityModel
    streak: StreakModel
    total_days_active: int
    today_calories: float
    today_protein: float
    weekly_workout_count: int
    avg_daily_calories: int
    total_xp: int
    level: LevelModel
    achievements: list[AchievementModel]
    today_workout_done: bool
    motivational_message: str


class DailyTargetsModel(BaseModel):
    """Daily calorie and protein targets."""

    bmr: float
    tdee: int
    calorie_target: int
    protein_target_g: int


class InsightsResponse(BaseModel):
    """Generated weekly insights."""

    source: str
    week_start: date
    week_end: date
    insights: dict[str, object]
