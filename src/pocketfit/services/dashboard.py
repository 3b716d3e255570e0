"""Dashboard statistics service."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from pocketfit.domain.achievements import AchievementMetric
from pocketfit.domain.activity import ActivityKind
from pocketfit.domain.dashboard import DashboardStats, WeeklyActivity
from pocketfit.services.achievements import evaluate_achievements, total_xp
from pocketfit.services.activity import ActivityRepository
from pocketfit.services.progress import (
    DAYS_PER_WEEK,
    calculate_level,
    calculate_streak,
    round_half_up,
    start_of_week,
)

STREAK_LABELS: tuple[tuple[int, str], ...] = (
    (30, "Unstoppable!"),
    (14, "On fire!"),
    (7, "Great momentum!"),
    (3, "Building habits!"),
    (1, "Keep it up!"),
)
DEFAULT_SUGGESTION = "Ready to crush your goals today?"


@dataclass
class DashboardService:
    """Service for computing the dashboard summary."""

    repository: ActivityRepository

    def get_dashboard(self, user_id: UUID, today: date) -> DashboardStats:
        """Return weekly activity, streak, achievements and level."""
        week_start = start_of_week(today)
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)

        workouts = self.repository.list_workout_logs(user_id, week_start, week_end)
        meals = self.repository.list_meal_logs(user_id, week_start, week_end)
        checkins = self.repository.list_activity_records(
            user_id, ActivityKind.CHECKIN, week_start, week_end
        )

        weekly = WeeklyActivity(
            week_start=week_start,
            workouts=_count_by_weekday((w.workout_date for w in workouts), week_start),
            meals=_count_by_weekday((m.meal_date for m in meals), week_start),
            checkins=_count_by_weekday((c.date for c in checkins), week_start),
        )

        todays_meals = [meal for meal in meals if meal.meal_date == today]
        today_calories = sum(meal.total_calories for meal in todays_meals)
        today_protein = sum(meal.total_protein for meal in todays_meals)
        avg_daily_calories = (
            round_half_up(sum(meal.total_calories for meal in meals) / DAYS_PER_WEEK)
            if meals
            else 0
        )
        today_workout_done = any(
            workout.workout_date == today and workout.completed
            for workout in workouts
        )
        weekly_workout_count = sum(weekly.workouts)

        checkin_dates = self.repository.list_checkin_dates(user_id)
        streak = calculate_streak(checkin_dates, today)

        achievements = evaluate_achievements(
            {
                AchievementMetric.TOTAL_WORKOUTS: self.repository.count_activity(
                    user_id, ActivityKind.WORKOUT
                ),
                AchievementMetric.WEEKLY_WORKOUTS: weekly_workout_count,
                AchievementMetric.TOTAL_MEALS: self.repository.count_activity(
                    user_id, ActivityKind.MEAL
                ),
                AchievementMetric.CURRENT_STREAK: streak.current,
                AchievementMetric.TOTAL_CHECKINS: self.repository.count_activity(
                    user_id, ActivityKind.CHECKIN
                ),
            }
        )
        xp = total_xp(achievements)

        return DashboardStats(
            today=today,
            weekly=weekly,
            streak=streak,
            total_days_active=len(set(checkin_dates)),
            today_calories=today_calories,
            today_protein=today_protein,
            weekly_workout_count=weekly_workout_count,
            avg_daily_calories=avg_daily_calories,
            total_xp=xp,
            level=calculate_level(xp),
            achievements=achievements,
            today_workout_done=today_workout_done,
            streak_label=streak_label(streak.current),
            motivational_message=motivational_message(
                today_workout_done, streak.current
            ),
        )


def streak_label(current_streak: int) -> str:
    """Return the encouragement shown next to the current streak."""
    for threshold, label in STREAK_LABELS:
        if current_streak >= threshold:
            return label
    return "Start your streak!"


def motivational_message(today_workout_done: bool, current_streak: int) -> str:
    """Return the dashboard banner message."""
    if today_workout_done:
        return "Great job completing today's workout! 💪"
    if current_streak >= 7:  # noqa: PLR2004
        return f"{current_streak} day streak! Don't break it now! 🔥"
    if current_streak >= 3:  # noqa: PLR2004
        return "You're building momentum. Keep pushing!"
    return DEFAULT_SUGGESTION


def _count_by_weekday(days: Iterable[date], week_start: date) -> list[int]:
    counts = [0] * DAYS_PER_WEEK
    for day in days:
        index = (day - week_start).days
        if 0 <= index < DAYS_PER_WEEK:
            counts[index] += 1
    return counts
