"""Achievement catalogue and evaluation."""

from collections.abc import Mapping, Sequence

from pocketfit.domain.achievements import (
    AchievementCategory,
    AchievementDefinition,
    AchievementMetric,
    AchievementProgress,
)

ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        id="first_workout",
        name="First Steps",
        description="Complete your first workout",
        icon="🏃",
        target=1,
        xp=50,
        category=AchievementCategory.WORKOUT,
        metric=AchievementMetric.TOTAL_WORKOUTS,
    ),
    AchievementDefinition(
        id="workout_week",
        name="Week Warrior",
        description="Complete 5 workouts in a week",
        icon="💪",
        target=5,
        xp=100,
        category=AchievementCategory.WORKOUT,
        metric=AchievementMetric.WEEKLY_WORKOUTS,
    ),
    AchievementDefinition(
        id="workout_master",
        name="Workout Master",
        description="Complete 50 total workouts",
        icon="🏆",
        target=50,
        xp=500,
        category=AchievementCategory.WORKOUT,
        metric=AchievementMetric.TOTAL_WORKOUTS,
    ),
    AchievementDefinition(
        id="meal_tracker",
        name="Meal Tracker",
        description="Log 10 meals",
        icon="🍽️",
        target=10,
        xp=75,
        category=AchievementCategory.NUTRITION,
        metric=AchievementMetric.TOTAL_MEALS,
    ),
    AchievementDefinition(
        id="nutrition_pro",
        name="Nutrition Pro",
        description="Log 100 meals",
        icon="👨‍🍳",
        target=100,
        xp=300,
        category=AchievementCategory.NUTRITION,
        metric=AchievementMetric.TOTAL_MEALS,
    ),
    AchievementDefinition(
        id="streak_3",
        name="Getting Started",
        description="Maintain a 3-day streak",
        icon="⚡",
        target=3,
        xp=50,
        category=AchievementCategory.CONSISTENCY,
        metric=AchievementMetric.CURRENT_STREAK,
    ),
    AchievementDefinition(
        id="streak_7",
        name="Week Strong",
        description="Maintain a 7-day streak",
        icon="🔥",
        target=7,
        xp=150,
        category=AchievementCategory.CONSISTENCY,
        metric=AchievementMetric.CURRENT_STREAK,
    ),
    AchievementDefinition(
        id="streak_30",
        name="Monthly Champion",
        description="Maintain a 30-day streak",
        icon="👑",
        target=30,
        xp=500,
        category=AchievementCategory.CONSISTENCY,
        metric=AchievementMetric.CURRENT_STREAK,
    ),
    AchievementDefinition(
        id="checkin_5",
        name="Gym Regular",
        description="Check in to the gym 5 times",
        icon="📸",
        target=5,
        xp=100,
        category=AchievementCategory.MILESTONE,
        metric=AchievementMetric.TOTAL_CHECKINS,
    ),
    AchievementDefinition(
        id="checkin_20",
        name="Gym Veteran",
        description="Check in to the gym 20 times",
        icon="🎖️",
        target=20,
        xp=250,
        category=AchievementCategory.MILESTONE,
        metric=AchievementMetric.TOTAL_CHECKINS,
    ),
)


def evaluate_achievements(
    metrics: Mapping[AchievementMetric, int],
    catalogue: Sequence[AchievementDefinition] = ACHIEVEMENTS,
) -> list[AchievementProgress]:
    """Evaluate every achievement from the current metric values.

    Unlock state is derived from the figures on every call, never stored.
    """
    evaluated = []
    for definition in catalogue:
        raw = metrics.get(definition.metric, 0)
        evaluated.append(
            AchievementProgress(
                definition=definition,
                progress=max(0, min(raw, definition.target)),
                unlocked=raw >= definition.target,
            )
        )
    return evaluated


def total_xp(achievements: Sequence[AchievementProgress]) -> int:
    """Sum the XP of unlocked achievements."""
    return sum(item.definition.xp for item in achievements if item.unlocked)


def sort_for_display(
    achievements: Sequence[AchievementProgress],
) -> list[AchievementProgress]:
    """Order unlocked achievements first, then by completion ratio."""
    return sorted(
        achievements,
        key=lambda item: (
            not item.unlocked,
            -(item.progress / item.definition.target),
        ),
    )
