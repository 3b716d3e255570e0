"""Weekly insights generated by the LLM gateway with a local fallback."""

import json
import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from pydantic import ValidationError

from pocketfit.domain.activity import MealLogRow, WeightLogRow, WorkoutLogRow
from pocketfit.domain.insights import (
    InsightsParseResult,
    InsightsResult,
    ParsedInsights,
    ParseFailure,
    WeeklyInsights,
    WeeklySnapshot,
)
from pocketfit.services.activity import ActivityRepository
from pocketfit.services.profiles import ProfileRepository, calculate_daily_targets

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 7
LOW_ATTENDANCE_PERCENT = 70
WEEKLY_WEIGHT_CHANGE_LIMIT_KG = 0.5

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")


class InsightsClient(Protocol):
    """Interface for the chat-completion gateway."""

    async def complete(
        self, *, model: str, system_prompt: str, user_prompt: str
    ) -> str:
        """Return the text of the first completion choice."""


class InsightsRepository(Protocol):
    """Persistence interface for generated insights."""

    def save_insights(
        self,
        user_id: UUID,
        week_start: date,
        week_end: date,
        insights: dict[str, object],
    ) -> None:
        """Store insights for a week."""


@dataclass
class WeeklyInsightsService:
    """Service that builds weekly insights for a user."""

    client: InsightsClient
    model: str
    activity_repository: ActivityRepository
    profile_repository: ProfileRepository
    insights_repository: InsightsRepository

    async def generate(self, user_id: UUID, today: date) -> InsightsResult:
        """Generate, store and return insights for the last seven days."""
        week_start = today - timedelta(days=LOOKBACK_DAYS)
        workouts = self.activity_repository.list_workout_logs(
            user_id, week_start, today
        )
        meals = self.activity_repository.list_meal_logs(user_id, week_start, today)
        weights = self.activity_repository.list_weight_logs(user_id, week_start, today)
        profile = self.profile_repository.get_profile(user_id)
        snapshot = build_snapshot(
            week_start,
            today,
            workouts,
            meals,
            weights,
            goal=profile.goal if profile else None,
            protein_target_g=(
                calculate_daily_targets(profile).protein_target_g if profile else None
            ),
        )

        result = await self._ask_gateway(snapshot)
        if isinstance(result, ParsedInsights):
            insights, source = result.insights, "llm"
        else:
            logger.warning(
                "Falling back to heuristic insights",
                extra={"user_id": str(user_id), "reason": result.reason},
            )
            insights, source = heuristic_insights(snapshot), "heuristic"

        self.insights_repository.save_insights(
            user_id, week_start, today, insights.model_dump()
        )
        return InsightsResult(snapshot=snapshot, insights=insights, source=source)

    async def _ask_gateway(self, snapshot: WeeklySnapshot) -> InsightsParseResult:
        try:
            text = await self.client.complete(
                model=self.model,
                system_prompt=build_prompt(snapshot),
                user_prompt="Analyze my progress and give insights.",
            )
        except Exception as exc:
            logger.exception("Insights gateway request failed")
            return ParseFailure(reason=f"{type(exc).__name__}: {exc}", raw_text="")
        return parse_insights(text)


def build_snapshot(  # noqa: PLR0913
    week_start: date,
    week_end: date,
    workouts: list[WorkoutLogRow],
    meals: list[MealLogRow],
    weights: list[WeightLogRow],
    goal: str | None,
    protein_target_g: int | None,
) -> WeeklySnapshot:
    """Summarize a week of logs."""
    completed = sum(1 for workout in workouts if workout.completed)
    total = len(workouts)
    protein_total = sum(meal.total_protein for meal in meals)
    ordered_weights = sorted(weights, key=lambda row: row.log_date, reverse=True)
    weight_change = (
        ordered_weights[0].weight - ordered_weights[-1].weight
        if len(ordered_weights) >= 2  # noqa: PLR2004
        else 0.0
    )
    return WeeklySnapshot(
        week_start=week_start,
        week_end=week_end,
        completed_workouts=completed,
        total_workouts=total,
        attendance_rate=(completed / total) * 100 if total else 0.0,
        protein_average=protein_total / len(meals) if meals else 0.0,
        daily_protein=protein_total / LOOKBACK_DAYS,
        weight_change=weight_change,
        goal=goal,
        protein_target_g=protein_target_g,
    )


def build_prompt(snapshot: WeeklySnapshot) -> str:
    """Build the system prompt describing the user's week."""
    sign = "+" if snapshot.weight_change > 0 else ""
    return (
        "You are PocketFit AI, a supportive fitness coach. "
        "Track weight trends, attendance, protein and consistency, "
        "and give 3-4 specific, actionable suggestions.\n\n"
        "Weekly data:\n"
        f"- Workout attendance: {snapshot.attendance_rate:.1f}% "
        f"({snapshot.completed_workouts}/{snapshot.total_workouts} sessions)\n"
        f"- Weight change: {sign}{snapshot.weight_change:.1f}kg\n"
        f"- Average protein per meal: {snapshot.protein_average:.1f}g\n"
        f"- Goal: {snapshot.goal or 'maintain'}\n\n"
        "Return ONLY valid JSON with keys weight_change, attendance_rate, "
        "protein_average, progress_summary, top_issues, suggestions."
    )


def parse_insights(text: str) -> InsightsParseResult:
    """Extract a JSON object from gateway text and validate it."""
    match = _FENCED_JSON.search(text)
    payload = match.group(1) if match else text
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as exc:
        return ParseFailure(reason=f"invalid JSON: {exc.msg}", raw_text=text)
    try:
        return ParsedInsights(insights=WeeklyInsights.model_validate(raw))
    except ValidationError as exc:
        return ParseFailure(
            reason=f"invalid insights: {exc.error_count()} errors", raw_text=text
        )


def heuristic_insights(snapshot: WeeklySnapshot) -> WeeklyInsights:
    """Build insights from simple rules when the gateway is unavailable."""
    issues: list[str] = []
    suggestions: list[str] = []

    if snapshot.total_workouts and snapshot.attendance_rate < LOW_ATTENDANCE_PERCENT:
        issues.append("Workout attendance below 70%")
        suggestions.append(
            "Schedule workouts at a fixed time, or trim each session so it fits."
        )
    limit = WEEKLY_WEIGHT_CHANGE_LIMIT_KG
    if snapshot.goal == "bulk" and snapshot.weight_change > limit:
        issues.append("Gaining weight faster than 0.5kg per week")
        suggestions.append("Reduce daily calories by about 200 kcal.")
    if snapshot.goal == "cut" and snapshot.weight_change < -limit:
        issues.append("Losing weight faster than 0.5kg per week")
        suggestions.append("Add about 200 kcal per day to protect muscle.")
    if (
        snapshot.protein_target_g is not None
        and snapshot.daily_protein < snapshot.protein_target_g
    ):
        issues.append("Protein intake below target")
        suggestions.append(
            "Swap in high-protein options like Greek yogurt, eggs or lean meat."
        )
    if not suggestions:
        suggestions.append("Keep your current routine going next week.")

    summary = (
        "You're on track this week."
        if not issues
        else f"{len(issues)} thing(s) to adjust this week."
    )
    return WeeklyInsights(
        weight_change=round(snapshot.weight_change, 1),
        attendance_rate=f"{snapshot.attendance_rate:.1f}%",
        protein_average=round(snapshot.protein_average, 1),
        progress_summary=summary,
        top_issues=issues,
        suggestions=suggestions,
    )
