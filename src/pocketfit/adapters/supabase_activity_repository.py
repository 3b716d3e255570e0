"""Supabase repository for activity logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from pocketfit.domain.activity import (
    ActivityKind,
    ActivityRecord,
    MealLogRow,
    WeightLogRow,
    WorkoutLogRow,
)
from pocketfit.services.activity import ActivityRepository

ACTIVITY_TABLES: dict[ActivityKind, tuple[str, str]] = {
    ActivityKind.WORKOUT: ("workout_logs", "workout_date"),
    ActivityKind.CHECKIN: ("gym_checkins", "date"),
    ActivityKind.MEAL: ("meal_logs", "meal_date"),
}


@dataclass
class SupabaseActivityRepository(ActivityRepository):
    """Supabase implementation for activity queries."""

    client: Client

    def list_activity_records(
        self, user_id: UUID, kind: ActivityKind, start: date, end: date
    ) -> list[ActivityRecord]:
        """Return dated records of one kind in the range."""
        table, date_column = ACTIVITY_TABLES[kind]
        response = (
            self.client.table(table)
            .select(date_column)
            .eq("user_id", str(user_id))
            .gte(date_column, start.isoformat())
            .lte(date_column, end.isoformat())
            .execute()
        )
        return [
            ActivityRecord(date=_parse_date(row.get(date_column)), kind=kind)
            for row in response.data or []
        ]

    def count_activity(self, user_id: UUID, kind: ActivityKind) -> int:
        """Return the exact row count for one kind."""
        table, _ = ACTIVITY_TABLES[kind]
        response = (
            self.client.table(table)
            .select("id", count="exact")
            .eq("user_id", str(user_id))
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def list_checkin_dates(self, user_id: UUID) -> list[date]:
        """Return all check-in dates, newest first."""
        response = (
            self.client.table("gym_checkins")
            .select("date")
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .execute()
        )
        return [_parse_date(row.get("date")) for row in response.data or []]

    def list_workout_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutLogRow]:
        """Return workout logs in the range."""
        response = (
            self.client.table("workout_logs")
            .select("workout_date, completed")
            .eq("user_id", str(user_id))
            .gte("workout_date", start.isoformat())
            .lte("workout_date", end.isoformat())
            .order("workout_date", desc=True)
            .execute()
        )
        return [
            WorkoutLogRow(
                workout_date=_parse_date(row.get("workout_date")),
                completed=bool(row.get("completed")),
            )
            for row in response.data or []
        ]

    def list_meal_logs(self, user_id: UUID, start: date, end: date) -> list[MealLogRow]:
        """Return meal logs in the range."""
        response = (
            self.client.table("meal_logs")
            .select("meal_date, total_calories, total_protein")
            .eq("user_id", str(user_id))
            .gte("meal_date", start.isoformat())
            .lte("meal_date", end.isoformat())
            .order("meal_date", desc=True)
            .execute()
        )
        return [
            MealLogRow(
                meal_date=_parse_date(row.get("meal_date")),
                total_calories=float(row.get("total_calories") or 0.0),
                total_protein=float(row.get("total_protein") or 0.0),
            )
            for row in response.data or []
        ]

    def list_weight_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[WeightLogRow]:
        """Return weight logs in the range, newest first."""
        response = (
            self.client.table("weight_logs")
            .select("log_date, weight")
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .lte("log_date", end.isoformat())
            .order("log_date", desc=True)
            .execute()
        )
        return [
            WeightLogRow(
                log_date=_parse_date(row.get("log_date")),
                weight=float(row.get("weight") or 0.0),
            )
            for row in response.data or []
        ]

    def log_workout(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        completed: bool,
        exercises: list[dict[str, object]],
        notes: str | None,
    ) -> WorkoutLogRow:
        """Insert a workout log row."""
        response = (
            self.client.table("workout_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "workout_date": workout_date.isoformat(),
                    "exercises": exercises,
                    "completed": completed,
                    "notes": notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create workout log in Supabase")
        row = response.data[0]
        return WorkoutLogRow(
            workout_date=_parse_date(row.get("workout_date")),
            completed=bool(row.get("completed")),
        )

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: str,
        items: list[dict[str, object]],
        total_calories: float,
        total_protein: float,
    ) -> MealLogRow:
        """Insert a meal log row."""
        response = (
            self.client.table("meal_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "meal_date": meal_date.isoformat(),
                    "meal_type": meal_type,
                    "items": items,
                    "total_calories": total_calories,
                    "total_protein": total_protein,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log in Supabase")
        row = response.data[0]
        return MealLogRow(
            meal_date=_parse_date(row.get("meal_date")),
            total_calories=float(row.get("total_calories") or 0.0),
            total_protein=float(row.get("total_protein") or 0.0),
        )

    def log_checkin(
        self, user_id: UUID, checkin_date: date, photo_url: str
    ) -> ActivityRecord:
        """Insert a gym check-in row."""
        response = (
            self.client.table("gym_checkins")
            .insert(
                {
                    "user_id": str(user_id),
                    "date": checkin_date.isoformat(),
                    "photo_url": photo_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gym check-in in Supabase")
        return ActivityRecord(
            date=_parse_date(response.data[0].get("date")), kind=ActivityKind.CHECKIN
        )

    def log_weight(self, user_id: UUID, log_date: date, weight: float) -> WeightLogRow:
        """Insert a weight log row."""
        response = (
            self.client.table("weight_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "log_date": log_date.isoformat(),
                    "weight": weight,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight log in Supabase")
        row = response.data[0]
        return WeightLogRow(
            log_date=_parse_date(row.get("log_date")),
            weight=float(row.get("weight") or 0.0),
        )


def _parse_date(raw: object) -> date:
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    raise ValueError(f"Invalid date value from Supabase: {raw!r}")
