"""Activity log access shared by the progress services."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from pocketfit.domain.activity import (
    ActivityKind,
    ActivityRecord,
    MealLogRow,
    WeightLogRow,
    WorkoutLogRow,
)

logger = logging.getLogger(__name__)


class ActivityRepository(Protocol):
    """Persistence interface for logged activity."""

    def list_activity_records(
        self, user_id: UUID, kind: ActivityKind, start: date, end: date
    ) -> list[ActivityRecord]:
        """Return records of one kind dated within [start, end]."""

    def count_activity(self, user_id: UUID, kind: ActivityKind) -> int:
        """Return the total number of records of one kind."""

    def list_checkin_dates(self, user_id: UUID) -> list[date]:
        """Return every gym check-in date, newest first."""

    def list_workout_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutLogRow]:
        """Return workout logs dated within [start, end]."""

    def list_meal_logs(self, user_id: UUID, start: date, end: date) -> list[MealLogRow]:
        """Return meal logs dated within [start, end]."""

    def list_weight_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[WeightLogRow]:
        """Return weight logs dated within [start, end], newest first."""

    def log_workout(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        completed: bool,
        exercises: list[dict[str, object]],
        notes: str | None,
    ) -> WorkoutLogRow:
        """Insert a workout log."""

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: str,
        items: list[dict[str, object]],
        total_calories: float,
        total_protein: float,
    ) -> MealLogRow:
        """Insert a meal log."""

    def log_checkin(
        self, user_id: UUID, checkin_date: date, photo_url: str
    ) -> ActivityRecord:
        """Insert a gym check-in."""

    def log_weight(self, user_id: UUID, log_date: date, weight: float) -> WeightLogRow:
        """Insert a body weight measurement."""


@dataclass
class ActivityService:
    """Service for recording activity and loading it in batches."""

    repository: ActivityRepository

    def records_by_kind(
        self,
        user_id: UUID,
        kinds: Iterable[ActivityKind],
        start: date,
        end: date,
    ) -> dict[ActivityKind, list[ActivityRecord]]:
        """Fetch records once per distinct kind."""
        records: dict[ActivityKind, list[ActivityRecord]] = {}
        for kind in dict.fromkeys(kinds):
            records[kind] = self.repository.list_activity_records(
                user_id, kind, start, end
            )
        logger.debug(
            "Loaded activity records",
            extra={"user_id": str(user_id), "kinds": [str(k) for k in records]},
        )
        return records

    def log_workout(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        completed: bool,
        exercises: list[dict[str, object]],
        notes: str | None = None,
    ) -> WorkoutLogRow:
        """Record a workout session."""
        row = self.repository.log_workout(
            user_id, workout_date, completed, exercises, notes
        )
        logger.info(
            "Logged workout",
            extra={
                "user_id": str(user_id),
                "workout_date": workout_date.isoformat(),
                "completed": completed,
            },
        )
        return row

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: str,
        items: list[dict[str, object]],
        total_calories: float,
        total_protein: float,
    ) -> MealLogRow:
        """Record a meal with its totals."""
        row = self.repository.log_meal(
            user_id, meal_date, meal_type, items, total_calories, total_protein
        )
        logger.info(
            "Logged meal",
            extra={"user_id": str(user_id), "meal_type": meal_type},
        )
        return row

    def log_checkin(
        self, user_id: UUID, checkin_date: date, photo_url: str
    ) -> ActivityRecord:
        record = self.repository.log_checkin(user_id, checkin_date, photo_url)
        logger.info(
            "Logged gym check-in",
            extra={"user_id": str(user_id), "date": checkin_date.isoformat()},
        )
        return record

    def log_weight(self, user_id: UUID, log_date: date, weight: float) -> WeightLogRow:
        row = self.repository.log_weight(user_id, log_date, weight)
        logger.info(
            "Logged weight",
            extra={"user_id": str(user_id), "log_date": log_date.isoformat()},
        )
        return row
