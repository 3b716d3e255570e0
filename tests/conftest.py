"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from pocketfit.config import Settings
from pocketfit.containers import AppContainer
from pocketfit.domain.activity import (
    ActivityKind,
    ActivityRecord,
    Commitment,
    MealLogRow,
    WeightLogRow,
    WorkoutLogRow,
)
from pocketfit.domain.profile import Profile
from pocketfit.services.activity import ActivityRepository, ActivityService
from pocketfit.services.commitments import CommitmentRepository, CommitmentService
from pocketfit.services.dashboard import DashboardService
from pocketfit.services.insights import (
    InsightsClient,
    InsightsRepository,
    WeeklyInsightsService,
)
from pocketfit.services.profiles import ProfileRepository, ProfileService


@dataclass
class InMemoryActivityRepository(ActivityRepository):
    """In-memory activity repository for tests."""

    workouts: list[WorkoutLogRow] = field(default_factory=list)
    meals: list[MealLogRow] = field(default_factory=list)
    checkins: list[date] = field(default_factory=list)
    weights: list[WeightLogRow] = field(default_factory=list)
    fetched_kinds: list[ActivityKind] = field(default_factory=list)

    def _dates(self, kind: ActivityKind) -> list[date]:
        if kind == ActivityKind.WORKOUT:
            return [w.workout_date for w in self.workouts]
        if kind == ActivityKind.MEAL:
            return [m.meal_date for m in self.meals]
        return list(self.checkins)

    def list_activity_records(
        self, user_id: UUID, kind: ActivityKind, start: date, end: date
    ) -> list[ActivityRecord]:
        self.fetched_kinds.append(kind)
        return [
            ActivityRecord(date=day, kind=kind)
            for day in self._dates(kind)
            if start <= day <= end
        ]

    def count_activity(self, user_id: UUID, kind: ActivityKind) -> int:
        return len(self._dates(kind))

    def list_checkin_dates(self, user_id: UUID) -> list[date]:
        return sorted(self.checkins, reverse=True)

    def list_workout_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutLogRow]:
        return [w for w in self.workouts if start <= w.workout_date <= end]

    def list_meal_logs(self, user_id: UUID, start: date, end: date) -> list[MealLogRow]:
        return [m for m in self.meals if start <= m.meal_date <= end]

    def list_weight_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[WeightLogRow]:
        rows = [w for w in self.weights if start <= w.log_date <= end]
        return sorted(rows, key=lambda row: row.log_date, reverse=True)

    def log_workout(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        completed: bool,
        exercises: list[dict[str, object]],
        notes: str | None,
    ) -> WorkoutLogRow:
        row = WorkoutLogRow(workout_date=workout_date, completed=completed)
        self.workouts.append(row)
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
        row = MealLogRow(
            meal_date=meal_date,
            total_calories=total_calories,
            total_protein=total_protein,
        )
        self.meals.append(row)
        return row

    def log_checkin(
        self, user_id: UUID, checkin_date: date, photo_url: str
    ) -> ActivityRecord:
        self.checkins.append(checkin_date)
        return ActivityRecord(date=checkin_date, kind=ActivityKind.CHECKIN)

    def log_weight(self, user_id: UUID, log_date: date, weight: float) -> WeightLogRow:
        row = WeightLogRow(log_date=log_date, weight=weight)
        self.weights.append(row)
        return row


@dataclass
class InMemoryCommitmentRepository(CommitmentRepository):
    """In-memory commitment repository for tests."""

    commitments: dict[UUID, Commitment] = field(default_factory=dict)
    owners: dict[UUID, UUID] = field(default_factory=dict)

    def add(self, user_id: UUID, commitment: Commitment) -> None:
        self.commitments[commitment.id] = commitment
        self.owners[commitment.id] = user_id

    def list_active(self, user_id: UUID) -> list[Commitment]:
        return [
            commitment
            for commitment_id, commitment in reversed(self.commitments.items())
            if self.owners[commitment_id] == user_id and commitment.is_active
        ]

    def create_commitment(  # noqa: PLR0913
        self,
        user_id: UUID,
        kind: ActivityKind,
        target_per_week: int,
        duration_weeks: int,
        start_date: date,
        end_date: date,
    ) -> Commitment:
        commitment = Commitment(
            id=uuid4(),
            kind=kind,
            target_per_week=target_per_week,
            duration_weeks=duration_weeks,
            start_date=start_date,
        )
        self.add(user_id, commitment)
        return commitment

    def deactivate(self, commitment_id: UUID) -> None:
        current = self.commitments[commitment_id]
        self.commitments[commitment_id] = Commitment(
            id=current.id,
            kind=current.kind,
            target_per_week=current.target_per_week,
            duration_weeks=current.duration_weeks,
            start_date=current.start_date,
            is_active=False,
        )

    def delete(self, commitment_id: UUID) -> None:
        self.commitments.pop(commitment_id, None)
        self.owners.pop(commitment_id, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)


@dataclass
class InMemoryInsightsRepository(InsightsRepository):
    """In-memory insights repository for tests."""

    saved: list[dict[str, object]] = field(default_factory=list)

    def save_insights(
        self,
        user_id: UUID,
        week_start: date,
        week_end: date,
        insights: dict[str, object],
    ) -> None:
        self.saved.append(
            {
                "user_id": user_id,
                "week_start": week_start,
                "week_end": week_end,
                "insights": insights,
            }
        )


@dataclass
class FakeInsightsClient(InsightsClient):
    """Fake gateway client returning fixed text or raising."""

    text: str = (
        "Here you go:\n```json\n"
        '{"weight_change": 0.3, "attendance_rate": "75.0%", '
        '"protein_average": 32.5, "progress_summary": "Solid week", '
        '"top_issues": [], "suggestions": ["Add a rest day"]}\n```'
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(
        self, *, model: str, system_prompt: str, user_prompt: str
    ) -> str:
        self.prompts.append(system_prompt)
        if self.error is not None:
            raise self.error
        return self.text


def make_profile(user_id: UUID, **overrides: object) -> Profile:
    values: dict[str, object] = {
        "age": 30,
        "gender": "male",
        "height_cm": 180.0,
        "weight_kg": 80.0,
        "experience": "intermediate",
        "goal": "bulk",
        "dietary_preference": "none",
    }
    values.update(overrides)
    return Profile(user_id=user_id, **values)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        ai_gateway_api_key="gateway-key",
    )


@pytest.fixture
def activity_repository() -> InMemoryActivityRepository:
    return InMemoryActivityRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def insights_client() -> FakeInsightsClient:
    return FakeInsightsClient()


@pytest.fixture
def container(
    settings: Settings,
    activity_repository: InMemoryActivityRepository,
    profile_repository: InMemoryProfileRepository,
    insights_client: FakeInsightsClient,
) -> AppContainer:
    activity_service = ActivityService(activity_repository)
    commitment_service = CommitmentService(
        repository=InMemoryCommitmentRepository(),
        activity_service=activity_service,
    )
    insights_service = WeeklyInsightsService(
        client=insights_client,
        model=settings.ai_model,
        activity_repository=activity_repository,
        profile_repository=profile_repository,
        insights_repository=InMemoryInsightsRepository(),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        activity_service=activity_service,
        commitment_service=commitment_service,
        dashboard_service=DashboardService(activity_repository),
        profile_service=ProfileService(profile_repository),
        insights_service=insights_service,
        close_resources=close_resources,
    )
