"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime
from uuid import UUID

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status

from pocketfit.api.auth import require_api_token
from pocketfit.api.models import (
    AchievementModel,
    CheckinModel,
    CommitmentModel,
    CreateCommitmentRequest,
    DailyTargetsModel,
    DashboardModel,
    InsightsResponse,
    LevelModel,
    LogCheckinRequest,
    LogMealRequest,
    LogWeightRequest,
    LogWorkoutRequest,
    MealLogModel,
    ProgressModel,
    StreakModel,
    WeeklyActivityModel,
    WeightLogModel,
    WorkoutLogModel,
)
from pocketfit.app_logging import configure_logging
from pocketfit.config import resolve_timezone
from pocketfit.containers import AppContainer
from pocketfit.domain.activity import Commitment
from pocketfit.domain.dashboard import DashboardStats
from pocketfit.domain.progress import CommitmentWithProgress, LevelState
from pocketfit.services.achievements import sort_for_display
from pocketfit.services.commitments import InvalidCommitmentError
from pocketfit.services.progress import calculate_level


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    authenticated = [Depends(require_api_token)]

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/progress/level", dependencies=authenticated)
    async def level_for_xp(xp: int = Query(ge=0)) -> LevelModel:
        """Return the level reached with the given XP."""
        return _level_model(calculate_level(xp))

    @app.get("/users/{user_id}/commitments", dependencies=authenticated)
    async def list_commitments(
        user_id: UUID, request: Request, tz: str | None = None
    ) -> dict[str, list[CommitmentModel]]:
        """Return active commitments with weekly progress."""
        state_container: AppContainer = request.app.state.container
        today = _today(state_container, tz)
        evaluated = state_container.commitment_service.list_with_progress(
            user_id, today
        )
        return {"commitments": [_commitment_with_progress(c) for c in evaluated]}

    @app.post(
        "/users/{user_id}/commitments",
        dependencies=authenticated,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_commitment(
        user_id: UUID,
        body: CreateCommitmentRequest,
        request: Request,
        tz: str | None = None,
    ) -> CommitmentModel:
        """Create a commitment starting this week."""
        state_container: AppContainer = request.app.state.container
        try:
            commitment = state_container.commitment_service.create_commitment(
                user_id=user_id,
                kind=body.kind,
                target_per_week=body.target_per_week,
                duration_weeks=body.duration_weeks,
                today=_today(state_container, tz),
            )
        except InvalidCommitmentError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _commitment_model(commitment)

    @app.post("/commitments/{commitment_id}/deactivate", dependencies=authenticated)
    async def deactivate_commitment(
        commitment_id: UUID, request: Request
    ) -> dict[str, str]:
        """Soft-deactivate a commitment."""
        state_container: AppContainer = request.app.state.container
        state_container.commitment_service.deactivate_commitment(commitment_id)
        return {"status": "ok"}

    @app.delete("/commitments/{commitment_id}", dependencies=authenticated)
    async def delete_commitment(
        commitment_id: UUID, request: Request
    ) -> dict[str, str]:
        """Remove a commitment."""
        state_container: AppContainer = request.app.state.container
        state_container.commitment_service.delete_commitment(commitment_id)
        return {"status": "ok"}

    @app.post(
        "/users/{user_id}/workouts",
        dependencies=authenticated,
        status_code=status.HTTP_201_CREATED,
    )
    async def log_workout(
        user_id: UUID, body: LogWorkoutRequest, request: Request, tz: str | None = None
    ) -> WorkoutLogModel:
        """Log a workout, dated today unless the body says otherwise."""
        state_container: AppContainer = request.app.state.container
        row = state_container.activity_service.log_workout(
            user_id,
            body.workout_date or _today(state_container, tz),
            body.completed,
            body.exercises,
            body.notes,
        )
        return WorkoutLogModel(workout_date=row.workout_date, completed=row.completed)

    @app.post(
        "/users/{user_id}/meals",
        dependencies=authenticated,
        status_code=status.HTTP_201_CREATED,
    )
    async def log_meal(
        user_id: UUID, body: LogMealRequest, request: Request, tz: str | None = None
    ) -> MealLogModel:
        """Log a meal with its calorie and protein totals."""
        state_container: AppContainer = request.app.state.container
        row = state_container.activity_service.log_meal(
            user_id,
            body.meal_date or _today(state_container, tz),
            body.meal_type,
            body.items,
            body.total_calories,
            body.total_protein,
        )
        return MealLogModel(
            meal_date=row.meal_date,
            total_calories=row.total_calories,
            total_protein=row.total_protein,
        )

    @app.post(
        "/users/{user_id}/checkins",
        dependencies=authenticated,
        status_code=status.HTTP_201_CREATED,
    )
    async def log_checkin(
        user_id: UUID,
        body: LogCheckinRequest,
        request: Request,
        tz: str | None = None,
    ) -> CheckinModel:
        """Record a gym check-in for an already uploaded photo."""
        state_container: AppContainer = request.app.state.container
        record = state_container.activity_service.log_checkin(
            user_id, body.checkin_date or _today(state_container, tz), body.photo_url
        )
        return CheckinModel(checkin_date=record.date)

    @app.post(
        "/users/{user_id}/weights",
        dependencies=authenticated,
        status_code=status.HTTP_201_CREATED,
    )
    async def log_weight(
        user_id: UUID, body: LogWeightRequest, request: Request, tz: str | None = None
    ) -> WeightLogModel:
        """Record a body weight measurement."""
        state_container: AppContainer = request.app.state.container
        row = state_container.activity_service.log_weight(
            user_id, body.log_date or _today(state_container, tz), body.weight
        )
        return WeightLogModel(log_date=row.log_date, weight=row.weight)

    @app.get("/users/{user_id}/dashboard", dependencies=authenticated)
    async def dashboard(
        user_id: UUID, request: Request, tz: str | None = None
    ) -> DashboardModel:
        """Return the dashboard summary for today."""
        state_container: AppContainer = request.app.state.container
        stats = state_container.dashboard_service.get_dashboard(
            user_id, _today(state_container, tz)
        )
        return _dashboard_model(stats)

    @app.get("/users/{user_id}/targets", dependencies=authenticated)
    async def daily_targets(user_id: UUID, request: Request) -> DailyTargetsModel:
        """Return daily calorie and protein targets."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.profile_service.get_daily_targets(user_id)
        if targets is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
            )
        return DailyTargetsModel(
            bmr=targets.bmr,
            tdee=targets.tdee,
            calorie_target=targets.calorie_target,
            protein_target_g=targets.protein_target_g,
        )

    @app.post("/users/{user_id}/insights", dependencies=authenticated)
    async def weekly_insights(
        user_id: UUID, request: Request, tz: str | None = None
    ) -> InsightsResponse:
        """Generate and store insights for the last seven days."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.insights_service.generate(
            user_id, _today(state_container, tz)
        )
        logger.info(
            "Generated weekly insights",
            extra={"user_id": str(user_id), "source": result.source},
        )
        return InsightsResponse(
            source=result.source,
            week_start=result.snapshot.week_start,
            week_end=result.snapshot.week_end,
            insights=result.insights.model_dump(),
        )

    return app


def _today(container: AppContainer, tz: str | None) -> date:
    """Return today's date in the requested or default time zone."""
    zone = resolve_timezone(tz, container.settings.default_timezone)
    return datetime.now(tz=zone).date()


def _commitment_model(commitment: Commitment) -> CommitmentModel:
    return CommitmentModel(
        id=commitment.id,
        kind=commitment.kind,
        target_per_week=commitment.target_per_week,
        duration_weeks=commitment.duration_weeks,
        start_date=commitment.start_date,
        is_active=commitment.is_active,
    )


def _commitment_with_progress(item: CommitmentWithProgress) -> CommitmentModel:
    model = _commitment_model(item.commitment)
    model.on_track = item.on_track
    model.progress = ProgressModel(
        current_week=item.progress.current_week,
        total_weeks=item.progress.total_weeks,
        this_week_count=item.progress.this_week_count,
        weekly_results=item.progress.weekly_results,
        overall_progress=item.progress.overall_progress,
    )
    return model


def _level_model(level: LevelState) -> LevelModel:
    return LevelModel(
        level=level.level,
        current_level_xp=level.current_level_xp,
        xp_to_next_level=level.xp_to_next_level,
    )


def _dashboard_model(stats: DashboardStats) -> DashboardModel:
    return DashboardModel(
        today=stats.today,
        weekly=WeeklyActivityModel(
            week_start=stats.weekly.week_start,
            workouts=stats.weekly.workouts,
            meals=stats.weekly.meals,
            checkins=stats.weekly.checkins,
        ),
        streak=StreakModel(
            current=stats.streak.current,
            longest=stats.streak.longest,
            label=stats.streak_label,
        ),
        total_days_active=stats.total_days_active,
        today_calories=stats.today_calories,
        today_protein=stats.today_protein,
        weekly_workout_count=stats.weekly_workout_count,
        avg_daily_calories=stats.avg_daily_calories,
        total_xp=stats.total_xp,
        level=_level_model(stats.level),
        achievements=[
            AchievementModel(
                id=item.definition.id,
                name=item.definition.name,
                description=item.definition.description,
                icon=item.definition.icon,
                category=str(item.definition.category),
                target=item.definition.target,
                xp=item.definition.xp,
                progress=item.progress,
                unlocked=item.unlocked,
            )
            for item in sort_for_display(stats.achievements)
        ],
        today_workout_done=stats.today_workout_done,
        motivational_message=stats.motivational_message,
    )
