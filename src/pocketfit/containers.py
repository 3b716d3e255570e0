"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pocketfit.adapters.openai_gateway_client import OpenAIGatewayClient
from pocketfit.adapters.supabase_activity_repository import (
    SupabaseActivityRepository,
)
from pocketfit.adapters.supabase_commitment_repository import (
    SupabaseCommitmentRepository,
)
from pocketfit.adapters.supabase_insights_repository import (
    SupabaseInsightsRepository,
)
from pocketfit.adapters.supabase_profile_repository import SupabaseProfileRepository
from pocketfit.config import Settings
from pocketfit.services.activity import ActivityService
from pocketfit.services.commitments import CommitmentService
from pocketfit.services.dashboard import DashboardService
from pocketfit.services.insights import WeeklyInsightsService
from pocketfit.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    activity_service: ActivityService
    commitment_service: CommitmentService
    dashboard_service: DashboardService
    profile_service: ProfileService
    insights_service: WeeklyInsightsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    activity_repository = SupabaseActivityRepository(supabase_client)
    commitment_repository = SupabaseCommitmentRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    insights_repository = SupabaseInsightsRepository(supabase_client)
    gateway_client = OpenAIGatewayClient.create(
        api_key=resolved_settings.ai_gateway_api_key,
        base_url=resolved_settings.ai_gateway_base_url,
    )
    activity_service = ActivityService(activity_repository)
    commitment_service = CommitmentService(
        repository=commitment_repository,
        activity_service=activity_service,
    )
    dashboard_service = DashboardService(activity_repository)
    profile_service = ProfileService(profile_repository)
    insights_service = WeeklyInsightsService(
        client=gateway_client,
        model=resolved_settings.ai_model,
        activity_repository=activity_repository,
        profile_repository=profile_repository,
        insights_repository=insights_repository,
    )

    async def close_resources() -> None:
        await gateway_client.close()

    return AppContainer(
        settings=resolved_settings,
        activity_service=activity_service,
        commitment_service=commitment_service,
        dashboard_service=dashboard_service,
        profile_service=profile_service,
        insights_service=insights_service,
        close_resources=close_resources,
    )
