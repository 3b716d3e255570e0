"""Supabase repository for weekly insights."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from pocketfit.services.insights import InsightsRepository


@dataclass
class SupabaseInsightsRepository(InsightsRepository):
    """Supabase implementation for storing insights."""

    client: Client

    def save_insights(
        self,
        user_id: UUID,
        week_start: date,
        week_end: date,
        insights: dict[str, object],
    ) -> None:
        """Insert a weekly_insights row."""
        response = (
            self.client.table("weekly_insights")
            .insert(
                {
                    "user_id": str(user_id),
                    "week_start": week_start.isoformat(),
                    "week_end": week_end.isoformat(),
                    "insights": insights,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store weekly insights in Supabase")
