"""Supabase repository for commitments."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from pocketfit.domain.activity import (
    COMMITMENT_TYPES,
    ActivityKind,
    Commitment,
    kind_from_commitment_type,
)
from pocketfit.services.commitments import CommitmentRepository


@dataclass
class SupabaseCommitmentRepository(CommitmentRepository):
    """Supabase implementation for commitment persistence."""

    client: Client

    def list_active(self, user_id: UUID) -> list[Commitment]:
        """Return active commitments, newest first."""
        response = (
            self.client.table("commitments")
            .select("id, type, target_value, duration_weeks, start_date, is_active")
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def create_commitment(  # noqa: PLR0913
        self,
        user_id: UUID,
        kind: ActivityKind,
        target_per_week: int,
        duration_weeks: int,
        start_date: date,
        end_date: date,
    ) -> Commitment:
        """Insert a commitment row and return it."""
        response = (
            self.client.table("commitments")
            .insert(
                {
                    "user_id": str(user_id),
                    "type": COMMITMENT_TYPES[kind],
                    "target_value": target_per_week,
                    "duration_weeks": duration_weeks,
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create commitment in Supabase")
        return _parse_row(response.data[0])

    def deactivate(self, commitment_id: UUID) -> None:
        """Set is_active to false."""
        self.client.table("commitments").update({"is_active": False}).eq(
            "id", str(commitment_id)
        ).execute()

    def delete(self, commitment_id: UUID) -> None:
        """Delete a commitment row."""
        self.client.table("commitments").delete().eq(
            "id", str(commitment_id)
        ).execute()


def _parse_row(row: dict[str, object]) -> Commitment:
    return Commitment(
        id=UUID(str(row["id"])),
        kind=kind_from_commitment_type(str(row["type"])),
        target_per_week=int(row["target_value"]),
        duration_weeks=int(row["duration_weeks"]),
        start_date=date.fromisoformat(str(row["start_date"])[:10]),
        is_active=bool(row.get("is_active", True)),
    )
