"""Commitment lifecycle and progress service."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from pocketfit.domain.activity import ActivityKind, Commitment
from pocketfit.domain.progress import CommitmentWithProgress
from pocketfit.services.activity import ActivityService
from pocketfit.services.progress import calculate_progress_batch, start_of_week

logger = logging.getLogger(__name__)


class InvalidCommitmentError(ValueError):
    """Raised when a commitment has a non-positive target or duration."""


class CommitmentRepository(Protocol):
    """Persistence interface for commitments."""

    def list_active(self, user_id: UUID) -> list[Commitment]:
        """Return active commitments, newest first."""

    def create_commitment(  # noqa: PLR0913
        self,
        user_id: UUID,
        kind: ActivityKind,
        target_per_week: int,
        duration_weeks: int,
        start_date: date,
        end_date: date,
    ) -> Commitment:
        """Create and return a commitment."""

    def deactivate(self, commitment_id: UUID) -> None:
        """Mark a commitment as inactive."""

    def delete(self, commitment_id: UUID) -> None:
        """Remove a commitment."""


@dataclass
class CommitmentService:
    """Service for creating commitments and tracking their progress."""

    repository: CommitmentRepository
    activity_service: ActivityService

    def list_with_progress(
        self, user_id: UUID, today: date
    ) -> list[CommitmentWithProgress]:
        """Return active commitments with progress as of today."""
        commitments = self.repository.list_active(user_id)
        if not commitments:
            return []
        earliest = min(commitment.start_date for commitment in commitments)
        records = self.activity_service.records_by_kind(
            user_id,
            (commitment.kind for commitment in commitments),
            earliest,
            today,
        )
        return calculate_progress_batch(commitments, records, today)

    def create_commitment(
        self,
        user_id: UUID,
        kind: ActivityKind,
        target_per_week: int,
        duration_weeks: int,
        today: date,
    ) -> Commitment:
        """Create a commitment starting on the Monday of the current week."""
        validate_commitment(target_per_week, duration_weeks)
        start_date = start_of_week(today)
        end_date = start_date + timedelta(weeks=duration_weeks)
        commitment = self.repository.create_commitment(
            user_id=user_id,
            kind=kind,
            target_per_week=target_per_week,
            duration_weeks=duration_weeks,
            start_date=start_date,
            end_date=end_date,
        )
        logger.info(
            "Created commitment",
            extra={"user_id": str(user_id), "commitment_id": str(commitment.id)},
        )
        return commitment

    def deactivate_commitment(self, commitment_id: UUID) -> None:
        """Soft-deactivate a commitment."""
        self.repository.deactivate(commitment_id)

    def delete_commitment(self, commitment_id: UUID) -> None:
        """Delete a commitment."""
        self.repository.delete(commitment_id)


def validate_commitment(target_per_week: int, duration_weeks: int) -> None:
    """Reject commitments the progress engine cannot score."""
    if target_per_week <= 0:
        raise InvalidCommitmentError("target_per_week must be positive")
    if duration_weeks <= 0:
        raise InvalidCommitmentError("duration_weeks must be positive")
