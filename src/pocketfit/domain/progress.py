"""Domain models for commitment progress and gamification."""

from dataclasses import dataclass
from uuid import UUID

from pocketfit.domain.activity import Commitment


@dataclass(frozen=True)
class WeekResult:
    """Activity count for one week of a commitment."""

    week_index: int
    count: int
    satisfied: bool


@dataclass(frozen=True)
class CommitmentProgress:
    """Progress of a commitment as of a given day."""

    current_week: int
    total_weeks: int
    this_week_count: int
    weekly_results: list[bool]
    overall_progress: int


@dataclass(frozen=True)
class CommitmentWithProgress:
    """A commitment paired with its computed progress."""

    commitment: Commitment
    progress: CommitmentProgress

    @property
    def id(self) -> UUID:
        return self.commitment.id

    @property
    def on_track(self) -> bool:
        """Return True when this calendar week already meets the target."""
        return self.progress.this_week_count >= self.commitment.target_per_week


@dataclass(frozen=True)
class StreakState:
    """Current and longest run of consecutive active days."""

    current: int
    longest: int


@dataclass(frozen=True)
class LevelState:
    """Level derived from total XP."""

    level: int
    current_level_xp: int
    xp_to_next_level: int
