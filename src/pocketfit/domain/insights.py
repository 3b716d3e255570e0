"""Models for weekly insights."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class WeeklyInsights(BaseModel):
    """Structured weekly coaching feedback."""

    weight_change: float
    attendance_rate: str
    protein_average: float
    progress_summary: str
    top_issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class WeeklySnapshot:
    """Activity figures for the seven days ending today."""

    week_start: date
    week_end: date
    completed_workouts: int
    total_workouts: int
    attendance_rate: float
    protein_average: float
    daily_protein: float
    weight_change: float
    goal: str | None
    protein_target_g: int | None


@dataclass(frozen=True)
class ParsedInsights:
    """Gateway text that parsed into valid insights."""

    insights: WeeklyInsights


@dataclass(frozen=True)
class ParseFailure:
    """Gateway text that could not be turned into insights."""

    reason: str
    raw_text: str


InsightsParseResult = ParsedInsights | ParseFailure


@dataclass(frozen=True)
class InsightsResult:
    """Insights returned to the caller with where they came from."""

    snapshot: WeeklySnapshot
    insights: WeeklyInsights
    source: Literal["llm", "heuristic"]
