"""Pure progress calculations for commitments, streaks and levels.

Nothing in this module performs I/O or reads the clock: the caller passes
``today``/``now`` explicitly, so identical inputs always give identical
results.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta

from pocketfit.domain.activity import ActivityKind, ActivityRecord, Commitment
from pocketfit.domain.progress import (
    CommitmentProgress,
    CommitmentWithProgress,
    LevelState,
    StreakState,
    WeekResult,
)

DAYS_PER_WEEK = 7
XP_PER_LEVEL = 100


def bucketize(
    dates: Iterable[date], week_start: date, week_count: int
) -> list[list[date]]:
    """Split dates into ``week_count`` consecutive weeks from ``week_start``.

    Dates outside the whole window are dropped.
    """
    buckets: list[list[date]] = [[] for _ in range(week_count)]
    for day in dates:
        offset = (day - week_start).days
        if offset < 0:
            continue
        index = offset // DAYS_PER_WEEK
        if index < week_count:
            buckets[index].append(day)
    return buckets


def is_week_satisfied(bucket: Sequence[date], target: int) -> bool:
    """Return True when a week's bucket reaches the target.

    Records sharing a calendar day each count.
    """
    return len(bucket) >= target


def week_results(
    dates: Iterable[date], week_start: date, week_count: int, target: int
) -> list[WeekResult]:
    """Return per-week counts and satisfaction flags."""
    return [
        WeekResult(
            week_index=index,
            count=len(bucket),
            satisfied=is_week_satisfied(bucket, target),
        )
        for index, bucket in enumerate(bucketize(dates, week_start, week_count))
    ]


def start_of_week(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def calculate_streak(active_dates: Iterable[date], today: date) -> StreakState:
    """Return the current and longest runs of consecutive active days.

    The current run is anchored on today when today is active, otherwise on
    yesterday, so a streak only breaks once a full day has been missed.
    """
    unique = set(active_dates)
    if not unique:
        return StreakState(current=0, longest=0)

    anchor = today if today in unique else today - timedelta(days=1)
    current = 0
    day = anchor
    while day in unique:
        current += 1
        day -= timedelta(days=1)

    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(unique):
        if previous is not None and (day - previous).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day

    return StreakState(current=current, longest=max(longest, current))


def calculate_progress(
    commitment: Commitment, records: Iterable[ActivityRecord], now: date
) -> CommitmentProgress:
    """Evaluate a commitment against activity records as of ``now``."""
    dates = [record.date for record in records if record.kind == commitment.kind]
    return _progress_from_dates(commitment, dates, now)


def calculate_progress_batch(
    commitments: Sequence[Commitment],
    records_by_kind: Mapping[ActivityKind, Sequence[ActivityRecord]],
    now: date,
) -> list[CommitmentWithProgress]:
    """Evaluate many commitments, reusing each kind's records."""
    dates_by_kind = {
        kind: [record.date for record in records if record.kind == kind]
        for kind, records in records_by_kind.items()
    }
    return [
        CommitmentWithProgress(
            commitment=commitment,
            progress=_progress_from_dates(
                commitment, dates_by_kind.get(commitment.kind, []), now
            ),
        )
        for commitment in commitments
    ]


def calculate_level(total_xp: int) -> LevelState:
    """Convert total XP into a level.

    Level ``n`` takes ``n * 100`` XP to complete.
    """
    level = 1
    remaining = total_xp
    while remaining >= level * XP_PER_LEVEL:
        remaining -= level * XP_PER_LEVEL
        level += 1
    return LevelState(
        level=level,
        current_level_xp=remaining,
        xp_to_next_level=level * XP_PER_LEVEL,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _progress_from_dates(
    commitment: Commitment, dates: Sequence[date], now: date
) -> CommitmentProgress:
    elapsed_weeks = (now - commitment.start_date).days // DAYS_PER_WEEK
    current_week = min(max(elapsed_weeks + 1, 1), commitment.duration_weeks)

    results = [
        week.satisfied
        for week in week_results(
            dates, commitment.start_date, current_week, commitment.target_per_week
        )
    ]

    # Counted over the calendar week, not the commitment's own week.
    this_week_start = start_of_week(now)
    this_week_end = this_week_start + timedelta(days=DAYS_PER_WEEK - 1)
    this_week_count = sum(
        1 for day in dates if this_week_start <= day <= this_week_end
    )

    successes = sum(1 for satisfied in results if satisfied)
    overall = round_half_up(100 * successes / commitment.duration_weeks)

    return CommitmentProgress(
        current_week=current_week,
        total_weeks=commitment.duration_weeks,
        this_week_count=this_week_count,
        weekly_results=results,
        overall_progress=overall,
    )
