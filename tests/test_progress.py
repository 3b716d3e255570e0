"""Tests for the pure progress calculations."""

from datetime import date, timedelta
from uuid import uuid4

from pocketfit.domain.activity import ActivityKind, ActivityRecord, Commitment
from pocketfit.services.progress import (
    bucketize,
    calculate_level,
    calculate_progress,
    calculate_progress_batch,
    calculate_streak,
    is_week_satisfied,
    round_half_up,
    start_of_week,
    week_results,
)

MONDAY = date(2024, 1, 1)


def _commitment(
    kind: ActivityKind = ActivityKind.WORKOUT,
    target: int = 3,
    weeks: int = 2,
    start: date = MONDAY,
) -> Commitment:
    return Commitment(
        id=uuid4(),
        kind=kind,
        target_per_week=target,
        duration_weeks=weeks,
        start_date=start,
    )


def _records(kind: ActivityKind, *days: date) -> list[ActivityRecord]:
    return [ActivityRecord(date=day, kind=kind) for day in days]


def test_bucketize_splits_by_week_and_drops_outside_window() -> None:
    dates = [
        date(2023, 12, 31),
        date(2024, 1, 1),
        date(2024, 1, 7),
        date(2024, 1, 8),
        date(2024, 1, 15),
    ]

    buckets = bucketize(dates, MONDAY, 2)

    assert buckets == [
        [date(2024, 1, 1), date(2024, 1, 7)],
        [date(2024, 1, 8)],
    ]


def test_bucketize_always_returns_week_count_buckets() -> None:
    assert bucketize([], MONDAY, 4) == [[], [], [], []]
    assert len(bucketize([MONDAY] * 10, MONDAY, 3)) == 3


def test_same_day_records_count_individually() -> None:
    bucket = [MONDAY, MONDAY, MONDAY]

    assert is_week_satisfied(bucket, 3)
    assert not is_week_satisfied(bucket[:2], 3)


def test_week_results_report_counts() -> None:
    results = week_results([MONDAY, MONDAY + timedelta(days=8)], MONDAY, 2, target=1)

    assert [result.count for result in results] == [1, 1]
    assert all(result.satisfied for result in results)
    assert [result.week_index for result in results] == [0, 1]


def test_progress_weekly_results_match_week_results() -> None:
    commitment = _commitment(target=2, weeks=4)
    days = [MONDAY, MONDAY, MONDAY + timedelta(days=9), MONDAY + timedelta(days=15)]
    now = MONDAY + timedelta(days=16)

    progress = calculate_progress(
        commitment, _records(ActivityKind.WORKOUT, *days), now
    )
    expected = week_results(days, MONDAY, progress.current_week, target=2)

    assert progress.weekly_results == [week.satisfied for week in expected]
    assert progress.weekly_results == [True, False, False]


def test_progress_half_satisfied() -> None:
    commitment = _commitment()
    records = _records(
        ActivityKind.WORKOUT,
        date(2024, 1, 2),
        date(2024, 1, 3),
        date(2024, 1, 4),
        date(2024, 1, 10),
    )

    progress = calculate_progress(commitment, records, now=date(2024, 1, 12))

    assert progress.current_week == 2
    assert progress.total_weeks == 2
    assert progress.weekly_results == [True, False]
    assert progress.this_week_count == 1
    assert progress.overall_progress == 50


def test_progress_ignores_other_kinds() -> None:
    commitment = _commitment(target=1, weeks=1)
    records = _records(ActivityKind.MEAL, date(2024, 1, 2))

    progress = calculate_progress(commitment, records, now=date(2024, 1, 3))

    assert progress.weekly_results == [False]
    assert progress.overall_progress == 0


def test_progress_with_no_records_is_zero() -> None:
    progress = calculate_progress(_commitment(weeks=4), [], now=date(2024, 1, 20))

    assert progress.current_week == 3
    assert progress.weekly_results == [False, False, False]
    assert progress.overall_progress == 0


def test_unreached_weeks_count_against_overall_progress() -> None:
    commitment = _commitment(target=1, weeks=4)
    records = _records(ActivityKind.WORKOUT, date(2024, 1, 2))

    progress = calculate_progress(commitment, records, now=date(2024, 1, 3))

    assert progress.current_week == 1
    assert progress.weekly_results == [True]
    assert progress.overall_progress == 25


def test_full_satisfaction_reaches_one_hundred() -> None:
    commitment = _commitment(target=2, weeks=3)
    days = [MONDAY + timedelta(weeks=w, days=d) for w in range(3) for d in (0, 1)]

    progress = calculate_progress(
        commitment, _records(ActivityKind.WORKOUT, *days), now=date(2024, 3, 1)
    )

    assert progress.current_week == 3
    assert progress.overall_progress == 100


def test_current_week_is_clamped() -> None:
    before_start = calculate_progress(_commitment(), [], now=date(2023, 12, 20))
    long_after = calculate_progress(_commitment(), [], now=date(2024, 6, 1))

    assert before_start.current_week == 1
    assert long_after.current_week == 2


def test_overall_progress_rounds_half_up() -> None:
    commitment = _commitment(target=1, weeks=8)
    records = _records(ActivityKind.WORKOUT, date(2024, 1, 2))

    progress = calculate_progress(commitment, records, now=date(2024, 1, 3))

    assert progress.overall_progress == 13
    assert round_half_up(12.5) == 13


def test_this_week_count_uses_calendar_week() -> None:
    wednesday = date(2024, 1, 3)
    commitment = _commitment(target=1, weeks=2, start=wednesday)
    records = _records(
        ActivityKind.WORKOUT, date(2024, 1, 8), date(2024, 1, 9), date(2024, 1, 10)
    )

    progress = calculate_progress(commitment, records, now=date(2024, 1, 11))

    # Second commitment week is Jan 10-16; the calendar week is Jan 8-14.
    assert progress.current_week == 2
    assert progress.this_week_count == 3
    assert progress.weekly_results == [True, True]


def test_progress_is_deterministic() -> None:
    commitment = _commitment()
    records = _records(ActivityKind.WORKOUT, date(2024, 1, 2), date(2024, 1, 9))
    now = date(2024, 1, 10)

    assert calculate_progress(commitment, records, now) == calculate_progress(
        commitment, records, now
    )


def test_batch_reuses_records_per_kind() -> None:
    workouts = _commitment(kind=ActivityKind.WORKOUT, target=1, weeks=1)
    meals = _commitment(kind=ActivityKind.MEAL, target=2, weeks=1)
    records = {
        ActivityKind.WORKOUT: _records(ActivityKind.WORKOUT, date(2024, 1, 2)),
        ActivityKind.MEAL: _records(ActivityKind.MEAL, date(2024, 1, 2)),
    }

    evaluated = calculate_progress_batch([workouts, meals], records, date(2024, 1, 3))

    assert [item.id for item in evaluated] == [workouts.id, meals.id]
    assert evaluated[0].progress.overall_progress == 100
    assert evaluated[1].progress.overall_progress == 0
    assert evaluated[0].on_track
    assert not evaluated[1].on_track


def test_batch_handles_missing_kind() -> None:
    checkins = _commitment(kind=ActivityKind.CHECKIN, target=1, weeks=1)

    evaluated = calculate_progress_batch([checkins], {}, date(2024, 1, 3))

    assert evaluated[0].progress.weekly_results == [False]


def test_streak_consecutive_days() -> None:
    days = {date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)}

    streak = calculate_streak(days, today=date(2024, 3, 3))

    assert (streak.current, streak.longest) == (3, 3)


def test_streak_gap_breaks_current_run() -> None:
    days = {date(2024, 3, 1), date(2024, 3, 3)}

    streak = calculate_streak(days, today=date(2024, 3, 3))

    assert (streak.current, streak.longest) == (1, 1)


def test_streak_empty() -> None:
    streak = calculate_streak([], today=date(2024, 3, 3))

    assert (streak.current, streak.longest) == (0, 0)


def test_streak_single_day_today() -> None:
    streak = calculate_streak([date(2024, 3, 3)], today=date(2024, 3, 3))

    assert (streak.current, streak.longest) == (1, 1)


def test_streak_counts_from_yesterday_when_today_missing() -> None:
    days = [date(2024, 3, 1), date(2024, 3, 2)]

    streak = calculate_streak(days, today=date(2024, 3, 3))

    assert streak.current == 2


def test_streak_broken_after_missed_day() -> None:
    days = [date(2024, 3, 1), date(2024, 3, 2)]

    streak = calculate_streak(days, today=date(2024, 3, 4))

    assert streak.current == 0
    assert streak.longest == 2


def test_streak_longest_found_anywhere_in_history() -> None:
    older_run = [date(2024, 1, 1) + timedelta(days=i) for i in range(5)]
    recent_run = [date(2024, 3, 2), date(2024, 3, 3)]

    streak = calculate_streak(older_run + recent_run, today=date(2024, 3, 3))

    assert streak.current == 2
    assert streak.longest == 5


def test_streak_collapses_same_day_duplicates() -> None:
    days = [date(2024, 3, 3), date(2024, 3, 3), date(2024, 3, 2)]

    streak = calculate_streak(days, today=date(2024, 3, 3))

    assert (streak.current, streak.longest) == (2, 2)


def test_longest_never_below_current() -> None:
    today = date(2024, 3, 10)
    for offset in range(10):
        days = [today - timedelta(days=i) for i in range(offset)]
        days += [today - timedelta(days=20 + i) for i in range(3)]
        streak = calculate_streak(days, today)
        assert streak.longest >= streak.current


def test_level_thresholds() -> None:
    assert calculate_level(0).level == 1
    assert calculate_level(99).level == 1
    assert calculate_level(100).level == 2
    assert calculate_level(300).level == 3


def test_level_for_250_xp() -> None:
    level = calculate_level(250)

    assert level.level == 2
    assert level.current_level_xp == 150
    assert level.xp_to_next_level == 200


def test_level_is_monotonic() -> None:
    levels = [calculate_level(xp).level for xp in range(0, 2000, 25)]

    assert levels == sorted(levels)


def test_start_of_week_is_monday() -> None:
    assert start_of_week(date(2024, 1, 7)) == MONDAY
    assert start_of_week(MONDAY) == MONDAY
