"""Tests for the statistics aggregator."""

from datetime import date, datetime, timedelta

import pytest

from liftlog.models.workout import WorkoutEntry
from liftlog.services import statistics
from liftlog.services.statistics import ChartPoint, DateRange


def days_ago(now, days, hour=9):
    return (now - timedelta(days=days)).replace(hour=hour, minute=0)


class TestEntryValues:
    """Tests for per-entry values."""

    def test_volume(self, bench, make_entry, now):
        entry = make_entry(bench, now, [(50, 10), (60, 8)])

        assert statistics.volume(entry) == 980

    def test_max_weight(self, bench, make_entry, now):
        entry = make_entry(bench, now, [(50, 10), (60, 8), (55, 6)])

        assert statistics.max_weight(entry) == 60

    def test_no_sets(self, bench, now):
        entry = WorkoutEntry(exercise=bench, date=now)

        assert statistics.max_weight(entry) == 0
        assert statistics.volume(entry) == 0


class TestPersonalRecords:
    """Tests for personal records."""

    def test_no_entries(self, bench):
        assert statistics.personal_record(bench, []) == 0

    def test_max_across_entries(self, bench, squat, make_entry, now):
        entries = [
            make_entry(bench, days_ago(now, 3), [(90, 5), (95, 3)]),
            make_entry(bench, days_ago(now, 1), [(100, 2), (80, 8)]),
            make_entry(squat, days_ago(now, 1), [(140, 5)]),
        ]

        assert statistics.personal_record(bench, entries) == 100

    def test_records_sorted_and_zero_skipped(self, bench, squat, curl, make_entry, now):
        entries = [
            make_entry(bench, now, [(100, 5)]),
            make_entry(squat, now, [(140, 5)]),
            make_entry(curl, now, [(0, 12)]),
            WorkoutEntry(exercise=None, date=now),
        ]

        assert statistics.personal_records(entries) == [("Squat", 140), ("Bench Press", 100)]


class TestDayCounts:
    """Tests for workout day counting and streaks."""

    def test_total_workout_days_counts_distinct_days(self, bench, squat, make_entry, now):
        entries = [
            make_entry(bench, days_ago(now, 0, hour=8)),
            make_entry(squat, days_ago(now, 0, hour=19)),
            make_entry(bench, days_ago(now, 2)),
        ]

        assert statistics.total_workout_days(entries) == 2

    def test_streak_today_and_yesterday(self, bench, make_entry, now):
        entries = [make_entry(bench, days_ago(now, 0)), make_entry(bench, days_ago(now, 1))]

        assert statistics.current_streak(entries, now) == 2

    def test_streak_stops_at_gap(self, bench, make_entry, now):
        entries = [make_entry(bench, days_ago(now, 0)), make_entry(bench, days_ago(now, 3))]

        assert statistics.current_streak(entries, now) == 1

    def test_streak_can_start_yesterday(self, bench, make_entry, now):
        entries = [
            make_entry(bench, days_ago(now, 1)),
            make_entry(bench, days_ago(now, 2)),
            make_entry(bench, days_ago(now, 3)),
            make_entry(bench, days_ago(now, 5)),
        ]

        assert statistics.current_streak(entries, now) == 3

    def test_streak_broken_before_yesterday(self, bench, make_entry, now):
        entries = [make_entry(bench, days_ago(now, 2))]

        assert statistics.current_streak(entries, now) == 0

    def test_total_sets(self, bench, make_entry, now):
        entries = [make_entry(bench, now, [(1, 1)] * 3), make_entry(bench, now, [(1, 1)])]

        assert statistics.total_sets(entries) == 4


class TestThisWeek:
    """Tests for weekly figures. ``now`` is Wednesday 2026-10-14."""

    def test_start_of_week_monday(self, now):
        assert statistics.start_of_week(now) == datetime(2026, 10, 12)

    def test_start_of_week_sunday(self, now):
        assert statistics.start_of_week(now, week_start=6) == datetime(2026, 10, 11)

    def test_start_of_week_on_first_day(self):
        monday = datetime(2026, 10, 12, 7, 30)

        assert statistics.start_of_week(monday) == datetime(2026, 10, 12)

    def test_this_week_count(self, bench, make_entry, now):
        entries = [
            make_entry(bench, datetime(2026, 10, 11, 10)),  # Sunday
            make_entry(bench, datetime(2026, 10, 12, 10)),
            make_entry(bench, datetime(2026, 10, 12, 18)),
            make_entry(bench, datetime(2026, 10, 13, 10)),
        ]

        assert statistics.this_week_count(entries, now) == 2
        assert statistics.this_week_count(entries, now, week_start=6) == 3

    def test_this_week_volume(self, bench, make_entry, now):
        entries = [
            make_entry(bench, datetime(2026, 10, 9, 10), [(100, 5)]),
            make_entry(bench, datetime(2026, 10, 13, 10), [(50, 10), (60, 8)]),
        ]

        assert statistics.this_week_volume(entries, now) == 980


class TestTrend:
    """Tests for time-bucketed series."""

    def test_daily_volume_ascending_without_gaps_filled(self, bench, squat, make_entry, now):
        entries = [
            make_entry(bench, days_ago(now, 1, hour=8), [(100, 5)]),
            make_entry(squat, days_ago(now, 1, hour=9), [(100, 5)]),
            make_entry(bench, days_ago(now, 4), [(50, 10)]),
            make_entry(bench, days_ago(now, 40), [(200, 1)]),
        ]

        assert statistics.trend(entries, 30, now) == [
            (date(2026, 10, 10), 500.0),
            (date(2026, 10, 13), 1000.0),
        ]

    def test_all_time(self, bench, make_entry, now):
        entries = [make_entry(bench, days_ago(now, 400), [(10, 10)])]

        assert statistics.trend(entries, None, now) == [(days_ago(now, 400).date(), 100.0)]

    def test_top_lifts(self, bench, squat, make_entry, now):
        entries = [
            make_entry(bench, days_ago(now, 1), [(100, 5)]),
            make_entry(bench, days_ago(now, 2), [(105, 1)]),
            make_entry(squat, days_ago(now, 2), [(140, 5)]),
            make_entry(squat, days_ago(now, 60), [(180, 1)]),
            WorkoutEntry(exercise=None, date=now),
        ]

        assert statistics.top_lifts(entries, 30, now) == [("Squat", 140), ("Bench Press", 105)]


class TestExerciseProgress:
    """Tests for exercise chart data."""

    def test_month_range(self, bench, make_entry, now):
        entries = [
            make_entry(bench, datetime(2026, 10, 10), [(100, 5), (90, 5)]),
            make_entry(bench, datetime(2026, 9, 20), [(95, 5)]),
            make_entry(bench, datetime(2026, 9, 1), [(90, 5)]),
        ]

        points = statistics.exercise_progress(entries, DateRange.MONTH, now)

        assert points == [
            ChartPoint(datetime(2026, 9, 20), 95, 475),
            ChartPoint(datetime(2026, 10, 10), 100, 950),
        ]
        assert statistics.average_volume(points) == pytest.approx(712.5)

    def test_all_range(self, bench, make_entry, now):
        entries = [make_entry(bench, datetime(2020, 1, 1))]

        assert len(statistics.exercise_progress(entries, DateRange.ALL, now)) == 1

    def test_month_arithmetic_clamps(self):
        assert DateRange.MONTH.start_date(datetime(2026, 3, 31, 12)) == datetime(2026, 2, 28, 12)
        assert DateRange.THREE_MONTHS.start_date(datetime(2026, 1, 15)) == datetime(2025, 10, 15)
        assert DateRange.ALL.start_date(datetime(2026, 1, 15)) is None


class TestHistoryHelpers:
    """Tests for recent entries and day grouping."""

    def test_recent_entries(self, bench, make_entry, now):
        entries = [make_entry(bench, days_ago(now, n)) for n in range(20)]

        recent = statistics.recent_entries(entries, limit=15)

        assert len(recent) == 15
        assert recent[0].date == days_ago(now, 0)

    def test_group_by_day(self, bench, squat, make_entry, now):
        early = make_entry(bench, days_ago(now, 0, hour=8))
        late = make_entry(squat, days_ago(now, 0, hour=19))
        older = make_entry(bench, days_ago(now, 2))

        grouped = statistics.group_by_day([early, older, late])

        assert [day for day, _ in grouped] == [date(2026, 10, 14), date(2026, 10, 12)]
        assert grouped[0][1] == [late, early]


class TestEmptyInput:
    """Every aggregate tolerates an empty snapshot."""

    def test_empty(self, bench, now):
        assert statistics.personal_records([]) == []
        assert statistics.total_workout_days([]) == 0
        assert statistics.total_sets([]) == 0
        assert statistics.current_streak([], now) == 0
        assert statistics.this_week_count([], now) == 0
        assert statistics.this_week_volume([], now) == 0
        assert statistics.trend([], 30, now) == []
        assert statistics.top_lifts([], 30, now) == []
        assert statistics.exercise_progress([], DateRange.ALL, now) == []
        assert statistics.average_volume([]) == 0
        assert statistics.recent_entries([]) == []
        assert statistics.group_by_day([]) == []

    def test_summary(self, bench, make_entry, now):
        assert statistics.summarize([], now) == statistics.StatsSummary(0, 0, 0, 0, 0.0)

        summary = statistics.summarize([make_entry(bench, now, [(50, 10)])], now)

        assert summary.total_workout_days == 1
        assert summary.current_streak == 1
        assert summary.this_week_volume == 500
