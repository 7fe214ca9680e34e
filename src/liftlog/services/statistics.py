"""Derived statistics over logged workout entries.

Every function here is pure: it reads a snapshot of entries and returns a
value, never touching the store. Empty input yields zero or an empty result.
Functions that depend on the current time take an explicit ``now`` so that
results are reproducible.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterable

from ..models.exercise import Exercise
from ..models.workout import Found, WorkoutEntry, local_day

MONDAY = 0


class DateRange(str, Enum):
    """Time windows offered on the exercise progress chart."""

    WEEK = "1W"
    MONTH = "1M"
    THREE_MONTHS = "3M"
    ALL = "All"

    def start_date(self, now: datetime | None = None) -> datetime | None:
        """First moment included in the range, or None for all time."""
        now = now or datetime.now()
        if self == DateRange.WEEK:
            return now - timedelta(days=7)
        if self == DateRange.MONTH:
            return _subtract_months(now, 1)
        if self == DateRange.THREE_MONTHS:
            return _subtract_months(now, 3)
        return None


@dataclass(frozen=True)
class ChartPoint:
    """One entry on an exercise progress chart."""

    date: datetime
    max_weight: float
    volume: float


@dataclass(frozen=True)
class StatsSummary:
    """Headline numbers for the progress dashboard."""

    total_workout_days: int
    this_week_count: int
    current_streak: int
    total_sets: int
    this_week_volume: float


def _subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping to the end of short months."""
    month_index = moment.year * 12 + moment.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _comparable(moment: datetime, reference: datetime) -> datetime:
    """Align ``moment`` with ``reference`` so naive and aware values compare."""
    if (moment.tzinfo is None) == (reference.tzinfo is None):
        return moment
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment.astimezone().replace(tzinfo=None)


def _since(entries: Iterable[WorkoutEntry], cutoff: datetime | None) -> list[WorkoutEntry]:
    if cutoff is None:
        return list(entries)
    return [e for e in entries if _comparable(e.date, cutoff) >= cutoff]


def _window_start(window_days: int | None, now: datetime | None) -> datetime | None:
    if window_days is None:
        return None
    return (now or datetime.now()) - timedelta(days=window_days)


def max_weight(entry: WorkoutEntry) -> float:
    """Heaviest set in an entry, or 0."""
    return entry.max_weight


def volume(entry: WorkoutEntry) -> float:
    """Sum of weight times reps across an entry's sets."""
    return entry.volume


def total_volume(entries: Iterable[WorkoutEntry]) -> float:
    return sum(volume(e) for e in entries)


def personal_record(exercise: Exercise, entries: Iterable[WorkoutEntry]) -> float:
    """Heaviest weight ever logged for an exercise, or 0 if never logged."""
    return max(
        (
            max_weight(e)
            for e in entries
            if e.exercise is not None and e.exercise.id == exercise.id
        ),
        default=0.0,
    )


def personal_records(entries: Iterable[WorkoutEntry]) -> list[tuple[str, float]]:
    """Best weight per exercise, heaviest first.

    Exercises whose best weight is 0 (bodyweight work) are left out, as are
    entries whose exercise no longer exists.
    """
    best: dict[str, tuple[str, float]] = {}
    for entry in entries:
        ref = entry.exercise_ref
        if not isinstance(ref, Found):
            continue
        weight = max_weight(entry)
        current = best.get(ref.exercise.id)
        if current is None or weight > current[1]:
            best[ref.exercise.id] = (ref.exercise.name, weight)
    records = [record for record in best.values() if record[1] > 0]
    return sorted(records, key=lambda r: (-r[1], r[0]))


def total_workout_days(entries: Iterable[WorkoutEntry]) -> int:
    """Number of distinct calendar days with at least one entry."""
    return len({local_day(e.date) for e in entries})


def total_sets(entries: Iterable[WorkoutEntry]) -> int:
    return sum(len(e.sets) for e in entries)


def current_streak(entries: Iterable[WorkoutEntry], now: datetime | None = None) -> int:
    """Consecutive training days ending today, or yesterday if today is empty."""
    days = {local_day(e.date) for e in entries}
    if not days:
        return 0

    check = local_day(now or datetime.now())
    if check not in days:
        check -= timedelta(days=1)

    streak = 0
    while check in days:
        streak += 1
        check -= timedelta(days=1)
    return streak


def start_of_week(now: datetime | None = None, week_start: int = MONDAY) -> datetime:
    """Midnight at the start of the current week.

    Args:
        now: Reference time, defaults to the current local time
        week_start: First day of the week, 0 = Monday through 6 = Sunday
    """
    now = now or datetime.now()
    today = now.date()
    offset = (today.weekday() - week_start) % 7
    return datetime.combine(today - timedelta(days=offset), time.min, tzinfo=now.tzinfo)


def this_week_count(
    entries: Iterable[WorkoutEntry],
    now: datetime | None = None,
    week_start: int = MONDAY,
) -> int:
    """Distinct training days since the start of the current week."""
    return total_workout_days(_since(entries, start_of_week(now, week_start)))


def this_week_volume(
    entries: Iterable[WorkoutEntry],
    now: datetime | None = None,
    week_start: int = MONDAY,
) -> float:
    """Total volume logged since the start of the current week."""
    return total_volume(_since(entries, start_of_week(now, week_start)))


def trend(
    entries: Iterable[WorkoutEntry],
    window_days: int | None = 30,
    now: datetime | None = None,
) -> list[tuple[date, float]]:
    """Daily volume over a trailing window, oldest day first.

    Days without entries are absent rather than zero. ``window_days=None``
    covers the whole history.
    """
    buckets: dict[date, float] = {}
    for entry in _since(entries, _window_start(window_days, now)):
        day = local_day(entry.date)
        buckets[day] = buckets.get(day, 0.0) + volume(entry)
    return sorted(buckets.items())


def top_lifts(
    entries: Iterable[WorkoutEntry],
    window_days: int | None = 30,
    now: datetime | None = None,
) -> list[tuple[str, float]]:
    """Heaviest single set per exercise name within the window, heaviest first."""
    best: dict[str, float] = {}
    for entry in _since(entries, _window_start(window_days, now)):
        ref = entry.exercise_ref
        if not isinstance(ref, Found):
            continue
        name = ref.exercise.name
        best[name] = max(best.get(name, 0.0), max_weight(entry))
    return sorted(best.items(), key=lambda item: (-item[1], item[0]))


def exercise_progress(
    entries: Iterable[WorkoutEntry],
    date_range: DateRange = DateRange.MONTH,
    now: datetime | None = None,
) -> list[ChartPoint]:
    """Chart points for one exercise's entries, oldest first."""
    selected = sorted(_since(entries, date_range.start_date(now)), key=lambda e: e.date)
    return [ChartPoint(e.date, max_weight(e), volume(e)) for e in selected]


def average_volume(points: Iterable[ChartPoint]) -> float:
    points = list(points)
    if not points:
        return 0.0
    return sum(p.volume for p in points) / len(points)


def recent_entries(entries: Iterable[WorkoutEntry], limit: int = 15) -> list[WorkoutEntry]:
    """Most recent entries, newest first."""
    return sorted(entries, key=lambda e: e.date, reverse=True)[:limit]


def group_by_day(entries: Iterable[WorkoutEntry]) -> list[tuple[date, list[WorkoutEntry]]]:
    """Workout history grouped by calendar day, newest day and entry first."""
    grouped: dict[date, list[WorkoutEntry]] = {}
    for entry in entries:
        grouped.setdefault(local_day(entry.date), []).append(entry)
    return [
        (day, sorted(grouped[day], key=lambda e: e.date, reverse=True))
        for day in sorted(grouped, reverse=True)
    ]


def summarize(
    entries: Iterable[WorkoutEntry],
    now: datetime | None = None,
    week_start: int = MONDAY,
) -> StatsSummary:
    """Compute the dashboard numbers from one snapshot of entries."""
    entries = list(entries)
    now = now or datetime.now()
    return StatsSummary(
        total_workout_days=total_workout_days(entries),
        this_week_count=this_week_count(entries, now, week_start),
        current_streak=current_streak(entries, now),
        total_sets=total_sets(entries),
        this_week_volume=this_week_volume(entries, now, week_start),
    )
