"""Period aggregation: worked vs potential minutes and per-day grouping."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta, tzinfo

from punch_clock.calculators.types import DayData, PayPeriodStats, Session, WorkSchedule


def iter_local_days(start: datetime, end: datetime, tz: tzinfo) -> Iterator[date]:
    """Yield every local calendar day from ``start`` to ``end`` inclusive."""
    current = start.astimezone(tz).date()
    last = end.astimezone(tz).date()
    while current <= last:
        yield current
        current += timedelta(days=1)


def session_anchor(session: Session) -> datetime:
    """Instant used to place a session in a range or a day bucket."""
    return session.punch_in or session.punch_out or session.date


def sessions_in_range(
    start: datetime, end: datetime, sessions: Iterable[Session]
) -> list[Session]:
    return [s for s in sessions if start <= session_anchor(s) <= end]


def potential_minutes(start: datetime, end: datetime, schedule: WorkSchedule) -> int:
    """Expected minutes for every work day in the range."""
    return sum(
        schedule.shift_minutes
        for day in iter_local_days(start, end, schedule.timezone)
        if schedule.is_work_day(day)
    )


def aggregate(
    start: datetime,
    end: datetime,
    sessions: Iterable[Session],
    schedule: WorkSchedule,
) -> PayPeriodStats:
    """Compute period totals.

    Open sessions contribute their stored duration (0); live elapsed time is
    a presentation concern.
    """
    total = sum(s.duration_minutes for s in sessions_in_range(start, end, sessions))
    potential = potential_minutes(start, end, schedule)
    return PayPeriodStats(
        start_date=start,
        end_date=end,
        total_minutes=total,
        potential_minutes=potential,
        difference_minutes=total - potential,
    )


def group_by_day(
    start: datetime,
    end: datetime,
    sessions: Iterable[Session],
    tz: tzinfo,
) -> list[DayData]:
    """Bucket sessions by local day; days without sessions are included."""
    buckets: dict[date, list[Session]] = defaultdict(list)
    for session in sessions_in_range(start, end, sessions):
        buckets[session_anchor(session).astimezone(tz).date()].append(session)

    days = []
    for day in iter_local_days(start, end, tz):
        day_sessions = sorted(buckets.get(day, []), key=session_anchor)
        days.append(
            DayData(
                date=day,
                sessions=day_sessions,
                total_minutes=sum(s.duration_minutes for s in day_sessions),
            )
        )
    return days
