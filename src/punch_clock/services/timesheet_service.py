"""Timesheet summaries for a date range."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from punch_clock.calculators import aggregate, day_bounds, group_by_day, reconcile
from punch_clock.calculators.reconciler import DUPLICATE_IN_WINDOW
from punch_clock.calculators.types import DayData, PayPeriodStats, Session, WorkSchedule
from punch_clock.services.punch_store import PunchEventStore


@dataclass
class TimesheetSummary:
    """Sessions, per-day breakdown and totals for a range."""

    start: datetime
    end: datetime
    stats: PayPeriodStats
    days: list[DayData]
    sessions: list[Session]


class TimesheetService:
    """Fetches punches for a range and reconciles them into a summary.

    Nothing is cached: every call recomputes from the stored events.
    """

    def __init__(
        self,
        store: PunchEventStore,
        schedule: WorkSchedule,
        duplicate_window: timedelta = DUPLICATE_IN_WINDOW,
    ) -> None:
        self._store = store
        self._schedule = schedule
        self._duplicate_window = duplicate_window

    def full_day_range(self, start: datetime, end: datetime) -> tuple[datetime, datetime]:
        """Widen a range to whole local days."""
        tz = self._schedule.timezone
        range_start, _ = day_bounds(start.astimezone(tz).date(), tz)
        _, range_end = day_bounds(end.astimezone(tz).date(), tz)
        return range_start, range_end

    async def sessions_between(self, start: datetime, end: datetime) -> list[Session]:
        events = await self._store.fetch_events_in_range(start, end)
        return reconcile(events, self._duplicate_window)

    async def summarize(self, start: datetime, end: datetime) -> TimesheetSummary:
        if end < start:
            raise ValueError("Range end precedes range start")
        range_start, range_end = self.full_day_range(start, end)
        sessions = await self.sessions_between(range_start, range_end)
        return TimesheetSummary(
            start=range_start,
            end=range_end,
            stats=aggregate(range_start, range_end, sessions, self._schedule),
            days=group_by_day(range_start, range_end, sessions, self._schedule.timezone),
            sessions=sessions,
        )
