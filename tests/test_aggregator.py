"""Tests for period aggregation and day grouping."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from punch_clock.calculators.aggregator import (
    aggregate,
    group_by_day,
    iter_local_days,
    potential_minutes,
)
from punch_clock.calculators.pay_period import period_for_date
from punch_clock.calculators.reconciler import reconcile
from punch_clock.calculators.types import (
    MONDAY_TO_FRIDAY,
    TUESDAY_TO_SATURDAY,
    Session,
    WorkSchedule,
)

VANCOUVER = ZoneInfo("America/Vancouver")


def local(*args: int) -> datetime:
    return datetime(*args, tzinfo=VANCOUVER)


def whole_days(first: datetime, last: datetime) -> tuple[datetime, datetime]:
    return first, last + timedelta(hours=23, minutes=59, seconds=59, microseconds=999000)


class TestPotentialMinutes:
    def test_one_work_week(self, schedule):
        """Mon 2025-03-03 to Sun 2025-03-09: five work days."""
        start, end = whole_days(local(2025, 3, 3), local(2025, 3, 9))

        assert potential_minutes(start, end, schedule) == 2400

    def test_full_pay_period(self, schedule):
        period = period_for_date(local(2025, 3, 5), VANCOUVER)

        assert potential_minutes(period.start, period.end, schedule) == 10 * 480

    def test_work_week_is_configurable(self):
        """Sunday 2025-03-02 to Monday 2025-03-03 counts differently per work week."""
        start, end = whole_days(local(2025, 3, 2), local(2025, 3, 3))
        mon_fri = WorkSchedule(VANCOUVER, MONDAY_TO_FRIDAY)
        tue_sat = WorkSchedule(VANCOUVER, TUESDAY_TO_SATURDAY)

        assert potential_minutes(start, end, mon_fri) == 480
        assert potential_minutes(start, end, tue_sat) == 0

    def test_single_day(self, schedule):
        start, end = whole_days(local(2025, 3, 4), local(2025, 3, 4))

        assert potential_minutes(start, end, schedule) == 480

    def test_days_counted_in_reference_timezone(self, schedule):
        """Friday evening in Vancouver is already Saturday in UTC."""
        start = local(2025, 3, 7, 20)

        assert list(iter_local_days(start, start, VANCOUVER)) == [start.date()]
        assert potential_minutes(start, start, schedule) == 480


class TestAggregate:
    def test_totals_and_difference(self, schedule, make_punch):
        events = [
            make_punch("IN", local(2025, 3, 3, 9)),
            make_punch("OUT", local(2025, 3, 3, 17)),
            make_punch("IN", local(2025, 3, 4, 9)),
            make_punch("OUT", local(2025, 3, 4, 13)),
            make_punch("IN", local(2025, 3, 5, 9)),
        ]
        start, end = whole_days(local(2025, 3, 3), local(2025, 3, 9))

        stats = aggregate(start, end, reconcile(events), schedule)

        assert stats.total_minutes == 480 + 240
        assert stats.potential_minutes == 2400
        assert stats.difference_minutes == 720 - 2400
        assert stats.total_hours == 12
        assert stats.difference_hours == -28

    def test_sessions_outside_range_ignored(self, schedule, make_punch):
        events = [
            make_punch("IN", local(2025, 3, 2, 9)),
            make_punch("OUT", local(2025, 3, 2, 10)),
            make_punch("IN", local(2025, 3, 3, 9)),
            make_punch("OUT", local(2025, 3, 3, 10)),
        ]
        start, end = whole_days(local(2025, 3, 3), local(2025, 3, 3))

        assert aggregate(start, end, reconcile(events), schedule).total_minutes == 60

    def test_open_session_contributes_zero(self, schedule, make_punch):
        start, end = whole_days(local(2025, 3, 3), local(2025, 3, 3))
        sessions = reconcile([make_punch("IN", local(2025, 3, 3, 9))])

        assert aggregate(start, end, sessions, schedule).total_minutes == 0


class TestGroupByDay:
    def test_every_day_present(self, make_punch):
        start, end = whole_days(local(2025, 3, 1), local(2025, 3, 14))
        sessions = reconcile([
            make_punch("IN", local(2025, 3, 4, 9)),
            make_punch("OUT", local(2025, 3, 4, 17)),
        ])

        days = group_by_day(start, end, sessions, VANCOUVER)

        assert len(days) == 14
        assert days[0].date == local(2025, 3, 1).date()
        assert days[-1].date == local(2025, 3, 14).date()
        assert [d.total_minutes for d in days if d.sessions] == [480]
        empty = days[0]
        assert empty.sessions == []
        assert empty.total_minutes == 0
        assert empty.morning is None

    def test_bucketed_by_local_day(self, make_punch):
        """An evening session is kept on its local day, not the UTC day."""
        start, end = whole_days(local(2025, 3, 4), local(2025, 3, 5))
        sessions = reconcile([
            make_punch("IN", local(2025, 3, 4, 18)),
            make_punch("OUT", local(2025, 3, 4, 22)),
        ])

        days = group_by_day(start, end, sessions, VANCOUVER)

        assert days[0].total_minutes == 240
        assert days[1].sessions == []

    def test_more_than_two_sessions(self, make_punch):
        start, end = whole_days(local(2025, 3, 4), local(2025, 3, 4))
        events = []
        for hour in (8, 11, 14):
            events.append(make_punch("IN", local(2025, 3, 4, hour)))
            events.append(make_punch("OUT", local(2025, 3, 4, hour + 2)))

        (day,) = group_by_day(start, end, reconcile(events), VANCOUVER)

        assert len(day.sessions) == 3
        assert day.morning.punch_in == local(2025, 3, 4, 8)
        assert day.afternoon.punch_in == local(2025, 3, 4, 11)
        assert day.total_minutes == 360

    def test_sorted_by_punch_in(self):
        start, end = whole_days(local(2025, 3, 4), local(2025, 3, 4))

        def session(hour: int) -> Session:
            punch = local(2025, 3, 4, hour).astimezone(timezone.utc)
            return Session(punch, punch, hour, None, None, 0, None)

        (day,) = group_by_day(start, end, [session(15), session(9)], VANCOUVER)

        assert [s.punch_in_id for s in day.sessions] == [9, 15]

    def test_falls_back_to_punch_out(self):
        start, end = whole_days(local(2025, 3, 4), local(2025, 3, 4))
        out = local(2025, 3, 4, 17).astimezone(timezone.utc)
        orphan = Session(date=out, punch_in=None, punch_in_id=None, punch_out=out, punch_out_id=7)

        (day,) = group_by_day(start, end, [orphan], VANCOUVER)

        assert day.sessions == [orphan]

    def test_round_trip_with_aggregate(self, schedule, make_punch):
        start, end = whole_days(local(2025, 3, 1), local(2025, 3, 14))
        events = []
        for day in range(1, 15):
            events.append(make_punch("IN", local(2025, 3, day, 8, day)))
            events.append(make_punch("OUT", local(2025, 3, day, 12, 3 * day)))
            events.append(make_punch("IN", local(2025, 3, day, 13)))
            if day % 3:
                events.append(make_punch("OUT", local(2025, 3, day, 16, 45)))
        sessions = reconcile(events)

        days = group_by_day(start, end, sessions, VANCOUVER)
        flattened = [s for d in days for s in d.sessions]

        assert sum(s.duration_minutes for s in flattened) == (
            aggregate(start, end, sessions, schedule).total_minutes
        )
        assert sum(d.total_minutes for d in days) == sum(s.duration_minutes for s in sessions)
