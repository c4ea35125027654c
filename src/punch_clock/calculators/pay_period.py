"""Biweekly pay-period calendar.

Pay periods run from the 1st to the 14th and from the 15th to the last day of
each month. Day-of-month boundaries are evaluated in a reference timezone that
is always passed in explicitly; returned boundaries are absolute UTC instants.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone, tzinfo

from punch_clock.calculators.types import PayPeriod

FIRST_HALF_LAST_DAY = 14
SECOND_HALF_FIRST_DAY = 15

END_OF_DAY = time(23, 59, 59, 999000)


def _require_aware(instant: datetime) -> None:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError(f"Expected a timezone-aware datetime, got {instant!r}")


def _last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the first and last instant of a local calendar day, in UTC."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, END_OF_DAY, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def format_period_label(start_day: date, end_day: date) -> str:
    """Format a label such as "March 1-14, 2025"."""
    start_month = calendar.month_name[start_day.month]
    end_month = calendar.month_name[end_day.month]
    if start_day.month == end_day.month:
        return f"{start_month} {start_day.day}-{end_day.day}, {start_day.year}"
    return f"{start_month} {start_day.day} - {end_month} {end_day.day}, {start_day.year}"


def _build_period(first_day: date, last_day: date, tz: tzinfo) -> PayPeriod:
    start, _ = day_bounds(first_day, tz)
    _, end = day_bounds(last_day, tz)
    return PayPeriod(start=start, end=end, label=format_period_label(first_day, last_day))


def _first_half(year: int, month: int, tz: tzinfo) -> PayPeriod:
    return _build_period(
        date(year, month, 1),
        date(year, month, FIRST_HALF_LAST_DAY),
        tz,
    )


def _second_half(year: int, month: int, tz: tzinfo) -> PayPeriod:
    return _build_period(
        date(year, month, SECOND_HALF_FIRST_DAY),
        date(year, month, _last_day_of_month(year, month)),
        tz,
    )


def period_for_date(instant: datetime, tz: tzinfo) -> PayPeriod:
    """Get the pay period containing an instant."""
    _require_aware(instant)
    local = instant.astimezone(tz)
    if local.day <= FIRST_HALF_LAST_DAY:
        return _first_half(local.year, local.month, tz)
    return _second_half(local.year, local.month, tz)


def previous_period(period: PayPeriod, tz: tzinfo) -> PayPeriod:
    """Get the pay period immediately before ``period``."""
    local_start = period.start.astimezone(tz)
    if local_start.day == 1:
        year, month = _shift_month(local_start.year, local_start.month, -1)
        return _second_half(year, month, tz)
    return _first_half(local_start.year, local_start.month, tz)


def next_period(period: PayPeriod, tz: tzinfo) -> PayPeriod:
    """Get the pay period immediately after ``period``."""
    local_start = period.start.astimezone(tz)
    if local_start.day == 1:
        return _second_half(local_start.year, local_start.month, tz)
    year, month = _shift_month(local_start.year, local_start.month, 1)
    return _first_half(year, month, tz)


def is_current_period(period: PayPeriod, now: datetime | None = None) -> bool:
    """Check whether ``now`` falls inside the period (inclusive)."""
    if now is None:
        now = datetime.now(timezone.utc)
    _require_aware(now)
    return period.contains(now)
