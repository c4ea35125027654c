"""Punch reconciliation and pay-period calculations."""

from punch_clock.calculators.aggregator import aggregate, group_by_day, potential_minutes
from punch_clock.calculators.pay_period import (
    day_bounds,
    is_current_period,
    next_period,
    period_for_date,
    previous_period,
)
from punch_clock.calculators.reconciler import reconcile
from punch_clock.calculators.types import (
    MONDAY_TO_FRIDAY,
    TUESDAY_TO_SATURDAY,
    DayData,
    EventType,
    InvalidSessionError,
    PayPeriod,
    PayPeriodStats,
    PunchEvent,
    Session,
    WorkSchedule,
)

__all__ = [
    "aggregate",
    "group_by_day",
    "potential_minutes",
    "day_bounds",
    "is_current_period",
    "next_period",
    "period_for_date",
    "previous_period",
    "reconcile",
    "MONDAY_TO_FRIDAY",
    "TUESDAY_TO_SATURDAY",
    "DayData",
    "EventType",
    "InvalidSessionError",
    "PayPeriod",
    "PayPeriodStats",
    "PunchEvent",
    "Session",
    "WorkSchedule",
]
