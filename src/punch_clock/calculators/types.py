"""Type definitions for the punch reconciliation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from zoneinfo import ZoneInfo


class EventType(str, Enum):
    """Punch event types."""

    IN = "IN"
    OUT = "OUT"


# Session annotations surfaced to the user for manual correction
MISSING_OUT_NOTE = "Missing OUT punch"
OPEN_SESSION_NOTE = "Open session"

# Weekday numbers follow date.weekday(): Monday=0 ... Sunday=6
WEEKDAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
MONDAY_TO_FRIDAY = frozenset({0, 1, 2, 3, 4})
TUESDAY_TO_SATURDAY = frozenset({1, 2, 3, 4, 5})

DEFAULT_SHIFT_MINUTES = 8 * 60


class InvalidSessionError(ValueError):
    """Raised when a session would violate its duration invariant."""


def parse_work_days(value: str) -> frozenset[int]:
    """Parse a comma-separated list of weekday names ("mon,tue,...")."""
    days = set()
    for token in value.split(","):
        name = token.strip().lower()[:3]
        if not name:
            continue
        if name not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown weekday: {token.strip()!r}")
        days.add(WEEKDAY_NAMES.index(name))
    return frozenset(days)


@dataclass(frozen=True)
class PunchEvent:
    """A single stored clock action."""

    id: int
    user_id: str
    event_type: EventType
    timestamp: datetime  # Aware, UTC-normalized
    external_id: str
    raw_text: str


@dataclass(frozen=True)
class Session:
    """A reconciled IN/OUT pair, or an unpaired remainder."""

    date: datetime
    punch_in: datetime | None
    punch_in_id: int | None
    punch_out: datetime | None
    punch_out_id: int | None
    duration_minutes: int = 0
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.duration_minutes < 0:
            raise InvalidSessionError(
                f"Negative duration ({self.duration_minutes} min) for session at {self.date}"
            )
        if self.punch_in is not None and self.punch_out is not None:
            if self.punch_out < self.punch_in:
                raise InvalidSessionError(
                    f"OUT punch {self.punch_out} precedes IN punch {self.punch_in}"
                )

    @property
    def is_closed(self) -> bool:
        return self.punch_in is not None and self.punch_out is not None


@dataclass(frozen=True)
class PayPeriod:
    """Biweekly pay period; start and end are inclusive UTC instants."""

    start: datetime
    end: datetime
    label: str

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


@dataclass(frozen=True)
class WorkSchedule:
    """Work week and shift length evaluated in a reference timezone."""

    timezone: ZoneInfo
    work_days: frozenset[int] = MONDAY_TO_FRIDAY
    shift_minutes: int = DEFAULT_SHIFT_MINUTES

    def is_work_day(self, day: date) -> bool:
        return day.weekday() in self.work_days


@dataclass
class DayData:
    """Sessions for one local calendar day."""

    date: date
    sessions: list[Session] = field(default_factory=list)
    total_minutes: int = 0

    # Legacy two-slot display: first session is "morning", second "afternoon"
    @property
    def morning(self) -> Session | None:
        return self.sessions[0] if self.sessions else None

    @property
    def afternoon(self) -> Session | None:
        return self.sessions[1] if len(self.sessions) > 1 else None


@dataclass(frozen=True)
class PayPeriodStats:
    """Worked vs expected minutes for a date range."""

    start_date: datetime
    end_date: datetime
    total_minutes: int
    potential_minutes: int
    difference_minutes: int

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60

    @property
    def potential_hours(self) -> float:
        return self.potential_minutes / 60

    @property
    def difference_hours(self) -> float:
        return self.difference_minutes / 60
