"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from punch_clock.calculators.types import EventType


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str
    code: str | None = None


# ============================================================================
# Pay period schemas
# ============================================================================


class PayPeriodResponse(BaseModel):
    """A biweekly pay period."""

    model_config = ConfigDict(from_attributes=True)

    start: datetime
    end: datetime
    label: str
    is_current: bool = False


class PeriodCursor(BaseModel):
    """Start of the pay period to step from."""

    current_start: AwareDatetime


class PeriodDataRequest(BaseModel):
    """Range to summarize; widened to whole local days."""

    start: AwareDatetime
    end: AwareDatetime


class SessionResponse(BaseModel):
    """A reconciled work session."""

    model_config = ConfigDict(from_attributes=True)

    date: datetime
    punch_in: datetime | None = None
    punch_in_id: int | None = None
    punch_out: datetime | None = None
    punch_out_id: int | None = None
    duration_minutes: int
    notes: str | None = None


class DayResponse(BaseModel):
    """Sessions for one local day."""

    model_config = ConfigDict(from_attributes=True)

    date: date
    morning: SessionResponse | None = None
    afternoon: SessionResponse | None = None
    total_minutes: int
    sessions: list[SessionResponse]


class PeriodStatsResponse(BaseModel):
    """Worked vs potential time for a range."""

    total_hours: float
    potential_hours: float
    difference: float
    total_minutes: int
    potential_minutes: int
    difference_minutes: int


class PeriodDataResponse(BaseModel):
    """Totals and per-day breakdown for a range."""

    start: datetime
    end: datetime
    stats: PeriodStatsResponse
    days: list[DayResponse]


# ============================================================================
# Punch schemas
# ============================================================================


class PunchCreate(BaseModel):
    """Manual punch entry."""

    event_type: EventType = Field(alias="eventType")
    timestamp: AwareDatetime

    model_config = ConfigDict(populate_by_name=True)


class PunchUpdate(BaseModel):
    """Move a punch to a new time."""

    timestamp: AwareDatetime


class PunchResponse(BaseModel):
    """A stored punch event."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    event_type: EventType
    timestamp: datetime
    external_id: str
    raw_text: str


class PunchEnvelope(BaseModel):
    punch: PunchResponse


class DeleteResponse(BaseModel):
    success: bool


class StatusResponse(BaseModel):
    """Change-detection status for polling clients."""

    last_punch_id: int
    timestamp: int  # milliseconds since epoch


# ============================================================================
# Slack schemas
# ============================================================================


class SlackEnvelope(BaseModel):
    """Outer Slack Events API payload."""

    model_config = ConfigDict(extra="allow")

    type: str
    challenge: str | None = None
    event: dict[str, Any] | None = None
