"""Parse chat messages into punch semantics."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from punch_clock.calculators.types import EventType


def normalize_punch_text(text: str) -> str:
    return text.strip().upper()


def classify_punch_text(text: str | None) -> EventType | None:
    """Return the punch a message reads as, or None.

    A message punches IN or OUT when its trimmed, upper-cased text starts
    with that keyword.
    """
    if not text:
        return None
    normalized = normalize_punch_text(text)
    if normalized.startswith(EventType.OUT.value):
        return EventType.OUT
    if normalized.startswith(EventType.IN.value):
        return EventType.IN
    return None


def parse_slack_timestamp(ts: str) -> datetime:
    """Convert a Slack message ts ("1612345678.000200") to an aware UTC datetime."""
    try:
        seconds = Decimal(ts)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid Slack timestamp: {ts!r}") from e
    if not seconds.is_finite() or seconds < 0:
        raise ValueError(f"Invalid Slack timestamp: {ts!r}")
    try:
        return datetime.fromtimestamp(float(seconds), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"Slack timestamp out of range: {ts!r}") from e
