"""SQLAlchemy ORM models."""

from punch_clock.models.base import Base, TimestampMixin, UTCDateTime
from punch_clock.models.punch import PunchEventRecord

__all__ = [
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "PunchEventRecord",
]
