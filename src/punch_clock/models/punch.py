"""Punch event model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from punch_clock.calculators.types import EventType, PunchEvent
from punch_clock.models.base import Base, TimestampMixin


class PunchEventRecord(Base, TimestampMixin):
    """A stored IN/OUT punch, unique per external (source message) id."""

    __tablename__ = "punch_event"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    event_type: Mapped[str] = mapped_column(String, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(nullable=False)
    external_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    raw_text: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "event_type IN ('IN', 'OUT')",
            name="punch_event_type_check",
        ),
        Index("idx_punch_event_timestamp", "timestamp"),
    )

    def to_domain(self) -> PunchEvent:
        """Convert to the immutable value used by the calculators."""
        return PunchEvent(
            id=self.id,
            user_id=self.user_id,
            event_type=EventType(self.event_type),
            timestamp=self.timestamp,
            external_id=self.external_id,
            raw_text=self.raw_text,
        )
