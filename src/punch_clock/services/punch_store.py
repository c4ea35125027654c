"""Storage for punch events.

All writes are keyed by ``external_id`` (the source message id) so that
re-delivered messages never create duplicate rows.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from punch_clock.calculators.types import EventType, PunchEvent
from punch_clock.models import PunchEventRecord

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class PunchEventStore:
    """Punch event persistence over an async SQLAlchemy session.

    The caller owns the transaction; methods only flush.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def fetch_events_in_range(self, start: datetime, end: datetime) -> list[PunchEvent]:
        """Events with ``start <= timestamp <= end``, oldest first."""
        result = await self._session.execute(
            select(PunchEventRecord)
            .where(PunchEventRecord.timestamp >= start)
            .where(PunchEventRecord.timestamp <= end)
            .order_by(PunchEventRecord.timestamp, PunchEventRecord.id)
        )
        return [record.to_domain() for record in result.scalars().all()]

    async def find_event_by_external_id(self, external_id: str) -> PunchEvent | None:
        record = await self._get_record(external_id)
        return record.to_domain() if record else None

    async def fetch_most_recent_event(self) -> PunchEvent | None:
        """Most recently stored event (highest id), for change detection."""
        result = await self._session.execute(
            select(PunchEventRecord).order_by(PunchEventRecord.id.desc()).limit(1)
        )
        record = result.scalars().first()
        return record.to_domain() if record else None

    async def insert_event(
        self,
        user_id: str,
        event_type: EventType,
        timestamp: datetime,
        external_id: str,
        raw_text: str,
    ) -> PunchEvent:
        """Insert a punch unless ``external_id`` is already stored.

        Returns the stored event in both cases.
        """
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Unsupported database dialect: {dialect}")

        stmt = (
            insert(PunchEventRecord)
            .values(
                user_id=user_id,
                event_type=EventType(event_type).value,
                timestamp=timestamp,
                external_id=external_id,
                raw_text=raw_text,
            )
            .on_conflict_do_nothing(index_elements=["external_id"])
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            logger.warning("Duplicate delivery ignored for external_id=%s", external_id)

        record = await self._get_record(external_id)
        if record is None:
            raise RuntimeError(f"Punch {external_id} missing after insert")
        return record.to_domain()

    async def update_event(
        self,
        external_id: str,
        *,
        event_type: EventType,
        raw_text: str,
        timestamp: datetime | None = None,
    ) -> PunchEvent | None:
        """Update a punch in place; returns None if it does not exist."""
        record = await self._get_record(external_id)
        if record is None:
            return None
        record.event_type = EventType(event_type).value
        record.raw_text = raw_text
        if timestamp is not None:
            record.timestamp = timestamp.astimezone(timezone.utc)
        await self._session.flush()
        return record.to_domain()

    async def delete_event(self, external_id: str) -> PunchEvent | None:
        """Delete a punch; returns the deleted event or None."""
        record = await self._get_record(external_id)
        return await self._delete(record)

    async def update_event_by_id(self, event_id: int, timestamp: datetime) -> PunchEvent | None:
        """Move a punch to a new time (manual correction)."""
        record = await self._session.get(PunchEventRecord, event_id)
        if record is None:
            return None
        record.timestamp = timestamp.astimezone(timezone.utc)
        await self._session.flush()
        return record.to_domain()

    async def delete_event_by_id(self, event_id: int) -> PunchEvent | None:
        record = await self._session.get(PunchEventRecord, event_id)
        return await self._delete(record)

    async def _get_record(self, external_id: str) -> PunchEventRecord | None:
        result = await self._session.execute(
            select(PunchEventRecord).where(PunchEventRecord.external_id == external_id)
        )
        return result.scalars().first()

    async def _delete(self, record: PunchEventRecord | None) -> PunchEvent | None:
        if record is None:
            return None
        event = record.to_domain()
        await self._session.delete(record)
        await self._session.flush()
        return event
