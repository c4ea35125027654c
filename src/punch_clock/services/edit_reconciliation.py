"""Propagate edited and deleted source messages into stored punches.

Punches are keyed by the source message's external id. An edit that still
reads as a punch updates (or creates) the stored event; an edit that no longer
reads as a punch, or a deletion, removes it. Replaying a notification
converges to the same stored state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from punch_clock.calculators.types import PunchEvent
from punch_clock.services.message_parser import classify_punch_text, normalize_punch_text
from punch_clock.services.punch_store import PunchEventStore

logger = logging.getLogger(__name__)


class EditOutcome(str, Enum):
    """What an edit or delete notification did to storage."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Found:
    event: PunchEvent


@dataclass(frozen=True)
class NotFound:
    external_id: str


PunchLookup = Found | NotFound


class EditReconciliationService:
    """Applies source-message edits and deletions to the punch store."""

    def __init__(self, store: PunchEventStore) -> None:
        self._store = store

    async def lookup(self, external_id: str) -> PunchLookup:
        event = await self._store.find_event_by_external_id(external_id)
        if event is None:
            return NotFound(external_id)
        return Found(event)

    async def apply_edit(
        self,
        external_id: str,
        text: str,
        original_timestamp: datetime,
        user_id: str,
    ) -> EditOutcome:
        """Apply an edited message.

        The stored timestamp is the original message time, not the edit time.
        """
        event_type = classify_punch_text(text)
        if event_type is None:
            return await self.apply_delete(external_id)

        raw_text = normalize_punch_text(text)
        lookup = await self.lookup(external_id)

        if isinstance(lookup, Found):
            await self._store.update_event(
                external_id,
                event_type=event_type,
                raw_text=raw_text,
                timestamp=original_timestamp,
            )
            logger.info(
                "Updated punch %s: %s -> %s",
                external_id, lookup.event.event_type.value, event_type.value,
            )
            return EditOutcome.UPDATED

        await self._store.insert_event(
            user_id=user_id,
            event_type=event_type,
            timestamp=original_timestamp,
            external_id=external_id,
            raw_text=raw_text,
        )
        logger.info("Edit introduced %s punch %s", event_type.value, external_id)
        return EditOutcome.CREATED

    async def apply_delete(self, external_id: str) -> EditOutcome:
        """Remove the punch for a deleted (or de-punched) message, if any."""
        deleted = await self._store.delete_event(external_id)
        if deleted is None:
            return EditOutcome.UNCHANGED
        logger.info("Deleted %s punch %s", deleted.event_type.value, external_id)
        return EditOutcome.DELETED
