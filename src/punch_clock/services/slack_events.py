"""Slack Events API handling for the punch channel."""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass
from typing import Any

from punch_clock.calculators.types import EventType
from punch_clock.services.edit_reconciliation import EditReconciliationService
from punch_clock.services.message_parser import (
    classify_punch_text,
    normalize_punch_text,
    parse_slack_timestamp,
)
from punch_clock.services.punch_store import PunchEventStore

logger = logging.getLogger(__name__)

SIGNATURE_VERSION = "v0"
MAX_REQUEST_AGE_SECONDS = 60 * 5


class SignatureVerificationError(Exception):
    """Raised when a Slack request signature is missing, stale or wrong."""


def compute_slack_signature(secret: str, timestamp: str, body: bytes | str) -> str:
    if isinstance(body, str):
        body = body.encode()
    basestring = f"{SIGNATURE_VERSION}:{timestamp}:".encode() + body
    digest = hmac.new(secret.encode(), basestring, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def verify_slack_signature(
    secret: str,
    timestamp: str | None,
    signature: str | None,
    body: bytes | str,
    now: float | None = None,
) -> None:
    """Verify the X-Slack-Signature header of a request.

    Raises SignatureVerificationError on failure.
    """
    if not timestamp or not signature:
        raise SignatureVerificationError("Missing Slack signature headers")
    try:
        sent_at = int(timestamp)
    except ValueError as e:
        raise SignatureVerificationError("Malformed Slack request timestamp") from e

    current = time.time() if now is None else now
    if abs(current - sent_at) > MAX_REQUEST_AGE_SECONDS:
        raise SignatureVerificationError("Slack request too old")

    expected = compute_slack_signature(secret, timestamp, body)
    if not hmac.compare_digest(expected, signature):
        raise SignatureVerificationError("Slack signature mismatch")


@dataclass(frozen=True)
class SlackEventResult:
    """Outcome of handling one Slack event callback."""

    status: str
    event_type: EventType | None = None

    def to_dict(self) -> dict[str, str]:
        body = {"status": self.status}
        if self.event_type is not None:
            body["type"] = self.event_type.value
        return body


def _external_id(message: dict[str, Any], fallback_ts: str | None = None) -> str | None:
    return message.get("client_msg_id") or message.get("ts") or fallback_ts


class SlackEventHandler:
    """Turns Slack message events into stored punches."""

    def __init__(
        self,
        store: PunchEventStore,
        edits: EditReconciliationService,
        punch_channel: str = "",
    ) -> None:
        self._store = store
        self._edits = edits
        self._punch_channel = punch_channel

    async def handle(self, event: dict[str, Any] | None) -> SlackEventResult:
        if not event:
            return SlackEventResult("no_event")
        if event.get("type") != "message":
            return SlackEventResult("ignored")
        if self._punch_channel and event.get("channel") != self._punch_channel:
            return SlackEventResult("wrong_channel")

        subtype = event.get("subtype")
        if subtype is None:
            return await self._handle_new_message(event)
        if subtype == "message_changed":
            return await self._handle_changed_message(event)
        if subtype == "message_deleted":
            return await self._handle_deleted_message(event)
        return SlackEventResult("ignored")

    async def _handle_new_message(self, event: dict[str, Any]) -> SlackEventResult:
        text = event.get("text") or ""
        event_type = classify_punch_text(text)
        if event_type is None:
            return SlackEventResult("no_action")

        external_id = _external_id(event)
        if external_id is None:
            raise ValueError("Slack message has neither client_msg_id nor ts")

        punch = await self._store.insert_event(
            user_id=event.get("user") or "",
            event_type=event_type,
            timestamp=parse_slack_timestamp(event["ts"]),
            external_id=external_id,
            raw_text=normalize_punch_text(text),
        )
        logger.info("Recorded %s punch %s (id=%s)", event_type.value, external_id, punch.id)
        return SlackEventResult("recorded", event_type)

    async def _handle_changed_message(self, event: dict[str, Any]) -> SlackEventResult:
        message = event.get("message") or {}
        previous = event.get("previous_message") or {}
        external_id = _external_id(message) or _external_id(previous)
        ts = message.get("ts") or previous.get("ts")
        if external_id is None or ts is None:
            return SlackEventResult("ignored")

        outcome = await self._edits.apply_edit(
            external_id=external_id,
            text=message.get("text") or "",
            original_timestamp=parse_slack_timestamp(ts),
            user_id=message.get("user") or previous.get("user") or "",
        )
        return SlackEventResult(outcome.value, classify_punch_text(message.get("text")))

    async def _handle_deleted_message(self, event: dict[str, Any]) -> SlackEventResult:
        previous = event.get("previous_message") or {}
        external_id = _external_id(previous, event.get("deleted_ts"))
        if external_id is None:
            return SlackEventResult("ignored")
        outcome = await self._edits.apply_delete(external_id)
        return SlackEventResult(outcome.value)
