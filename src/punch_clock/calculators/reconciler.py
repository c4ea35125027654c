"""Punch reconciler: turns raw IN/OUT events into work sessions.

Pairing rules, applied to events sorted by timestamp:

- IN with no pending IN becomes the pending IN.
- IN less than ``duplicate_window`` after the pending IN is noise and is dropped.
- Any later IN flushes the pending IN as a "Missing OUT punch" session.
- OUT closes the pending IN; an OUT with nothing pending is dropped.
- A pending IN left at the end becomes an "Open session".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from functools import reduce

from punch_clock.calculators.types import (
    MISSING_OUT_NOTE,
    OPEN_SESSION_NOTE,
    EventType,
    PunchEvent,
    Session,
)

logger = logging.getLogger(__name__)

DUPLICATE_IN_WINDOW = timedelta(minutes=5)


@dataclass(frozen=True)
class _Fold:
    pending: PunchEvent | None
    sessions: tuple[Session, ...]


def elapsed_minutes(punch_in: PunchEvent, punch_out: PunchEvent) -> int:
    """Whole minutes between two punches, rounded down."""
    return int((punch_out.timestamp - punch_in.timestamp).total_seconds() // 60)


def _unpaired(punch_in: PunchEvent, notes: str) -> Session:
    return Session(
        date=punch_in.timestamp,
        punch_in=punch_in.timestamp,
        punch_in_id=punch_in.id,
        punch_out=None,
        punch_out_id=None,
        duration_minutes=0,
        notes=notes,
    )


def _paired(punch_in: PunchEvent, punch_out: PunchEvent) -> Session:
    return Session(
        date=punch_in.timestamp,
        punch_in=punch_in.timestamp,
        punch_in_id=punch_in.id,
        punch_out=punch_out.timestamp,
        punch_out_id=punch_out.id,
        duration_minutes=elapsed_minutes(punch_in, punch_out),
        notes=None,
    )


def _step(window: timedelta):
    def step(state: _Fold, event: PunchEvent) -> _Fold:
        pending = state.pending

        if event.event_type == EventType.IN:
            if pending is None:
                return _Fold(event, state.sessions)
            if event.timestamp - pending.timestamp < window:
                logger.debug(
                    "Ignoring duplicate IN %s within %s of IN %s",
                    event.external_id, window, pending.external_id,
                )
                return state
            return _Fold(event, state.sessions + (_unpaired(pending, MISSING_OUT_NOTE),))

        if pending is None:
            logger.debug("Dropping orphaned OUT %s", event.external_id)
            return state
        return _Fold(None, state.sessions + (_paired(pending, event),))

    return step


def reconcile(
    events: Iterable[PunchEvent],
    duplicate_window: timedelta = DUPLICATE_IN_WINDOW,
) -> list[Session]:
    """Reconcile punch events into chronologically ordered sessions.

    Events may arrive in any order. Ties on timestamp keep their input order.
    Never raises for a list of well-formed events.
    """
    ordered = sorted(events, key=lambda e: e.timestamp)
    final = reduce(_step(duplicate_window), ordered, _Fold(None, ()))

    sessions = list(final.sessions)
    if final.pending is not None:
        sessions.append(_unpaired(final.pending, OPEN_SESSION_NOTE))
    return sessions
