"""Punch clock services."""

from punch_clock.services.edit_reconciliation import (
    EditOutcome,
    EditReconciliationService,
    Found,
    NotFound,
)
from punch_clock.services.punch_store import PunchEventStore
from punch_clock.services.slack_events import (
    SignatureVerificationError,
    SlackEventHandler,
    verify_slack_signature,
)
from punch_clock.services.timesheet_service import TimesheetService, TimesheetSummary

__all__ = [
    "EditOutcome",
    "EditReconciliationService",
    "Found",
    "NotFound",
    "PunchEventStore",
    "SignatureVerificationError",
    "SlackEventHandler",
    "verify_slack_signature",
    "TimesheetService",
    "TimesheetSummary",
]
