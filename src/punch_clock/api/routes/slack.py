"""Slack Events API webhook."""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from punch_clock.api.dependencies import AppSettings, SlackHandler
from punch_clock.api.schemas import SlackEnvelope
from punch_clock.services.slack_events import (
    SignatureVerificationError,
    verify_slack_signature,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slack", tags=["slack"])


@router.post("/events")
async def slack_events(
    request: Request,
    settings: AppSettings,
    handler: SlackHandler,
) -> JSONResponse:
    """Receive message events from the punch channel."""
    body = await request.body()
    try:
        envelope = SlackEnvelope.model_validate_json(body)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payload")

    # url_verification handshakes are answered before signature checks
    if envelope.type == "url_verification":
        return JSONResponse({"challenge": envelope.challenge})

    if settings.slack_signing_secret:
        try:
            verify_slack_signature(
                settings.slack_signing_secret,
                request.headers.get("x-slack-request-timestamp"),
                request.headers.get("x-slack-signature"),
                body,
            )
        except SignatureVerificationError as e:
            logger.warning("Rejected Slack request: %s", e)
            return JSONResponse(
                {"error": "Invalid signature"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

    try:
        result = await handler.handle(envelope.event)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return JSONResponse(result.to_dict())
