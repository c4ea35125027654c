"""Manual punch entry and correction endpoints."""

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Path, status

from punch_clock.api.dependencies import Store
from punch_clock.api.schemas import (
    DeleteResponse,
    ErrorResponse,
    PunchCreate,
    PunchEnvelope,
    PunchResponse,
    PunchUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/punches", tags=["punches"])

MANUAL_USER_ID = "MANUAL_USER"


@router.post("", response_model=PunchEnvelope, status_code=status.HTTP_201_CREATED)
async def create_punch(payload: PunchCreate, store: Store) -> PunchEnvelope:
    """Record a punch entered by hand."""
    punch = await store.insert_event(
        user_id=MANUAL_USER_ID,
        event_type=payload.event_type,
        timestamp=payload.timestamp,
        external_id=f"manual_{uuid4()}",
        raw_text=f"MANUAL_{payload.event_type.value}",
    )
    logger.info("Manual %s punch recorded (id=%s)", punch.event_type.value, punch.id)
    return PunchEnvelope(punch=PunchResponse.model_validate(punch))


@router.put(
    "/{punch_id}",
    response_model=PunchEnvelope,
    responses={404: {"model": ErrorResponse}},
)
async def update_punch(
    payload: PunchUpdate,
    store: Store,
    punch_id: Annotated[int, Path()],
) -> PunchEnvelope:
    """Move a punch to a corrected time."""
    punch = await store.update_event_by_id(punch_id, payload.timestamp)
    if punch is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Punch not found",
        )
    return PunchEnvelope(punch=PunchResponse.model_validate(punch))


@router.delete(
    "/{punch_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_punch(store: Store, punch_id: Annotated[int, Path()]) -> DeleteResponse:
    """Delete a punch."""
    punch = await store.delete_event_by_id(punch_id)
    if punch is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Punch not found",
        )
    return DeleteResponse(success=True)
