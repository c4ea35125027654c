"""Change-detection status for polling clients."""

import time

from fastapi import APIRouter

from punch_clock.api.dependencies import Store
from punch_clock.api.schemas import StatusResponse

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(store: Store) -> StatusResponse:
    """Id of the latest punch; clients refresh when it changes."""
    last = await store.fetch_most_recent_event()
    return StatusResponse(
        last_punch_id=last.id if last else 0,
        timestamp=int(time.time() * 1000),
    )
