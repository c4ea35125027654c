"""Service health probe."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from punch_clock.api.dependencies import Store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    punch_store: str
    last_punch_id: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(store: Store) -> HealthResponse:
    """Report whether the punch table answers queries.

    A failing store degrades the service rather than failing the probe, so
    the payload says which part is down.
    """
    try:
        latest = await store.fetch_most_recent_event()
    except SQLAlchemyError:
        return HealthResponse(
            status="degraded",
            timestamp=datetime.now(timezone.utc),
            punch_store="unavailable",
        )

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        punch_store="available",
        last_punch_id=latest.id if latest else None,
    )
