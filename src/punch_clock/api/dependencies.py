"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from punch_clock.config import Settings, get_settings
from punch_clock.database import get_session
from punch_clock.services import (
    EditReconciliationService,
    PunchEventStore,
    SlackEventHandler,
    TimesheetService,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency, committed when the request succeeds."""
    async with get_session() as session:
        yield session


def get_app_settings() -> Settings:
    return get_settings()


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_punch_store(db: DbSession) -> PunchEventStore:
    return PunchEventStore(db)


Store = Annotated[PunchEventStore, Depends(get_punch_store)]


def get_timesheet_service(store: Store, settings: AppSettings) -> TimesheetService:
    return TimesheetService(
        store,
        settings.schedule,
        duplicate_window=timedelta(minutes=settings.duplicate_in_window_minutes),
    )


def get_slack_handler(store: Store, settings: AppSettings) -> SlackEventHandler:
    return SlackEventHandler(
        store,
        EditReconciliationService(store),
        punch_channel=settings.slack_punch_channel,
    )


Timesheets = Annotated[TimesheetService, Depends(get_timesheet_service)]
SlackHandler = Annotated[SlackEventHandler, Depends(get_slack_handler)]
