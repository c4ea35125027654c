"""Pytest fixtures for punch clock tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timezone
from itertools import count
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from punch_clock.calculators.types import (
    MONDAY_TO_FRIDAY,
    EventType,
    PunchEvent,
    WorkSchedule,
)
from punch_clock.config import Settings
from punch_clock.models import Base
from punch_clock.services.punch_store import PunchEventStore

# In-memory SQLite shared across connections of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

VANCOUVER = ZoneInfo("America/Vancouver")


@pytest.fixture
def tz() -> ZoneInfo:
    return VANCOUVER


@pytest.fixture
def schedule(tz: ZoneInfo) -> WorkSchedule:
    return WorkSchedule(timezone=tz, work_days=MONDAY_TO_FRIDAY, shift_minutes=480)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the process environment."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        timezone="America/Vancouver",
        work_days=MONDAY_TO_FRIDAY,
        shift_minutes=480,
        duplicate_in_window_minutes=5,
        slack_signing_secret="",
        slack_punch_channel="",
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
    )


@pytest.fixture
def make_punch() -> Callable[..., PunchEvent]:
    """Build in-memory punch events with increasing ids."""
    ids = count(1)

    def _make(event_type: str | EventType, timestamp: datetime, external_id: str | None = None) -> PunchEvent:
        event_id = next(ids)
        event_type = EventType(event_type)
        return PunchEvent(
            id=event_id,
            user_id="U123",
            event_type=event_type,
            timestamp=timestamp.astimezone(timezone.utc),
            external_id=external_id or f"msg-{event_id}",
            raw_text=event_type.value,
        )

    return _make


@pytest_asyncio.fixture
async def engine():
    """Create test database engine with fresh tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store(session: AsyncSession) -> PunchEventStore:
    return PunchEventStore(session)
