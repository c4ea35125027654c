"""API routes."""

from punch_clock.api.routes.health import router as health_router
from punch_clock.api.routes.pay_periods import router as pay_periods_router
from punch_clock.api.routes.punches import router as punches_router
from punch_clock.api.routes.slack import router as slack_router
from punch_clock.api.routes.status import router as status_router

__all__ = [
    "health_router",
    "pay_periods_router",
    "punches_router",
    "slack_router",
    "status_router",
]
