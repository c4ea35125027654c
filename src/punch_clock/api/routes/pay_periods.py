"""Pay period navigation and summary endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status

from punch_clock.api.dependencies import AppSettings, Timesheets
from punch_clock.api.schemas import (
    DayResponse,
    ErrorResponse,
    PayPeriodResponse,
    PeriodCursor,
    PeriodDataRequest,
    PeriodDataResponse,
    PeriodStatsResponse,
)
from punch_clock.calculators import (
    is_current_period,
    next_period,
    period_for_date,
    previous_period,
)
from punch_clock.calculators.types import PayPeriod

router = APIRouter(prefix="/pay-periods", tags=["pay-periods"])


def _to_response(period: PayPeriod) -> PayPeriodResponse:
    return PayPeriodResponse(
        start=period.start,
        end=period.end,
        label=period.label,
        is_current=is_current_period(period),
    )


@router.get("/current", response_model=PayPeriodResponse)
async def current_pay_period(settings: AppSettings) -> PayPeriodResponse:
    """Pay period containing now."""
    period = period_for_date(datetime.now(timezone.utc), settings.tzinfo)
    return _to_response(period)


@router.post("/previous", response_model=PayPeriodResponse)
async def previous_pay_period(
    payload: PeriodCursor, settings: AppSettings
) -> PayPeriodResponse:
    """Pay period before the one starting at ``current_start``."""
    tz = settings.tzinfo
    return _to_response(previous_period(period_for_date(payload.current_start, tz), tz))


@router.post("/next", response_model=PayPeriodResponse)
async def next_pay_period(payload: PeriodCursor, settings: AppSettings) -> PayPeriodResponse:
    """Pay period after the one starting at ``current_start``."""
    tz = settings.tzinfo
    return _to_response(next_period(period_for_date(payload.current_start, tz), tz))


@router.post(
    "/data",
    response_model=PeriodDataResponse,
    responses={400: {"model": ErrorResponse}},
)
async def pay_period_data(
    payload: PeriodDataRequest, timesheets: Timesheets
) -> PeriodDataResponse:
    """Totals and per-day sessions for a range."""
    try:
        summary = await timesheets.summarize(payload.start, payload.end)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    stats = summary.stats
    return PeriodDataResponse(
        start=summary.start,
        end=summary.end,
        stats=PeriodStatsResponse(
            total_hours=stats.total_hours,
            potential_hours=stats.potential_hours,
            difference=stats.difference_hours,
            total_minutes=stats.total_minutes,
            potential_minutes=stats.potential_minutes,
            difference_minutes=stats.difference_minutes,
        ),
        days=[DayResponse.model_validate(day) for day in summary.days],
    )
