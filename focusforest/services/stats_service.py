from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.config import settings
from focusforest.schemas.stats import (
    Period,
    PeriodStats,
    RecordsResponse,
    StatsOverview,
)
from focusforest.services import session_service, state_service
from focusforest.services.analytics import AnalyticsCalculator


def current_time() -> datetime:
    return datetime.now(settings.tzinfo)


async def build_calculator(
    db: AsyncSession, clock: Callable[[], datetime] | None = None
) -> AnalyticsCalculator:
    """Snapshot the stored history into a calculator using the configured calendar."""
    history = await session_service.get_history(db)
    legacy_minutes = await state_service.get_legacy_total_minutes(db)
    return AnalyticsCalculator(
        history,
        legacy_minutes,
        tz=settings.tzinfo,
        first_weekday=settings.FIRST_WEEKDAY,
        clock=clock or current_time,
    )


def period_stats(
    calculator: AnalyticsCalculator, period: Period, year: int | None = None
) -> PeriodStats:
    if period == "today":
        return calculator.stats_for_today()
    elif period == "week":
        return calculator.stats_for_week()
    elif period == "month":
        return calculator.stats_for_month()
    elif period == "year":
        return calculator.stats_for_year(year or calculator.today().year)
    return calculator.stats_for_all_time()


def overview(calculator: AnalyticsCalculator, year: int | None = None) -> StatsOverview:
    year = year or calculator.today().year
    return StatsOverview(
        year=year,
        today=calculator.stats_for_today(),
        week=calculator.stats_for_week(),
        month=calculator.stats_for_month(),
        year_stats=calculator.stats_for_year(year),
        all_time=calculator.stats_for_all_time(),
    )


def records(calculator: AnalyticsCalculator) -> RecordsResponse:
    return RecordsResponse(
        best_day=calculator.best_day(),
        best_week=calculator.best_week(),
        best_month=calculator.best_month(),
        longest_streak=calculator.longest_streak(),
    )
