from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.database import get_db
from focusforest.schemas.stats import (
    ActivitySummary,
    CategoryStats,
    HeatmapResponse,
    LastDaysStatsResponse,
    Period,
    PeriodStatsResponse,
    RecordsResponse,
    StatsOverview,
)
from focusforest.services import stats_service

router = APIRouter(prefix="/stats", tags=["stats"])

MIN_YEAR = 1970
MAX_YEAR = 9999


@router.get("/overview", response_model=StatsOverview)
async def get_overview(
    year: int | None = Query(default=None, ge=MIN_YEAR, le=MAX_YEAR),
    db: AsyncSession = Depends(get_db),
):
    calculator = await stats_service.build_calculator(db)
    return stats_service.overview(calculator, year=year)


@router.get("/period", response_model=PeriodStatsResponse)
async def get_period_stats(
    period: Period = Query(default="week"),
    year: int | None = Query(default=None, ge=MIN_YEAR, le=MAX_YEAR),
    db: AsyncSession = Depends(get_db),
):
    calculator = await stats_service.build_calculator(db)
    if period != "year":
        year = None
    elif year is None:
        year = calculator.today().year
    return PeriodStatsResponse(
        period=period,
        year=year,
        stats=stats_service.period_stats(calculator, period, year=year),
    )


@router.get("/last-days", response_model=LastDaysStatsResponse)
async def get_last_days_stats(
    days: int = Query(default=7, ge=1, le=366),
    db: AsyncSession = Depends(get_db),
):
    calculator = await stats_service.build_calculator(db)
    return LastDaysStatsResponse(days=days, stats=calculator.stats_for_last_n_days(days))


@router.get("/categories", response_model=list[CategoryStats])
async def get_category_breakdown(
    year: int | None = Query(default=None, ge=MIN_YEAR, le=MAX_YEAR),
    db: AsyncSession = Depends(get_db),
):
    calculator = await stats_service.build_calculator(db)
    return calculator.category_breakdown(year=year)


@router.get("/records", response_model=RecordsResponse)
async def get_records(db: AsyncSession = Depends(get_db)):
    calculator = await stats_service.build_calculator(db)
    return stats_service.records(calculator)


@router.get("/heatmap/{year}", response_model=HeatmapResponse)
async def get_heatmap(
    year: int = Path(ge=MIN_YEAR, le=MAX_YEAR),
    db: AsyncSession = Depends(get_db),
):
    calculator = await stats_service.build_calculator(db)
    return calculator.heatmap_levels(year)


@router.get("/summary", response_model=ActivitySummary)
async def get_summary(db: AsyncSession = Depends(get_db)):
    calculator = await stats_service.build_calculator(db)
    return calculator.activity_summary()


@router.get("/years", response_model=list[int])
async def get_years(db: AsyncSession = Depends(get_db)):
    calculator = await stats_service.build_calculator(db)
    return calculator.available_years()
