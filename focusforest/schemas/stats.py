from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

Period = Literal["today", "week", "month", "year", "all_time"]


class PeriodStats(BaseModel):
    session_count: int = 0
    total_hours: float = 0.0
    total_coins: float = 0.0


class CategoryStats(BaseModel):
    category: str
    hours: float
    percentage: float  # 0-100 of the filtered total
    session_count: int


class BestRecord(BaseModel):
    start: date  # first day of the day/week/month
    hours: float


class RecordsResponse(BaseModel):
    best_day: BestRecord | None
    best_week: BestRecord | None
    best_month: BestRecord | None
    longest_streak: int


class HeatmapDay(BaseModel):
    date: date
    hours: float
    level: int = Field(ge=0, le=5)  # 0 = no focus, 5 = near the year's best day


class HeatmapResponse(BaseModel):
    year: int
    max_hours: float
    days: list[HeatmapDay]


class ActivitySummary(BaseModel):
    active_days: int
    average_session_minutes: float
    daily_average_minutes: float


class StatsOverview(BaseModel):
    year: int
    today: PeriodStats
    week: PeriodStats
    month: PeriodStats
    year_stats: PeriodStats
    all_time: PeriodStats


class PeriodStatsResponse(BaseModel):
    period: Period
    year: int | None = None
    stats: PeriodStats


class LastDaysStatsResponse(BaseModel):
    days: int
    stats: PeriodStats
