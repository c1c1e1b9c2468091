import calendar
from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, timezone, tzinfo

from focusforest.schemas.session import SessionRecord
from focusforest.schemas.stats import (
    ActivitySummary,
    BestRecord,
    CategoryStats,
    HeatmapDay,
    HeatmapResponse,
    PeriodStats,
)

# Upper bounds (fraction of the year's best day) for heatmap levels 1-4; anything above is 5
HEATMAP_LEVEL_THRESHOLDS = (0.1, 0.3, 0.6, 0.9)


def subtract_months(moment: datetime, months: int) -> datetime:
    """Calendar-month subtraction, clamping the day to the target month's length."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def intensity_level(hours: float, max_hours: float) -> int:
    if hours <= 0 or max_hours <= 0:
        return 0
    ratio = hours / max_hours
    for level, threshold in enumerate(HEATMAP_LEVEL_THRESHOLDS, start=1):
        if ratio < threshold:
            return level
    return len(HEATMAP_LEVEL_THRESHOLDS) + 1


class AnalyticsCalculator:
    """Read-only statistics over a snapshot of the focus session history.

    Every query is recomputed from the sessions passed in; nothing is cached
    and nothing is mutated. Day, week and month boundaries follow ``tz``, and
    weeks start on ``first_weekday`` (0=Monday .. 6=Sunday).

    ``legacy_total_minutes`` is the pre-history aggregate kept for old
    installs. It only shows up in all-time stats, and only while the history
    is empty.
    """

    def __init__(
        self,
        sessions: Iterable[SessionRecord],
        legacy_total_minutes: float = 0.0,
        *,
        tz: tzinfo = timezone.utc,
        first_weekday: int = 0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._sessions: tuple[SessionRecord, ...] = tuple(sessions)
        self._legacy_total_minutes = legacy_total_minutes
        self._tz = tz
        self._first_weekday = first_weekday
        self._clock = clock or (lambda: datetime.now(tz))

    # --- helpers ---

    def _now(self) -> datetime:
        return self._clock().astimezone(self._tz)

    def _local_day(self, moment: datetime) -> date:
        return moment.astimezone(self._tz).date()

    def _week_start(self, day: date) -> date:
        return day - timedelta(days=(day.weekday() - self._first_weekday) % 7)

    def _year_bounds(self, year: int) -> tuple[datetime, datetime]:
        start = datetime(year, 1, 1, tzinfo=self._tz)
        end = datetime(year, 12, 31, 23, 59, 59, tzinfo=self._tz)
        return start, end

    def _sessions_for_year(self, year: int) -> list[SessionRecord]:
        start, end = self._year_bounds(year)
        return [s for s in self._sessions if start <= s.date <= end]

    def _chronological(self, sessions: Iterable[SessionRecord]) -> list[SessionRecord]:
        return sorted(sessions, key=lambda s: (s.date, str(s.id)))

    @staticmethod
    def _period_stats(sessions: Iterable[SessionRecord]) -> PeriodStats:
        count = 0
        hours = 0.0
        coins = 0.0
        for s in sessions:
            count += 1
            hours += s.hours
            coins += s.coins_earned
        return PeriodStats(session_count=count, total_hours=hours, total_coins=coins)

    def _totals_by(self, bucket: Callable[[date], date]) -> dict[date, float]:
        totals: dict[date, float] = defaultdict(float)
        for s in self._sessions:
            totals[bucket(self._local_day(s.date))] += s.hours
        return totals

    @staticmethod
    def _best(totals: dict[date, float]) -> BestRecord | None:
        if not totals:
            return None
        # Highest total wins; on a tie the earliest period does
        start, hours = min(totals.items(), key=lambda item: (-item[1], item[0]))
        return BestRecord(start=start, hours=hours)

    def today(self) -> date:
        return self._now().date()

    # --- period stats ---

    def stats_for_today(self) -> PeriodStats:
        today = self.today()
        return self._period_stats(
            s for s in self._sessions if self._local_day(s.date) == today
        )

    def stats_for_last_n_days(self, n: int) -> PeriodStats:
        now = self._now()
        start = now - timedelta(days=n)
        return self._period_stats(s for s in self._sessions if start <= s.date <= now)

    def stats_for_week(self) -> PeriodStats:
        return self.stats_for_last_n_days(7)

    def stats_for_month(self) -> PeriodStats:
        """Sessions from the same moment one calendar month ago up to now."""
        now = self._now()
        start = subtract_months(now, 1)
        return self._period_stats(s for s in self._sessions if start <= s.date <= now)

    def stats_for_year(self, year: int) -> PeriodStats:
        return self._period_stats(self._sessions_for_year(year))

    def stats_for_all_time(self) -> PeriodStats:
        if not self._sessions and self._legacy_total_minutes > 0:
            return PeriodStats(
                session_count=0,
                total_hours=self._legacy_total_minutes / 60.0,
                total_coins=0.0,
            )
        return self._period_stats(self._sessions)

    # --- category breakdown ---

    def category_breakdown(self, year: int | None = None) -> list[CategoryStats]:
        """Hours, session count and share of total per category, largest first.

        Returns an empty list when the selected sessions add up to zero hours.
        Categories with equal hours keep the order in which they first appear
        in the chronological history.
        """
        sessions = self._sessions_for_year(year) if year is not None else self._sessions
        total_hours = sum(s.hours for s in sessions)
        if total_hours <= 0:
            return []

        grouped: dict[str, list[float]] = {}
        for s in self._chronological(sessions):
            hours_count = grouped.setdefault(s.category, [0.0, 0])
            hours_count[0] += s.hours
            hours_count[1] += 1

        breakdown = [
            CategoryStats(
                category=category,
                hours=hours,
                percentage=hours / total_hours * 100,
                session_count=int(count),
            )
            for category, (hours, count) in grouped.items()
        ]
        return sorted(breakdown, key=lambda c: c.hours, reverse=True)

    # --- best records ---

    def best_day(self) -> BestRecord | None:
        return self._best(self._totals_by(lambda day: day))

    def best_week(self) -> BestRecord | None:
        return self._best(self._totals_by(self._week_start))

    def best_month(self) -> BestRecord | None:
        return self._best(self._totals_by(lambda day: day.replace(day=1)))

    def longest_streak(self) -> int:
        """Longest run of consecutive calendar days with at least one session."""
        days = sorted({self._local_day(s.date) for s in self._sessions})
        if not days:
            return 0

        longest = current = 1
        for previous, day in zip(days, days[1:]):
            if (day - previous).days == 1:
                current += 1
            else:
                current = 1
            longest = max(longest, current)
        return longest

    # --- heatmap ---

    def yearly_heatmap(self, year: int) -> dict[date, float]:
        """Hours per day for every day of ``year``, zero-filled."""
        heatmap: dict[date, float] = {}
        day = date(year, 1, 1)
        while day.year == year:
            heatmap[day] = 0.0
            if day == date.max:
                break
            day += timedelta(days=1)

        for s in self._sessions:
            day = self._local_day(s.date)
            if day in heatmap:
                heatmap[day] += s.hours
        return heatmap

    def heatmap_levels(self, year: int) -> HeatmapResponse:
        heatmap = self.yearly_heatmap(year)
        max_hours = max(heatmap.values(), default=0.0)
        return HeatmapResponse(
            year=year,
            max_hours=max_hours,
            days=[
                HeatmapDay(date=day, hours=hours, level=intensity_level(hours, max_hours))
                for day, hours in heatmap.items()
            ],
        )

    # --- summary ---

    def activity_summary(self) -> ActivitySummary:
        if not self._sessions:
            return ActivitySummary(
                active_days=0, average_session_minutes=0.0, daily_average_minutes=0.0
            )

        total_minutes = sum(s.duration_minutes for s in self._sessions)
        active_days = len({self._local_day(s.date) for s in self._sessions})
        return ActivitySummary(
            active_days=active_days,
            average_session_minutes=total_minutes / len(self._sessions),
            daily_average_minutes=total_minutes / active_days,
        )

    def available_years(self) -> list[int]:
        years = {self._local_day(s.date).year for s in self._sessions}
        years.add(self.today().year)
        return sorted(years)
