"""Insights: trends, today's progress and lifetime stats."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from caltrack.domain.insights import (
    DailyProgress,
    InsightsReport,
    LifetimeStats,
    Metric,
    TimeRange,
)
from caltrack.domain.session import SessionContext
from caltrack.services.aggregation import (
    daily_totals,
    progress_against,
    remaining_against,
)
from caltrack.services.entries import FoodEntryRepository
from caltrack.services.session import session_targets
from caltrack.services.trends import (
    DEFAULT_TOLERANCE,
    average_per_day,
    build_series,
    current_streak,
    days_on_track,
    insights,
    lifetime_stats,
)


@dataclass
class InsightsService:
    """Reads an entry snapshot and derives progress views in the user's timezone."""

    repository: FoodEntryRepository
    tolerance: float = DEFAULT_TOLERANCE

    def progress(
        self,
        session: SessionContext,
        time_range: TimeRange,
        metric: Metric = Metric.CALORIES,
        now: datetime | None = None,
    ) -> InsightsReport:
        """Return the trend series and summary for a look-back window.

        The window starts ``time_range.days`` before ``now`` and runs to the
        end of the local day containing ``now``.
        """
        end = now or datetime.now(tz=UTC)
        start = end - timedelta(days=time_range.days)
        today = session.day_of(end)
        _, window_end = session.day_bounds(today)
        entries = self.repository.list_entries(
            session.user_id, start.astimezone(UTC), window_end.astimezone(UTC)
        )
        target = session_targets(session).calories
        return InsightsReport(
            time_range=time_range,
            metric=metric,
            series=build_series(entries, metric, start, window_end, session.day_of),
            average_calories=average_per_day(entries, session.day_of).calories,
            days_on_track=days_on_track(
                entries, target, self.tolerance, session.day_of
            ),
            current_streak=current_streak(entries, today, session.day_of),
            highlights=insights(entries),
        )

    def today(
        self, session: SessionContext, now: datetime | None = None
    ) -> DailyProgress:
        """Return today's totals, remaining amounts and progress."""
        day = session.day_of(now or datetime.now(tz=UTC))
        start, end = session.day_bounds(day)
        entries = self.repository.list_entries(
            session.user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        totals = daily_totals(entries)
        targets = session_targets(session)
        return DailyProgress(
            day=day,
            totals=totals,
            targets=targets,
            remaining=remaining_against(totals, targets),
            progress=progress_against(totals, targets),
        )

    def lifetime(self, session: SessionContext) -> LifetimeStats:
        """Return all-time logging stats."""
        entries = self.repository.list_all_entries(session.user_id)
        return lifetime_stats(entries, session.day_of)
