"""Explicit per-request session context."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from caltrack.domain.profile import UserProfile


@dataclass(frozen=True)
class SessionContext:
    """Current user, profile and locale passed to services that need them."""

    user_id: UUID
    profile: UserProfile | None
    timezone: str
    is_onboarding: bool
    units: str = "metric"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def day_of(self, timestamp: datetime) -> date:
        """Return the local calendar day of a timestamp."""
        return timestamp.astimezone(self.tz).date()

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        """Return ``[start, next_start)`` of a local day as aware datetimes."""
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self.tz)
        return start, end
