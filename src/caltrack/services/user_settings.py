"""User settings service backed by a key-value store."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

ONBOARDING_KEY = "has_completed_onboarding"
TIMEZONE_KEY = "timezone"
UNITS_KEY = "units"
UNIT_SYSTEMS = frozenset({"metric", "imperial"})


class SettingsStore(Protocol):
    """Persistence interface for per-user settings."""

    def get_value(self, user_id: UUID, key: str) -> str | None:
        """Return the stored value for a key, if any."""

    def set_value(self, user_id: UUID, key: str, value: str) -> None:
        """Store a value for a key."""


@dataclass
class UserSettingsService:
    """Service for user settings and persisted flags."""

    store: SettingsStore
    default_timezone: str = "UTC"

    def has_completed_onboarding(self, user_id: UUID) -> bool:
        """Return True once onboarding has finished."""
        return self.store.get_value(user_id, ONBOARDING_KEY) == "true"

    def mark_onboarding_complete(self, user_id: UUID) -> None:
        """Persist the onboarding-complete flag."""
        self.store.set_value(user_id, ONBOARDING_KEY, "true")

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the configured default."""
        return self.store.get_value(user_id, TIMEZONE_KEY) or self.default_timezone

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone after checking it exists."""
        if not is_valid_timezone(timezone):
            raise ValueError(f"Unknown timezone: {timezone}")
        self.store.set_value(user_id, TIMEZONE_KEY, timezone)

    def get_units(self, user_id: UUID) -> str:
        """Return the preferred unit system."""
        return self.store.get_value(user_id, UNITS_KEY) or "metric"

    def set_units(self, user_id: UUID, units: str) -> None:
        if units not in UNIT_SYSTEMS:
            raise ValueError(f"Unknown unit system: {units}")
        self.store.set_value(user_id, UNITS_KEY, units)


def is_valid_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
