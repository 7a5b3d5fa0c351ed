"""Builds the explicit session context for a user."""

from dataclasses import dataclass
from uuid import UUID

from caltrack.domain.profile import DEFAULT_DISPLAY_TARGETS, NutritionTargets
from caltrack.domain.session import SessionContext
from caltrack.services.profiles import ProfileService
from caltrack.services.user_settings import UserSettingsService


@dataclass
class SessionService:
    """Loads profile and settings into a ``SessionContext``."""

    profile_service: ProfileService
    settings_service: UserSettingsService

    def load(self, user_id: UUID) -> SessionContext:
        """Return a fresh snapshot of the user's session."""
        return SessionContext(
            user_id=user_id,
            profile=self.profile_service.get_profile(user_id),
            timezone=self.settings_service.get_timezone(user_id),
            is_onboarding=not self.settings_service.has_completed_onboarding(
                user_id
            ),
            units=self.settings_service.get_units(user_id),
        )


def session_targets(session: SessionContext) -> NutritionTargets:
    """Targets to display for a session, falling back to defaults."""
    if session.profile is None:
        return DEFAULT_DISPLAY_TARGETS
    return session.profile.targets
