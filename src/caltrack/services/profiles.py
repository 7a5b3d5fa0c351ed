"""Profile lifecycle: onboarding, edits and target recomputation."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from caltrack.domain.drafts import ProfileDraft
from caltrack.domain.profile import (
    NutritionTargets,
    UserProfile,
)
from caltrack.errors import ProfileNotFound
from caltrack.services.targets import compute_targets
from caltrack.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the current user profile."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if present."""

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or replace the user's profile and return it."""


@dataclass
class ProfileService:
    """Application service for the user profile."""

    repository: ProfileRepository
    settings_service: UserSettingsService

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the current profile."""
        return self.repository.get_profile(user_id)

    def complete_onboarding(self, user_id: UUID, draft: ProfileDraft) -> UserProfile:
        """Create the profile with computed targets and finish onboarding."""
        now = datetime.now(tz=UTC)
        profile = UserProfile(
            user_id=user_id,
            name=draft.name,
            email=draft.email,
            biometrics=draft.biometrics(),
            targets=_targets_for(draft),
            created_at=now,
            updated_at=now,
        )
        saved = self._save(profile)
        self.settings_service.mark_onboarding_complete(user_id)
        return saved

    def update_profile(self, user_id: UUID, draft: ProfileDraft) -> UserProfile:
        """Replace editable fields and recompute every target."""
        current = self.repository.get_profile(user_id)
        if current is None:
            raise ProfileNotFound(f"No profile for user {user_id}")
        updated = replace(
            current,
            name=draft.name,
            email=draft.email,
            biometrics=draft.biometrics(),
            targets=_targets_for(draft),
            updated_at=datetime.now(tz=UTC),
        )
        return self._save(updated)

    def _save(self, profile: UserProfile) -> UserProfile:
        try:
            return self.repository.save_profile(profile)
        except Exception:
            _logger.exception("Failed to save profile for user %s", profile.user_id)
            raise


def _targets_for(draft: ProfileDraft) -> NutritionTargets:
    targets = compute_targets(draft.biometrics())
    _logger.info(
        "Computed targets: calories=%.0f protein=%.1f carbs=%.1f fat=%.1f",
        targets.calories,
        targets.protein_g,
        targets.carbs_g,
        targets.fat_g,
    )
    if targets.carbs_g < 0:
        _logger.warning("Carb target is negative (%.1f g)", targets.carbs_g)
    return targets
