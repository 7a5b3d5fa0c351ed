"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import create_client

from caltrack.adapters.edamam_client import HttpxEdamamClient
from caltrack.adapters.openai_food_recognizer import OpenAIFoodRecognitionProvider
from caltrack.adapters.supabase_food_entry_repository import (
    SupabaseFoodEntryRepository,
)
from caltrack.adapters.supabase_profile_repository import SupabaseProfileRepository
from caltrack.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from caltrack.adapters.supabase_settings_repository import SupabaseSettingsStore
from caltrack.config import Settings
from caltrack.services.cache import InMemoryCache
from caltrack.services.entries import FoodEntryService
from caltrack.services.insights import InsightsService
from caltrack.services.nutrition import NutritionService
from caltrack.services.profiles import ProfileService
from caltrack.services.recipes import RecipeService
from caltrack.services.recognition import (
    BarcodeProductProvider,
    FoodRecognitionProvider,
    MockBarcodeProductProvider,
    MockFoodRecognitionProvider,
    NutritionBarcodeProductProvider,
)
from caltrack.services.session import SessionService
from caltrack.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    local_user_id: UUID
    settings_service: UserSettingsService
    profile_service: ProfileService
    session_service: SessionService
    entry_service: FoodEntryService
    insights_service: InsightsService
    recipe_service: RecipeService
    nutrition_service: NutritionService
    recognition_provider: FoodRecognitionProvider
    barcode_provider: BarcodeProductProvider
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    settings_service = UserSettingsService(
        SupabaseSettingsStore(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        settings_service=settings_service,
    )
    entry_repository = SupabaseFoodEntryRepository(supabase_client)
    entry_service = FoodEntryService(entry_repository)
    edamam_client = HttpxEdamamClient.create(
        app_id=resolved_settings.edamam_app_id,
        app_key=resolved_settings.edamam_app_key,
        base_url=resolved_settings.edamam_base_url,
    )
    nutrition_service = NutritionService(client=edamam_client, cache=InMemoryCache())

    return AppContainer(
        settings=resolved_settings,
        local_user_id=UUID(resolved_settings.local_user_id),
        settings_service=settings_service,
        profile_service=profile_service,
        session_service=SessionService(profile_service, settings_service),
        entry_service=entry_service,
        insights_service=InsightsService(
            entry_repository, tolerance=resolved_settings.on_track_tolerance
        ),
        recipe_service=RecipeService(
            SupabaseRecipeRepository(supabase_client), entry_service
        ),
        nutrition_service=nutrition_service,
        recognition_provider=build_recognition_provider(resolved_settings),
        barcode_provider=build_barcode_provider(resolved_settings, nutrition_service),
        close_resources=edamam_client.close,
    )


def build_recognition_provider(settings: Settings) -> FoodRecognitionProvider:
    """Pick the camera recognition variant named in settings."""
    _logger.info("Food recognition provider: %s", settings.recognition_provider)
    if settings.recognition_provider == "openai" and settings.openai_api_key:
        return OpenAIFoodRecognitionProvider.create(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        )
    return MockFoodRecognitionProvider()


def build_barcode_provider(
    settings: Settings, nutrition_service: NutritionService
) -> BarcodeProductProvider:
    """Pick the barcode lookup variant named in settings."""
    _logger.info("Barcode provider: %s", settings.barcode_provider)
    if settings.barcode_provider == "edamam":
        return NutritionBarcodeProductProvider(nutrition_service)
    return MockBarcodeProductProvider()
