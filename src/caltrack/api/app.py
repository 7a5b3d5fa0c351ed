"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from caltrack.api.schemas import (
    FavoriteRequest,
    LogDetectedRequest,
    LogFoodItemRequest,
    LogRecipeRequest,
    TimezoneRequest,
    UnitsRequest,
)
from caltrack.app_logging import configure_logging
from caltrack.containers import AppContainer
from caltrack.domain.drafts import FoodEntryDraft, ProfileDraft, RecipeDraft
from caltrack.domain.entries import DiaryDay, FoodEntry
from caltrack.domain.insights import Metric, TimeRange
from caltrack.domain.recipes import Recipe
from caltrack.domain.session import SessionContext
from caltrack.errors import (
    CalTrackError,
    DivisionByZero,
    EntryNotFound,
    InvalidQuery,
    NutritionApiError,
    ProfileNotFound,
    RateLimitExceeded,
    RecipeNotFound,
    RecognitionFailed,
)
from caltrack.services.aggregation import per_entry_totals
from caltrack.services.recipes import recipe_per_serving, recipe_totals
from caltrack.services.session import session_targets

_ERROR_STATUS: list[tuple[type[CalTrackError], int]] = [
    (ProfileNotFound, status.HTTP_404_NOT_FOUND),
    (EntryNotFound, status.HTTP_404_NOT_FOUND),
    (RecipeNotFound, status.HTTP_404_NOT_FOUND),
    (InvalidQuery, status.HTTP_400_BAD_REQUEST),
    (RateLimitExceeded, status.HTTP_503_SERVICE_UNAVAILABLE),
    (NutritionApiError, status.HTTP_502_BAD_GATEWAY),
    (RecognitionFailed, status.HTTP_502_BAD_GATEWAY),
    (DivisionByZero, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _session(request: Request) -> SessionContext:
    container = _container(request)
    return container.session_service.load(container.local_user_id)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(CalTrackError)
    async def handle_domain_error(
        request: Request, exc: CalTrackError
    ) -> JSONResponse:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        for error_type, mapped in _ERROR_STATUS:
            if isinstance(exc, error_type):
                status_code = mapped
                break
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("Request %s failed: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    async def get_session(
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        return {
            "user_id": str(session.user_id),
            "timezone": session.timezone,
            "is_onboarding": session.is_onboarding,
            "units": session.units,
            "has_profile": session.profile is not None,
        }

    # Profile

    @app.post("/profile/onboarding", status_code=status.HTTP_201_CREATED)
    async def complete_onboarding(
        draft: ProfileDraft, request: Request
    ) -> dict[str, object]:
        container = _container(request)
        profile = container.profile_service.complete_onboarding(
            container.local_user_id, draft
        )
        return asdict(profile)

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        container = _container(request)
        profile = container.profile_service.get_profile(container.local_user_id)
        if profile is None:
            raise ProfileNotFound("No profile yet; complete onboarding first")
        return asdict(profile)

    @app.put("/profile")
    async def update_profile(
        draft: ProfileDraft, request: Request
    ) -> dict[str, object]:
        container = _container(request)
        return asdict(
            container.profile_service.update_profile(container.local_user_id, draft)
        )

    @app.get("/profile/targets")
    async def get_targets(
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        return {
            "targets": asdict(session_targets(session)),
            "is_default": session.profile is None,
        }

    # Entries

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def log_entry(
        draft: FoodEntryDraft,
        request: Request,
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        entry = _container(request).entry_service.log_entry(session, draft)
        return _entry_payload(entry)

    @app.post("/entries/detected", status_code=status.HTTP_201_CREATED)
    async def log_detected(
        body: LogDetectedRequest,
        request: Request,
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        entry = _container(request).entry_service.log_detected(
            session, body.candidate, body.servings, body.meal_type
        )
        return _entry_payload(entry)

    @app.post("/entries/food-item", status_code=status.HTTP_201_CREATED)
    async def log_food_item(
        body: LogFoodItemRequest,
        request: Request,
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        entry = _container(request).entry_service.log_food_item(
            session, body.food, body.grams, body.meal_type
        )
        return _entry_payload(entry)

    @app.get("/entries/{entry_id}")
    async def get_entry(entry_id: UUID, request: Request) -> dict[str, object]:
        return _entry_payload(_container(request).entry_service.get_entry(entry_id))

    @app.put("/entries/{entry_id}")
    async def edit_entry(
        entry_id: UUID,
        draft: FoodEntryDraft,
        request: Request,
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        entry = _container(request).entry_service.edit_entry(session, entry_id, draft)
        return _entry_payload(entry)

    @app.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entry(entry_id: UUID, request: Request) -> None:
        _container(request).entry_service.delete_entry(entry_id)

    @app.post("/entries/{entry_id}/duplicate", status_code=status.HTTP_201_CREATED)
    async def duplicate_entry(
        entry_id: UUID, request: Request, keep_timestamp: bool = True
    ) -> dict[str, object]:
        entry = _container(request).entry_service.duplicate_entry(
            entry_id, keep_timestamp=keep_timestamp
        )
        return _entry_payload(entry)

    # Diary

    @app.get("/diary/{day}")
    async def get_diary(
        day: date, request: Request, session: SessionContext = Depends(_session)
    ) -> dict[str, object]:
        diary = _container(request).entry_service.diary_for_day(session, day)
        return _diary_payload(diary)

    @app.delete("/diary/{day}")
    async def clear_diary(
        day: date, request: Request, session: SessionContext = Depends(_session)
    ) -> dict[str, int]:
        removed = _container(request).entry_service.clear_day(session, day)
        return {"removed": removed}

    # Insights

    @app.get("/insights")
    async def get_insights(
        request: Request,
        range: TimeRange = TimeRange.WEEK,  # noqa: A002
        metric: Metric = Metric.CALORIES,
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        report = _container(request).insights_service.progress(
            session, range, metric
        )
        return asdict(report)

    @app.get("/insights/today")
    async def get_today(
        request: Request, session: SessionContext = Depends(_session)
    ) -> dict[str, object]:
        return asdict(_container(request).insights_service.today(session))

    @app.get("/insights/lifetime")
    async def get_lifetime(
        request: Request, session: SessionContext = Depends(_session)
    ) -> dict[str, object]:
        return asdict(_container(request).insights_service.lifetime(session))

    # Foods

    @app.get("/foods/search")
    async def search_foods(q: str, request: Request) -> dict[str, object]:
        result = await _container(request).nutrition_service.search_food(q)
        return result.model_dump(by_alias=True)

    @app.get("/foods/barcode/{code}")
    async def lookup_barcode(code: str, request: Request) -> dict[str, object]:
        candidate = await _container(request).barcode_provider.lookup(code)
        return candidate.model_dump()

    @app.post("/foods/recognize")
    async def recognize_food(request: Request) -> dict[str, object]:
        image = await request.body()
        if not image:
            raise ValueError("Image body is empty")
        candidate = await _container(request).recognition_provider.recognize(image)
        return candidate.model_dump()

    # Recipes

    @app.post("/recipes", status_code=status.HTTP_201_CREATED)
    async def create_recipe(draft: RecipeDraft, request: Request) -> dict[str, object]:
        container = _container(request)
        recipe = container.recipe_service.create_recipe(
            container.local_user_id, draft
        )
        return _recipe_payload(recipe)

    @app.get("/recipes")
    async def list_recipes(request: Request) -> dict[str, object]:
        container = _container(request)
        recipes = container.recipe_service.list_recipes(container.local_user_id)
        return {"recipes": [_recipe_payload(recipe) for recipe in recipes]}

    @app.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_recipe(recipe_id: UUID, request: Request) -> None:
        _container(request).recipe_service.delete_recipe(recipe_id)

    @app.put("/recipes/{recipe_id}/favorite", status_code=status.HTTP_204_NO_CONTENT)
    async def set_favorite(
        recipe_id: UUID, body: FavoriteRequest, request: Request
    ) -> None:
        _container(request).recipe_service.set_favorite(recipe_id, body.is_favorite)

    @app.post("/recipes/{recipe_id}/log", status_code=status.HTTP_201_CREATED)
    async def log_recipe(
        recipe_id: UUID,
        body: LogRecipeRequest,
        request: Request,
        session: SessionContext = Depends(_session),
    ) -> dict[str, object]:
        entry = _container(request).recipe_service.log_recipe(
            session, recipe_id, body.servings, body.meal_type
        )
        return _entry_payload(entry)

    # Settings

    @app.put("/settings/timezone")
    async def set_timezone(body: TimezoneRequest, request: Request) -> dict[str, str]:
        container = _container(request)
        container.settings_service.set_timezone(
            container.local_user_id, body.timezone
        )
        return {"timezone": body.timezone}

    @app.put("/settings/units")
    async def set_units(body: UnitsRequest, request: Request) -> dict[str, str]:
        container = _container(request)
        container.settings_service.set_units(container.local_user_id, body.units)
        return {"units": body.units}

    return app


def _entry_payload(entry: FoodEntry) -> dict[str, object]:
    payload = asdict(entry)
    payload["totals"] = asdict(per_entry_totals(entry))
    return payload


def _diary_payload(diary: DiaryDay) -> dict[str, object]:
    return {
        "day": diary.day,
        "meals": [
            {
                "meal_type": meal_type,
                "entries": [_entry_payload(entry) for entry in entries],
            }
            for meal_type, entries in diary.meals
        ],
        "totals": asdict(diary.totals),
        "targets": asdict(diary.targets),
        "progress": diary.progress,
    }


def _recipe_payload(recipe: Recipe) -> dict[str, object]:
    payload = asdict(recipe)
    payload["totals"] = asdict(recipe_totals(recipe))
    payload["per_serving"] = asdict(recipe_per_serving(recipe))
    return payload
