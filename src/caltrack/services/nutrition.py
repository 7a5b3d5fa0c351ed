"""Food search and barcode lookup against the remote food database."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from caltrack.adapters.edamam_client import EdamamClient
from caltrack.domain.nutrition import FoodItem, FoodSearchResult
from caltrack.errors import FoodNotFound, InvalidQuery, NutritionApiError
from caltrack.services.cache import Cache

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Service for food lookups with caching."""

    client: EdamamClient
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search_food(self, query: str) -> FoodSearchResult:
        """Search the food database; blank queries are rejected before any I/O."""
        cleaned = query.strip()
        if not cleaned:
            raise InvalidQuery()
        cache_key = f"edamam:parser:{cleaned.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodSearchResult):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.parse_food(cleaned), action="search"
        )
        try:
            result = FoodSearchResult.from_payload(payload)
        except ValidationError as exc:
            raise NutritionApiError("Malformed food database response") from exc
        self.cache.set(cache_key, result, ttl_seconds=self.search_ttl_seconds)
        _logger.debug("Food search: query=%s parsed=%s", cleaned, len(result.parsed))
        return result

    async def lookup_barcode(self, code: str) -> FoodItem:
        """Resolve a barcode through the text search and take the first match."""
        result = await self.search_food(code)
        if not result.parsed:
            raise FoodNotFound()
        return result.parsed[0]

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry on transport errors."""
        attempt = 0
        while True:
            try:
                return await func()
            except NutritionApiError:
                raise
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "Food %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code,
                    exc,
                )
                if attempt > self.retry_attempts or _is_client_error(status_code):
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> int | None:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def _is_client_error(status_code: int | None) -> bool:
    return status_code is not None and 400 <= status_code < 500
