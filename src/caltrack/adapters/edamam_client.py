"""Edamam Food Database API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from caltrack.errors import InvalidURL, NoDataReceived, RateLimitExceeded, Unauthorized

_UNAUTHORIZED_STATUSES = {401, 403}
_RATE_LIMIT_STATUS = 429


class EdamamClient(Protocol):
    """Interface for food database interactions."""

    async def parse_food(self, query: str) -> dict[str, object]:
        """Run the parser endpoint for a query and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, app_id: str, app_key: str, base_url: str) -> "HttpxEdamamClient":
        """Create a client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def parse_food(self, query: str) -> dict[str, object]:
        """Look up foods matching free text or a barcode."""
        url = f"{self.base_url.rstrip('/')}/parser"
        try:
            response = await self.http_client.get(
                url,
                params={"app_id": self.app_id, "app_key": self.app_key, "ingr": query},
                timeout=15,
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise InvalidURL() from exc
        if response.status_code in _UNAUTHORIZED_STATUSES:
            raise Unauthorized()
        if response.status_code == _RATE_LIMIT_STATUS:
            raise RateLimitExceeded()
        response.raise_for_status()
        if not response.content:
            raise NoDataReceived()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
