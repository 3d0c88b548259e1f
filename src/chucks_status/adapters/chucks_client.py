"""Cedarville dining API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from chucks_status.domain.menu import MenuResponse, parse_menu_json
from chucks_status.errors import DecodingError, InvalidRequestError, NetworkError

DEFAULT_BASE_URL = "https://diningdata.cedarville.edu/api"

# The API only answers requests that look like they come from the college site.
REQUEST_HEADERS = {
    "Accept": "*/*",
    "Origin": "https://www.cedarville.edu",
    "Referer": "https://www.cedarville.edu/offices/the-commons",
}


class ChucksClient(Protocol):
    """Interface for fetching the multi-day menu document."""

    async def fetch_menus(self, days: int = 5) -> MenuResponse:
        """Fetch and decode menus for the next `days` days."""


@dataclass
class HttpxChucksClient(ChucksClient):
    """HTTPX-backed dining API client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30

    @classmethod
    def create(
        cls, base_url: str = DEFAULT_BASE_URL, timeout_seconds: float = 30
    ) -> "HttpxChucksClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_menus(self, days: int = 5) -> MenuResponse:
        """Fetch menus, mapping failures onto the ChucksError taxonomy."""
        url = f"{self.base_url.rstrip('/')}/menus"
        try:
            response = await self.http_client.get(
                url,
                params={"days": days},
                headers=REQUEST_HEADERS,
                timeout=self.timeout_seconds,
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise InvalidRequestError(url) from exc
        except httpx.RequestError as exc:
            raise NetworkError() from exc

        if response.status_code != httpx.codes.OK:
            raise NetworkError(response.status_code)

        try:
            return parse_menu_json(response.content)
        except ValidationError as exc:
            raise DecodingError(exc) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
