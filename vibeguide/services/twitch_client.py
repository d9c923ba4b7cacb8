"""Async client for the vibeguide backend's Twitch endpoints.

The backend wraps every payload as::

    {"transaction_id": "...", "api_version": "v1", "data": {"data": [...]}}

Failures are raised internally as ``ApiError`` subclasses and turned into
empty lists at the public methods, so the guide only ever sees less data,
never an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from ..config.constants import (
    API_TIMEOUT_SECONDS,
    DEFAULT_CATEGORY_LIMIT,
    DEFAULT_STREAM_LIMIT,
    DEFAULT_TOP_STREAM_COUNT,
    MAX_QUERY_LIMIT,
    MIN_QUERY_LIMIT,
)
from ..exceptions import ApiConnectionError, ApiError, ApiRateLimitError, ApiResponseError
from ..models.guide import Category, Stream

logger = logging.getLogger(__name__)

SERVICE = "vibeguide-api"

T = TypeVar("T")


def clamp_limit(limit: int) -> int:
    return max(MIN_QUERY_LIMIT, min(MAX_QUERY_LIMIT, int(limit)))


def unwrap_items(payload: Any) -> List[Dict[str, Any]]:
    """Pull the item list out of the backend envelope."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if isinstance(data, dict):
        data = data.get("data")
    if not isinstance(data, list):
        raise ApiResponseError("Response did not contain a data list", service=SERVICE)
    return [item for item in data if isinstance(item, dict)]


def parse_items(items: List[Dict[str, Any]], parse: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Convert raw items with ``parse``; bad field types become ``ApiResponseError``."""
    try:
        return [parse(item) for item in items]
    except (TypeError, ValueError) as e:
        raise ApiResponseError(f"Response contained a malformed item: {e}", service=SERVICE) from e


class TwitchClient:
    """Category and stream lookups against the backend API.

    Use as an async context manager, or pass an existing ``httpx.AsyncClient``
    (tests inject one built on ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = API_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = http_client
        self._owns_client = http_client is None
        self._timeout = timeout

    async def __aenter__(self) -> "TwitchClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _get_items(self, path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """GET an endpoint and return its unwrapped item list.

        Raises:
            ApiConnectionError: Transport failure or timeout.
            ApiRateLimitError: HTTP 429.
            ApiResponseError: Any other non-200 status or a malformed body.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = await self._http().get(url, params=params)
        except httpx.TransportError as e:
            raise ApiConnectionError(f"Request failed: {e}", service=SERVICE, url=url) from e

        if resp.status_code == 429:
            retry_after = resp.headers.get("Retry-After")
            raise ApiRateLimitError(
                service=SERVICE,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if resp.status_code != 200:
            raise ApiResponseError(
                "API returned error status",
                status_code=resp.status_code,
                body=resp.text,
                url=url,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise ApiResponseError("Response was not valid JSON", body=resp.text, url=url) from e
        return unwrap_items(payload)

    async def fetch_top_categories(self, limit: int = DEFAULT_CATEGORY_LIMIT) -> List[Category]:
        """Top categories by viewers; empty list on any failure."""
        limit = clamp_limit(limit)
        try:
            items = await self._get_items("/v1/twitch/categories", {"limit": limit})
            categories = parse_items(items, Category.from_api)
        except ApiError as e:
            logger.warning(f"Error fetching categories: {e}")
            return []
        logger.debug(f"Fetched {len(categories)} categories (limit={limit})")
        return categories

    async def fetch_streams_for_category(
        self,
        category_id: str,
        limit: int = DEFAULT_STREAM_LIMIT,
    ) -> List[Stream]:
        """Live streams in one category; empty list on any failure."""
        limit = clamp_limit(limit)
        try:
            items = await self._get_items(
                "/v1/twitch/streams", {"game_id": category_id, "limit": limit}
            )
            return parse_items(items, Stream.from_api)
        except ApiError as e:
            logger.warning(f"Error fetching streams for category {category_id}: {e}")
            return []

    async def fetch_top_streams(self, count: int = DEFAULT_TOP_STREAM_COUNT) -> List[Stream]:
        """Top streams across all categories; empty list on any failure."""
        try:
            items = await self._get_items("/v1/twitch/streams/top", {"count": max(1, int(count))})
            return parse_items(items, Stream.from_api)
        except ApiError as e:
            logger.warning(f"Error fetching top streams: {e}")
            return []
