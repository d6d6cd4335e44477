"""Client for searching icons via the Iconify API."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from config import DEFAULT_FETCH_TIMEOUT_MS, DEFAULT_ICONIFY_URL
from exceptions import FetchTimeoutError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 64


class SearchResult(BaseModel):
    """One page of search hits; icons are references like "mdi:heart"."""

    icons: List[str] = Field(default_factory=list)
    total: int = 0
    limit: int = DEFAULT_SEARCH_LIMIT
    start: int = 0


class CollectionAuthor(BaseModel):
    name: str
    url: Optional[str] = None


class CollectionLicense(BaseModel):
    title: str
    spdx: Optional[str] = None
    url: Optional[str] = None


class CollectionInfo(BaseModel):
    """Metadata for an icon set as listed by /collections."""

    name: str
    total: int = 0
    author: Optional[CollectionAuthor] = None
    license: Optional[CollectionLicense] = None
    samples: List[str] = Field(default_factory=list)
    category: Optional[str] = None


class IconifyApiClient:
    """
    Searches the Iconify API. Results are not cached here; wrap calls with
    SearchCache.get_or_fetch() where repeated queries are expected.

    Usage:
        client = IconifyApiClient()
        result = await client.search("heart", limit=10, prefixes=["mdi"])
    """

    def __init__(
        self,
        base_url: str = DEFAULT_ICONIFY_URL,
        timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._transport = transport

    async def search(
        self,
        query: str,
        limit: Optional[int] = None,
        prefixes: Optional[List[str]] = None,
        start: Optional[int] = None
    ) -> SearchResult:
        """
        Search for icons by keyword.

        Args:
            query: Search keyword
            limit: Maximum number of results
            prefixes: Restrict to these icon sets
            start: Offset for pagination

        Raises:
            FetchTimeoutError: Request exceeded timeout_ms
            NetworkError: Connection failure, non-2xx status or bad payload
        """
        params: Dict[str, str] = {"query": query}
        if limit is not None:
            params["limit"] = str(limit)
        if start is not None:
            params["start"] = str(start)
        if prefixes:
            params["prefixes"] = ",".join(prefixes)

        data = await self._get_json("/search", params)
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected search response for {query!r}", url=f"{self.base_url}/search")

        try:
            return SearchResult(
                icons=data.get("icons") or [],
                total=data.get("total") or 0,
                limit=data.get("limit") or (limit if limit is not None else DEFAULT_SEARCH_LIMIT),
                start=data.get("start") or 0,
            )
        except ValidationError as e:
            raise NetworkError(f"Unexpected search response for {query!r}: {e}", url=f"{self.base_url}/search") from e

    async def get_collections(self) -> Dict[str, CollectionInfo]:
        """Get available icon collections keyed by prefix."""
        data = await self._get_json("/collections")
        try:
            return {prefix: CollectionInfo.model_validate(info) for prefix, info in data.items()}
        except (AttributeError, ValidationError) as e:
            raise NetworkError(f"Unexpected collections response: {e}", url=f"{self.base_url}/collections") from e

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        timeout_s = self.timeout_ms / 1000

        async with httpx.AsyncClient(
            timeout=timeout_s, transport=self._transport, follow_redirects=True
        ) as client:
            try:
                response = await asyncio.wait_for(client.get(url, params=params), timeout=timeout_s)
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                raise FetchTimeoutError(
                    f"Request timeout: exceeded {self.timeout_ms}ms ({url})",
                    timeout_ms=self.timeout_ms,
                    url=url,
                ) from e
            except httpx.RequestError as e:
                raise NetworkError(f"Request to {url} failed: {e}", url=url) from e

        if not response.is_success:
            raise NetworkError(f"HTTP {response.status_code}: {response.reason_phrase}", url=url)

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from {url}: {e}", url=url) from e
