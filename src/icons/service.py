"""Icon service: the render() and search() entry points used by slide generation."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import httpx

from caches.search_cache import SearchCache
from config import (
    get_fetch_timeout_ms,
    get_fetched_icons_dir,
    get_icon_registry_path,
    get_iconify_base_url,
    get_search_cache_dir,
    get_search_cache_ttl,
)
from exceptions import IconError, NetworkError, SlideGenError
from icons.fetcher import IconFetcher
from icons.iconify_api import CollectionInfo, IconifyApiClient, SearchResult
from icons.registry import IconRegistryLoader
from icons.resolver import IconOptions, IconResolver, IconResolverOptions

logger = logging.getLogger(__name__)


class IconService:
    """
    Wires the registry, resolver, fetcher, search client and search cache
    together. Unset arguments fall back to config (environment / .env).

    The registry is loaded in the constructor so configuration errors surface
    before anything is rendered.

    Usage:
        service = IconService()
        html = await service.render("planning", IconOptions(color="primary"))
        hits = await service.search("heart", limit=10)
    """

    def __init__(
        self,
        registry_path: Optional[Union[str, Path]] = None,
        fetched_dir: Optional[Union[str, Path]] = None,
        search_cache: Optional[SearchCache] = None,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        use_theme_variables: bool = False,
        auto_fetch: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        registry_path = registry_path or get_icon_registry_path()
        fetched_dir = fetched_dir or get_fetched_icons_dir()
        base_url = base_url or get_iconify_base_url()
        timeout_ms = timeout_ms or get_fetch_timeout_ms()

        self.loader = IconRegistryLoader()
        self.loader.load(registry_path)

        self.resolver = IconResolver(
            self.loader,
            IconResolverOptions(
                fetched_dir=fetched_dir,
                auto_fetch=auto_fetch,
                use_theme_variables=use_theme_variables,
            ),
        )
        self.fetcher = IconFetcher(
            fetched_dir=fetched_dir,
            timeout_ms=timeout_ms,
            base_url=base_url,
            transport=transport,
        )
        self.api = IconifyApiClient(base_url=base_url, timeout_ms=timeout_ms, transport=transport)
        self.search_cache = search_cache or SearchCache(get_search_cache_dir(), ttl=get_search_cache_ttl())

    async def render(self, name_or_alias: str, options: Optional[IconOptions] = None) -> str:
        return await self.resolver.render(name_or_alias, options)

    async def fetch(self, icon_ref: str) -> str:
        """Make sure an icon is in the fetched store (aliases are resolved first)."""
        return await self.fetcher.resolve(self.loader.resolve_alias(icon_ref))

    async def search(
        self,
        query: str,
        limit: Optional[int] = None,
        prefixes: Optional[List[str]] = None,
        start: Optional[int] = None
    ) -> SearchResult:
        """Search the Iconify API, reusing cached results within the TTL."""
        key = "search:" + json.dumps(
            {"query": query, "limit": limit, "prefixes": prefixes or [], "start": start},
            sort_keys=True,
        )

        async def fetch_page() -> Dict:
            result = await self.api.search(query, limit=limit, prefixes=prefixes, start=start)
            return result.model_dump()

        data = await self.search_cache.get_or_fetch(key, fetch_page)
        return SearchResult.model_validate(data)

    async def collections(self) -> Dict[str, CollectionInfo]:
        async def fetch_collections() -> Dict:
            found = await self.api.get_collections()
            return {prefix: info.model_dump() for prefix, info in found.items()}

        data = await self.search_cache.get_or_fetch("collections", fetch_collections)
        return {prefix: CollectionInfo.model_validate(info) for prefix, info in data.items()}

    async def warm(self, icon_refs: List[str]) -> Dict[str, SlideGenError]:
        """
        Fetch several icons into the local store.

        A failing icon does not stop the rest.

        Returns:
            Failures keyed by the reference as given; empty if all succeeded
        """
        failures: Dict[str, SlideGenError] = {}
        for icon_ref in icon_refs:
            try:
                await self.fetch(icon_ref)
            except (IconError, NetworkError) as e:
                logger.warning(f"Could not fetch {icon_ref}: {e}")
                failures[icon_ref] = e
        logger.info(f"Warmed {len(icon_refs) - len(failures)}/{len(icon_refs)} icons into {self.fetcher.fetched_dir}")
        return failures
