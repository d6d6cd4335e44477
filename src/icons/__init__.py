"""Icon resolution for slide generation.

This package provides:
- IconRegistryLoader: registry YAML loading and lookups
- IconResolver: name/alias -> markup for every source type
- IconFetcher: Iconify downloads into the local fetched-icon store
- IconifyApiClient: icon search and collection listing
- IconService: the above wired together from config
"""

from .schema import (
    SOURCE_TYPES,
    IconDefaults,
    IconRegistry,
    IconSource,
    IconSourceType,
)
from .registry import IconReference, IconRegistryLoader, load_registry, parse_icon_reference
from .renderers import RENDERERS, RenderOptions, process_svg
from .resolver import IconOptions, IconResolver, IconResolverOptions
from .fetcher import (
    ICON_SOURCES,
    IconFetcher,
    ParsedReference,
    get_iconify_set,
    is_external_source,
    is_valid_icon_name,
)
from .iconify_api import CollectionInfo, IconifyApiClient, SearchResult
from .service import IconService

__all__ = [
    "SOURCE_TYPES",
    "IconDefaults",
    "IconRegistry",
    "IconSource",
    "IconSourceType",
    "IconReference",
    "IconRegistryLoader",
    "load_registry",
    "parse_icon_reference",
    "RENDERERS",
    "RenderOptions",
    "process_svg",
    "IconOptions",
    "IconResolver",
    "IconResolverOptions",
    "ICON_SOURCES",
    "IconFetcher",
    "ParsedReference",
    "get_iconify_set",
    "is_external_source",
    "is_valid_icon_name",
    "CollectionInfo",
    "IconifyApiClient",
    "SearchResult",
    "IconService",
]
