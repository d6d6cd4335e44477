"""Fetch icons from the Iconify API into the local fetched-icon store."""

import asyncio
import logging
import re
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Union

import httpx

from caches.fetched_store import FetchedIconStore
from caches.provenance import ProvenanceLedger
from config import DEFAULT_FETCH_TIMEOUT_MS, DEFAULT_ICONIFY_URL
from exceptions import FetchTimeoutError, IconSyntaxError, NetworkError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_FETCHED_DIR = "icons/fetched"
MAX_NAME_LENGTH = 100
UNKNOWN_LICENSE = "Unknown"


class IconSetInfo(NamedTuple):
    """A known external icon collection."""

    iconify_set: str
    display_name: str
    license: str


# Registered short prefix -> Iconify collection
ICON_SOURCES: Dict[str, IconSetInfo] = {
    "health": IconSetInfo("healthicons", "Health Icons", "MIT"),
    "ms": IconSetInfo("material-symbols", "Material Symbols", "Apache-2.0"),
    "hero": IconSetInfo("heroicons", "Heroicons", "MIT"),
    "mi": IconSetInfo("material-icons", "Material Icons", "Apache-2.0"),
    "mdi": IconSetInfo("mdi", "Material Design Icons", "Apache-2.0"),
}

SET_LICENSES: Dict[str, str] = {info.iconify_set: info.license for info in ICON_SOURCES.values()}

_PREFIX_RE = re.compile(r"^[a-zA-Z0-9]+$")
_NAME_RE = re.compile(r"^[a-zA-Z0-9-]+$")
_PATH_NAME_RE = re.compile(r"^[a-zA-Z0-9/-]+$")


class ParsedReference(NamedTuple):
    prefix: str
    name: str


def is_external_source(prefix: str) -> bool:
    """Check whether a prefix maps to a known Iconify collection."""
    return prefix in ICON_SOURCES


def is_valid_icon_name(name: str, allow_subdirs: bool = False) -> bool:
    """
    Validate an icon name before it is used in a URL or file path.

    Allowed: letters, digits and hyphens, plus '/' separators when
    allow_subdirs is True. Rejects empty names, names longer than 100
    characters, '..' segments and leading or trailing '/'.
    """
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    if ".." in name:
        return False
    pattern = _PATH_NAME_RE if allow_subdirs else _NAME_RE
    if not pattern.match(name):
        return False
    if allow_subdirs and (name.startswith("/") or name.endswith("/") or "//" in name):
        return False
    return True


def get_iconify_set(prefix: str) -> str:
    """Map a short prefix to its Iconify set name; unknown prefixes pass through."""
    info = ICON_SOURCES.get(prefix)
    return info.iconify_set if info else prefix


def get_license(iconify_set: str) -> str:
    return SET_LICENSES.get(iconify_set, UNKNOWN_LICENSE)


class IconFetcher:
    """
    Fetches SVG icons from the Iconify API and saves them locally.

    Saved icons land in <fetched_dir>/<iconify-set>/<name>.svg with a
    provenance entry in <fetched_dir>/_sources.yaml, so later renders can be
    served offline.

    Usage:
        fetcher = IconFetcher(fetched_dir="icons/fetched")
        svg = await fetcher.resolve("health:stethoscope")
    """

    def __init__(
        self,
        fetched_dir: Union[str, Path] = DEFAULT_FETCHED_DIR,
        save_locally: bool = True,
        timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS,
        base_url: str = DEFAULT_ICONIFY_URL,
        allow_subdirs: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            fetched_dir: Root of the fetched-icon store
            save_locally: Persist fetched SVGs and provenance (default: True)
            timeout_ms: Deadline for each network request in milliseconds
            base_url: Iconify API base URL
            allow_subdirs: Accept '/' in icon names
            transport: Optional httpx transport (used by tests)
        """
        self.fetched_dir = Path(fetched_dir)
        self.save_locally = save_locally
        self.timeout_ms = timeout_ms
        self.base_url = base_url.rstrip("/")
        self.allow_subdirs = allow_subdirs
        self.store = FetchedIconStore(self.fetched_dir)
        self.ledger = ProvenanceLedger(self.fetched_dir)
        self._transport = transport

    def parse_reference(self, icon_ref: str) -> Optional[ParsedReference]:
        """
        Parse and validate an icon reference string (e.g., "health:stethoscope").

        Returns:
            ParsedReference, or None if the prefix is not alphanumeric or the
            name fails is_valid_icon_name(). Never raises.
        """
        prefix, sep, name = icon_ref.partition(":")
        if not sep or not _PREFIX_RE.match(prefix):
            return None
        if not is_valid_icon_name(name, allow_subdirs=self.allow_subdirs):
            return None
        return ParsedReference(prefix, name)

    def _require_reference(self, icon_ref: str) -> ParsedReference:
        parsed = self.parse_reference(icon_ref)
        if parsed is None:
            raise IconSyntaxError(f"Invalid icon reference: {icon_ref!r}")
        return parsed

    def get_iconify_set(self, prefix: str) -> str:
        return get_iconify_set(prefix)

    def get_local_path(self, icon_ref: str) -> Path:
        """Raises IconSyntaxError for an invalid reference."""
        parsed = self._require_reference(icon_ref)
        return self.store.get_path(get_iconify_set(parsed.prefix), parsed.name)

    def exists_locally(self, icon_ref: str) -> bool:
        return self.get_local_path(icon_ref).is_file()

    def build_url(self, prefix: str, name: str) -> str:
        """Build the Iconify SVG URL for an icon."""
        return f"{self.base_url}/{get_iconify_set(prefix)}/{name}.svg"

    async def resolve(self, icon_ref: str) -> str:
        """Return the locally stored SVG if present, otherwise fetch it."""
        if self.exists_locally(icon_ref):
            logger.debug(f"Using fetched icon {icon_ref} from {self.fetched_dir}")
            return self.get_local_path(icon_ref).read_text(encoding="utf-8")

        return await self.fetch_and_save(icon_ref)

    async def fetch_and_save(self, icon_ref: str) -> str:
        """
        Fetch an icon and, if save_locally is set, store it with provenance.

        Raises:
            IconSyntaxError: Invalid reference
            FetchTimeoutError: No response within timeout_ms
            NotFoundError: Non-2xx response
            NetworkError: Connection or protocol failure
        """
        parsed = self._require_reference(icon_ref)
        url = self.build_url(parsed.prefix, parsed.name)
        svg = await self._fetch_svg(icon_ref, url)

        if self.save_locally:
            iconify_set = get_iconify_set(parsed.prefix)
            # a corrupt ledger must fail before the SVG lands in the store
            self.ledger.read()
            self.store.write(iconify_set, parsed.name, svg)
            self.ledger.record(iconify_set, parsed.name, url, get_license(iconify_set))
            logger.info(f"✓ Fetched {icon_ref} → {self.store.get_path(iconify_set, parsed.name)}")

        return svg

    async def _fetch_svg(self, icon_ref: str, url: str) -> str:
        timeout_s = self.timeout_ms / 1000
        logger.debug(f"GET {url} (timeout {self.timeout_ms}ms)")

        async with httpx.AsyncClient(
            timeout=timeout_s, transport=self._transport, follow_redirects=True
        ) as client:
            try:
                # wait_for cancels the request task, so the connection is aborted
                response = await asyncio.wait_for(client.get(url), timeout=timeout_s)
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                raise FetchTimeoutError(
                    f"Fetch timeout: {icon_ref} exceeded {self.timeout_ms}ms",
                    timeout_ms=self.timeout_ms,
                    url=url,
                ) from e
            except httpx.RequestError as e:
                raise NetworkError(f"Failed to fetch {icon_ref} from {url}: {e}", url=url) from e

        if not response.is_success:
            raise NotFoundError(
                f"Icon not found: {icon_ref} (HTTP {response.status_code})",
                reference=icon_ref,
                status=response.status_code,
                url=url,
            )

        return response.text
