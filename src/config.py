"""Centralized configuration for slide-gen.

This module provides:
- PROJECT_ROOT and SRC_DIR paths
- Environment variable access with get_env()
- Automatic .env loading
- Icon engine settings (registry path, fetched-icon directory, API endpoint,
  timeouts, search cache)

Usage:
    from config import PROJECT_ROOT, get_env, get_fetched_icons_dir

    fetched_dir = get_fetched_icons_dir()
    registry = PROJECT_ROOT / "icons" / "registry.yaml"
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from exceptions import ConfigError

# Calculate paths once at import time
SRC_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_ICONIFY_URL = "https://api.iconify.design"
DEFAULT_FETCH_TIMEOUT_MS = 10000
DEFAULT_SEARCH_CACHE_TTL = 86400  # 24 hours


def get_env(key: str, default: Optional[str] = None) -> str:
    """Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def _get_int_env(key: str, default: int) -> int:
    raw = get_env(key, default=str(default))
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"Environment variable '{key}' must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"Environment variable '{key}' must be positive, got {value}")
    return value


def get_icon_registry_path() -> Path:
    """Get path to the icon registry YAML file."""
    return Path(get_env("SLIDE_GEN_ICON_REGISTRY", default="icons/registry.yaml"))


def get_fetched_icons_dir() -> Path:
    """Get root directory of the fetched-icon store."""
    return Path(get_env("SLIDE_GEN_FETCHED_DIR", default="icons/fetched"))


def get_iconify_base_url() -> str:
    """Get Iconify API base URL (no trailing slash)."""
    return get_env("SLIDE_GEN_ICONIFY_URL", default=DEFAULT_ICONIFY_URL).rstrip("/")


def get_fetch_timeout_ms() -> int:
    """Get network timeout in milliseconds."""
    return _get_int_env("SLIDE_GEN_FETCH_TIMEOUT_MS", DEFAULT_FETCH_TIMEOUT_MS)


def get_search_cache_dir() -> Path:
    """Get directory for cached search results."""
    return Path(get_env("SLIDE_GEN_SEARCH_CACHE_DIR", default=".cache/icon-search"))


def get_search_cache_ttl() -> int:
    """Get search cache time-to-live in seconds."""
    return _get_int_env("SLIDE_GEN_SEARCH_CACHE_TTL", DEFAULT_SEARCH_CACHE_TTL)
