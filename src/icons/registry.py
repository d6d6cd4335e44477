"""Icon registry loading and lookup."""

import logging
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Union

import yaml
from pydantic import ValidationError

from exceptions import ConfigError
from icons.schema import IconDefaults, IconRegistry, IconSource

logger = logging.getLogger(__name__)


class IconReference(NamedTuple):
    """Parsed "prefix:name" reference. The name may contain '/'."""

    prefix: str
    name: str


def parse_icon_reference(reference: str) -> Optional[IconReference]:
    """
    Split a reference on its first ':'.

    Returns:
        IconReference, or None if the string has no ':' delimiter

    Example:
        >>> parse_icon_reference("iconify:mdi:account")
        IconReference(prefix='iconify', name='mdi:account')
    """
    prefix, sep, name = reference.partition(":")
    if not sep:
        return None
    return IconReference(prefix, name)


def load_registry(config_path: Union[str, Path]) -> IconRegistry:
    """
    Read and validate a registry YAML file.

    Args:
        config_path: Path to the registry file

    Returns:
        A new, independent IconRegistry

    Raises:
        ConfigError: If the file is unreadable, is not valid YAML, or does not
            match the registry schema (including unknown source types)
    """
    config_path = Path(config_path)
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read icon registry {config_path}: {e}") from e

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Icon registry {config_path} is not valid YAML: {e}") from e

    if not isinstance(parsed, dict):
        raise ConfigError(f"Icon registry {config_path} must be a mapping with a 'sources' key")

    try:
        registry = IconRegistry.model_validate(parsed)
    except ValidationError as e:
        raise ConfigError(f"Invalid icon registry {config_path}:\n{e}") from e

    logger.info(
        f"Loaded icon registry {config_path}: {len(registry.sources)} sources, "
        f"{len(registry.aliases)} aliases"
    )
    return registry


class IconRegistryLoader:
    """
    Holds the current icon registry and answers lookups against it.

    Usage:
        loader = IconRegistryLoader()
        loader.load("icons/registry.yaml")
        source = loader.get_source("mi")

    Accessors return safe defaults when called before load(). Each load()
    replaces the registry wholesale; the previous value is not mutated.
    """

    def __init__(self, registry: Optional[IconRegistry] = None):
        self._registry = registry

    @property
    def registry(self) -> Optional[IconRegistry]:
        return self._registry

    def load(self, config_path: Union[str, Path]) -> IconRegistry:
        """Load registry from YAML file. Raises ConfigError on invalid input."""
        self._registry = load_registry(config_path)
        return self._registry

    def is_loaded(self) -> bool:
        return self._registry is not None

    def resolve_alias(self, name_or_alias: str) -> str:
        """
        Resolve an alias to its icon reference (single hop).

        Returns:
            The mapped reference, or the input unchanged if it is not an alias
        """
        if self._registry is None:
            return name_or_alias
        target = self._registry.alias_target(name_or_alias)
        return target if target is not None else name_or_alias

    def parse_icon_reference(self, reference: str) -> Optional[IconReference]:
        return parse_icon_reference(reference)

    def get_source(self, prefix: str) -> Optional[IconSource]:
        if self._registry is None:
            logger.warning("IconRegistryLoader.get_source() called before load()")
            return None
        return self._registry.source_for(prefix)

    def get_defaults(self) -> IconDefaults:
        if self._registry is None:
            return IconDefaults()
        return self._registry.defaults

    def get_color(self, name: str) -> Optional[str]:
        """Get color by name from the palette, None if not a palette name."""
        if self._registry is None:
            return None
        return self._registry.color_for(name)

    def get_sources(self) -> List[IconSource]:
        if self._registry is None:
            return []
        return list(self._registry.sources)

    def get_aliases(self) -> Dict[str, str]:
        if self._registry is None:
            return {}
        return dict(self._registry.aliases)
