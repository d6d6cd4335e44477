"""Pydantic models for the icon registry configuration."""

from typing import Dict, List, Literal, Optional, get_args
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

IconSourceType = Literal["web-font", "svg-inline", "svg-sprite", "local-svg"]
SOURCE_TYPES = get_args(IconSourceType)

DEFAULT_SIZE = "24px"
DEFAULT_COLOR = "currentColor"


class IconSource(BaseModel):
    """A registered rendering backend, keyed by its prefix."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: IconSourceType
    prefix: str
    url: Optional[str] = None  # Sprite sheet or font stylesheet URL
    path: Optional[str] = None  # Directory of local SVG files
    render: Optional[str] = None  # Jinja2 template for web-font markup

    @field_validator('prefix')
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Prefixes are split on ':' so they cannot contain one."""
        if not v or ":" in v:
            raise ValueError(f"Invalid source prefix: {v!r}")
        return v

    @model_validator(mode='after')
    def validate_local_path(self) -> "IconSource":
        if self.type == "local-svg" and not self.path:
            raise ValueError(f"local-svg source {self.name!r} requires a 'path'")
        return self


class IconDefaults(BaseModel):
    """Fallback size and color applied when a render call omits them."""

    model_config = ConfigDict(frozen=True)

    size: str = DEFAULT_SIZE
    color: str = DEFAULT_COLOR


class IconRegistry(BaseModel):
    """
    Validated icon registry with prefix, alias and color lookup indices.

    Instances are immutable; the indices are built once from the fields when
    the model is constructed. Loading a registry again produces a new value.
    """

    model_config = ConfigDict(frozen=True)

    sources: List[IconSource]
    aliases: Dict[str, str] = Field(default_factory=dict)
    colors: Optional[Dict[str, str]] = None
    defaults: IconDefaults = Field(default_factory=IconDefaults)

    _sources_by_prefix: Dict[str, IconSource] = PrivateAttr(default_factory=dict)
    _alias_map: Dict[str, str] = PrivateAttr(default_factory=dict)
    _color_map: Dict[str, str] = PrivateAttr(default_factory=dict)

    @field_validator('sources')
    @classmethod
    def validate_unique_prefixes(cls, v: List[IconSource]) -> List[IconSource]:
        """Each prefix may be registered by one source only."""
        seen = set()
        for source in v:
            if source.prefix in seen:
                raise ValueError(f"Duplicate source prefix: {source.prefix!r}")
            seen.add(source.prefix)
        return v

    def model_post_init(self, __context) -> None:
        self._sources_by_prefix = {source.prefix: source for source in self.sources}
        self._alias_map = dict(self.aliases)
        self._color_map = dict(self.colors or {})

    def source_for(self, prefix: str) -> Optional[IconSource]:
        return self._sources_by_prefix.get(prefix)

    def alias_target(self, name: str) -> Optional[str]:
        return self._alias_map.get(name)

    def color_for(self, name: str) -> Optional[str]:
        return self._color_map.get(name)
