"""Icon resolver: turns an icon name or alias into markup."""

import logging
from pathlib import Path
from typing import NamedTuple, Optional, Union

from caches.fetched_store import FetchedIconStore
from exceptions import IconSyntaxError, UnknownSourceError, UnsupportedTypeError
from icons.fetcher import get_iconify_set, is_valid_icon_name
from icons.registry import IconReference, IconRegistryLoader
from icons.renderers import RENDERERS, RenderOptions, process_svg
from icons.schema import IconSource

logger = logging.getLogger(__name__)

# Source types that can be served from previously fetched SVGs
FETCHABLE_TYPES = ("web-font", "svg-inline")


class IconOptions(NamedTuple):
    """Per-call rendering options. None means "use the registry default"."""

    size: Optional[str] = None
    color: Optional[str] = None
    css_class: Optional[str] = None


class IconResolverOptions(NamedTuple):
    """
    Resolver behaviour.

    fetched_dir: Root of the fetched-icon store; None disables the lookup
    auto_fetch: Let web-font icons use fetched SVGs when present
    use_theme_variables: Emit palette colors as var(--theme-<name>)
    """

    fetched_dir: Optional[Union[str, Path]] = None
    auto_fetch: bool = True
    use_theme_variables: bool = False


class IconResolver:
    """
    Renders icons from the sources registered in an IconRegistryLoader.

    Usage:
        loader = IconRegistryLoader()
        loader.load("icons/registry.yaml")
        resolver = IconResolver(loader, IconResolverOptions(fetched_dir="icons/fetched"))
        html = await resolver.render("planning", IconOptions(color="primary"))

    Rendering never touches the network. Icons fetched beforehand (see
    IconFetcher) are inlined as SVG instead of the web font.
    """

    def __init__(self, registry: IconRegistryLoader, options: Optional[IconResolverOptions] = None):
        self.registry = registry
        self.options = options or IconResolverOptions()
        self._store = FetchedIconStore(self.options.fetched_dir) if self.options.fetched_dir else None

    async def render(self, name_or_alias: str, options: Optional[IconOptions] = None) -> str:
        """
        Render an icon by name or alias.

        Raises:
            IconSyntaxError: Reference has no "prefix:" part
            UnknownSourceError: Prefix is not registered
            IconFileNotFoundError: local-svg file is missing
            UnsupportedTypeError: No renderer for the source type
        """
        resolved = self.registry.resolve_alias(name_or_alias)

        reference = self.registry.parse_icon_reference(resolved)
        if reference is None:
            raise IconSyntaxError(
                f'Invalid icon reference format: "{resolved}". Expected format: "prefix:name"'
            )

        source = self.registry.get_source(reference.prefix)
        if source is None:
            raise UnknownSourceError(f'Unknown icon source prefix: "{reference.prefix}"')

        render_options = self._merge_options(options or IconOptions())

        fetched_svg = self._read_fetched(source, reference)
        if fetched_svg is not None:
            logger.debug(f"Rendering {resolved} from fetched SVG")
            return process_svg(fetched_svg, reference.name, render_options)

        renderer = RENDERERS.get(source.type)
        if renderer is None:
            raise UnsupportedTypeError(f'Unsupported icon source type: "{source.type}"')

        logger.debug(f"Rendering {resolved} with {source.type} renderer")
        return renderer(source, reference.name, render_options)

    def resolve_color(self, color: str) -> str:
        """
        Look a color up in the palette.

        Palette names become their value, or var(--theme-<name>) in
        theme-variable mode. Anything else (hex, rgb(), currentColor) is
        returned unchanged.
        """
        palette_value = self.registry.get_color(color)
        if palette_value is None:
            return color
        if self.options.use_theme_variables:
            return f"var(--theme-{color})"
        return palette_value

    def _merge_options(self, options: IconOptions) -> RenderOptions:
        defaults = self.registry.get_defaults()
        size = options.size if options.size is not None else defaults.size
        color = options.color if options.color is not None else defaults.color
        return RenderOptions(size=size, color=self.resolve_color(color), css_class=options.css_class)

    def _read_fetched(self, source: IconSource, reference: IconReference) -> Optional[str]:
        if self._store is None or source.type not in FETCHABLE_TYPES:
            return None
        if source.type == "web-font" and not self.options.auto_fetch:
            return None
        # Ligature names such as event_note are not fetchable names
        if not is_valid_icon_name(reference.name, allow_subdirs=True):
            return None

        collection = get_iconify_set(reference.prefix)
        if not self._store.exists(collection, reference.name):
            return None
        return self._store.read(collection, reference.name)
