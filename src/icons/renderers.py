"""Markup renderers, one per icon source type.

Each renderer has the signature render(source, name, options) -> markup and
is selected from RENDERERS by the source's type tag.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, NamedTuple, Optional

from jinja2 import BaseLoader, Environment

from exceptions import IconFileNotFoundError, IconSyntaxError
from icons.schema import DEFAULT_COLOR, DEFAULT_SIZE, IconSource

logger = logging.getLogger(__name__)

ENV = Environment(loader=BaseLoader(), autoescape=False)

_SVG_TAG_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)


class RenderOptions(NamedTuple):
    """Options after merging with registry defaults and palette lookup."""

    size: str = DEFAULT_SIZE
    color: str = DEFAULT_COLOR
    css_class: Optional[str] = None


def build_class_name(name: str, options: RenderOptions) -> str:
    classes = ["icon", f"icon-{name.replace('/', '-')}"]
    if options.css_class:
        classes.append(options.css_class)
    return " ".join(classes)


def build_style(options: RenderOptions) -> str:
    styles = []
    if options.size:
        styles.append(f"font-size: {options.size}")
    if options.color:
        styles.append(f"color: {options.color}")
    return "; ".join(styles)


def _set_attribute(tag: str, attr: str, value: str) -> str:
    pattern = re.compile(rf"""(\s){attr}\s*=\s*(?:"[^"]*"|'[^']*')""")
    if pattern.search(tag):
        return pattern.sub(lambda m: f'{m.group(1)}{attr}="{value}"', tag, count=1)
    return f'{tag[:4]} {attr}="{value}"{tag[4:]}'


def process_svg(svg_content: str, name: str, options: RenderOptions) -> str:
    """
    Apply class, size and color to raw SVG markup.

    class, width and height are set on the root <svg> tag only (nested
    stroke-width and the like are left alone). fill="currentColor" is
    replaced everywhere unless the color is itself currentColor.
    """
    processed = svg_content.strip()
    match = _SVG_TAG_RE.search(processed)
    if match is None:
        logger.debug(f"No <svg> root tag in markup for {name}, leaving attributes unchanged")
    else:
        tag = match.group(0)
        tag = _set_attribute(tag, "class", build_class_name(name, options))
        tag = _set_attribute(tag, "width", options.size)
        tag = _set_attribute(tag, "height", options.size)
        processed = processed[:match.start()] + tag + processed[match.end():]

    if options.color != "currentColor":
        processed = processed.replace('fill="currentColor"', f'fill="{options.color}"')

    return processed


def render_web_font(source: IconSource, name: str, options: RenderOptions) -> str:
    """Render a ligature/web-font icon through the source template or a default span."""
    style = build_style(options)
    class_name = build_class_name(name, options)

    if source.render:
        return ENV.from_string(source.render).render({
            "name": name,
            "style": style,
            "class": class_name,
            "size": options.size,
            "color": options.color,
        })

    return f'<span class="{source.name} {class_name}" style="{style}">{name}</span>'


def render_local_svg(source: IconSource, name: str, options: RenderOptions) -> str:
    """Read <path>/<name>.svg and apply options to it."""
    root = Path(source.path).resolve()
    svg_path = root / f"{name}.svg"
    if "\x00" in name or "\\" in name or not svg_path.resolve().is_relative_to(root):
        raise IconSyntaxError(f"Icon name escapes local source {source.name!r}: {name!r}")

    try:
        svg_content = svg_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise IconFileNotFoundError(f"Icon file not found: {svg_path}") from e

    return process_svg(svg_content, name, options)


def render_svg_inline(source: IconSource, name: str, options: RenderOptions) -> str:
    """Placeholder used until the icon has been fetched into the local store."""
    class_name = build_class_name(name, options)
    style = build_style(options)
    return (
        f'<span class="{class_name}" style="{style}" '
        f'data-icon-source="{source.name}" data-icon-name="{name}">[{name}]</span>'
    )


def render_svg_sprite(source: IconSource, name: str, options: RenderOptions) -> str:
    """Render an <svg><use> reference into the source's sprite sheet."""
    class_name = build_class_name(name, options)
    sprite_url = source.url or ""
    return (
        f'<svg class="{class_name}" width="{options.size}" height="{options.size}" fill="{options.color}">\n'
        f'  <use xlink:href="{sprite_url}#{name}"/>\n'
        f'</svg>'
    )


Renderer = Callable[[IconSource, str, RenderOptions], str]

RENDERERS: Dict[str, Renderer] = {
    "web-font": render_web_font,
    "local-svg": render_local_svg,
    "svg-inline": render_svg_inline,
    "svg-sprite": render_svg_sprite,
}
