"""Durable store of SVG icons fetched from remote collections."""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class FetchedIconStore:
    """
    Local mirror of fetched SVG files laid out as <root>/<collection>/<name>.svg.

    Entries never expire; the store exists so that generated slides can be
    rebuilt offline with the same artwork. Names may contain '/' to address
    subdirectories. Callers are expected to validate names before use.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def get_path(self, collection: str, name: str) -> Path:
        return self.root / collection / f"{name}.svg"

    def exists(self, collection: str, name: str) -> bool:
        return self.get_path(collection, name).is_file()

    def read(self, collection: str, name: str) -> str:
        """Read a stored SVG. Raises FileNotFoundError when absent."""
        return self.get_path(collection, name).read_text(encoding="utf-8")

    def write(self, collection: str, name: str, svg: str) -> Path:
        """Write an SVG, creating parent directories. Returns the file path."""
        path = self.get_path(collection, name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding="utf-8")
        logger.debug(f"Stored fetched icon {collection}/{name}.svg")
        return path
