"""Disk caches for the icon engine.

This module provides:
- SearchCache: hashed-key TTL cache for search results
- FetchedIconStore: durable mirror of fetched SVG files
- ProvenanceLedger: source/license record kept beside the fetched icons

These caches are separated from icons/ because they are storage, not
resolution or network logic.
"""

from .search_cache import SearchCache
from .fetched_store import FetchedIconStore
from .provenance import ProvenanceLedger, ProvenanceRecord

__all__ = ["SearchCache", "FetchedIconStore", "ProvenanceLedger", "ProvenanceRecord"]
