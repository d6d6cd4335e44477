"""Centralized exception hierarchy for the slide-gen icon engine.

Usage:
    from exceptions import ConfigError, UnknownSourceError

    raise ConfigError("Invalid icon registry: icons/registry.yaml")
    raise UnknownSourceError("Unknown icon source prefix: \"fa\"")
"""

from typing import Optional


class SlideGenError(Exception):
    """Base exception for all slide-gen errors."""
    pass


class ConfigError(SlideGenError):
    """Raised when configuration is invalid or missing.

    Fatal: raised before any icon is rendered.

    Examples:
        - Unreadable registry file
        - Registry YAML that does not match the schema
        - Unrecognized source type
        - Non-numeric timeout in the environment
    """
    pass


class IconError(SlideGenError):
    """Base class for per-icon failures.

    A batch renderer can catch this and keep processing the remaining icons.
    """
    pass


class IconSyntaxError(IconError):
    """Raised when an icon reference is not of the form "prefix:name"."""
    pass


class UnknownSourceError(IconError):
    """Raised when a reference uses a prefix no source registers."""
    pass


class IconFileNotFoundError(IconError):
    """Raised when a local SVG file is missing.

    Recoverable: callers may substitute a placeholder.
    """
    pass


class UnsupportedTypeError(IconError):
    """Raised when no renderer exists for a source type."""
    pass


class ProvenanceError(IconError):
    """Raised when the fetched-icon provenance ledger cannot be parsed."""
    pass


class NetworkError(SlideGenError):
    """Raised when a request to a remote icon service fails.

    Transient: callers may retry.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class FetchTimeoutError(NetworkError, TimeoutError):
    """Raised when a remote request exceeds its deadline."""

    def __init__(self, message: str, timeout_ms: int, url: Optional[str] = None):
        super().__init__(message, url=url)
        self.timeout_ms = timeout_ms


class NotFoundError(NetworkError):
    """Raised when the remote service answers with a non-2xx status.

    Confirmed miss: callers must not retry.
    """

    def __init__(self, message: str, reference: str, status: int, url: Optional[str] = None):
        super().__init__(message, url=url)
        self.reference = reference
        self.status = status
