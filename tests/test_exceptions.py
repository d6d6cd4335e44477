"""Tests for exception hierarchy."""

import pytest

from exceptions import (
    ConfigError,
    FetchTimeoutError,
    IconError,
    IconFileNotFoundError,
    IconSyntaxError,
    NetworkError,
    NotFoundError,
    ProvenanceError,
    SlideGenError,
    UnknownSourceError,
    UnsupportedTypeError,
)


class TestExceptionHierarchy:
    """Tests for exception classes."""

    @pytest.mark.parametrize("exc_class", [
        IconSyntaxError,
        UnknownSourceError,
        IconFileNotFoundError,
        UnsupportedTypeError,
        ProvenanceError,
    ])
    def test_per_icon_errors_inherit_icon_error(self, exc_class):
        assert issubclass(exc_class, IconError)
        assert issubclass(exc_class, SlideGenError)

    def test_config_error_is_not_icon_error(self):
        assert issubclass(ConfigError, SlideGenError)
        assert not issubclass(ConfigError, IconError)

    def test_network_errors(self):
        assert issubclass(FetchTimeoutError, NetworkError)
        assert issubclass(NotFoundError, NetworkError)
        assert issubclass(FetchTimeoutError, TimeoutError)
        assert not issubclass(NotFoundError, FetchTimeoutError)

    def test_exception_has_message(self):
        err = IconSyntaxError("bad reference")

        assert str(err) == "bad reference"

    def test_network_error_attributes(self):
        timeout = FetchTimeoutError("Fetch timeout", timeout_ms=500, url="https://x.test/a.svg")
        not_found = NotFoundError("Icon not found", reference="mdi:nope", status=404)

        assert timeout.timeout_ms == 500
        assert timeout.url == "https://x.test/a.svg"
        assert not_found.reference == "mdi:nope"
        assert not_found.status == 404
        assert not_found.url is None

    def test_exceptions_can_be_caught_by_base(self):
        """All exceptions should be catchable by SlideGenError."""
        for exc in [
            ConfigError("x"),
            UnknownSourceError("x"),
            NetworkError("x"),
            FetchTimeoutError("x", timeout_ms=1),
            NotFoundError("x", reference="a:b", status=404),
        ]:
            try:
                raise exc
            except SlideGenError:
                pass  # Expected
            except Exception:
                pytest.fail(f"{type(exc).__name__} not caught by SlideGenError")
