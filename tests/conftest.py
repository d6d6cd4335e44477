"""
Shared pytest fixtures for slide-gen icon tests.
"""

import os
import pytest
import httpx
from pathlib import Path

DEFAULT_MARKEXPR = "smoke or (not integration and not slow)"


def pytest_addoption(parser):
    """Add --full flag to run entire test suite"""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite (including integration and slow tests)"
    )


def pytest_configure(config):
    """Configure test run based on flags"""
    if config.getoption("--full"):
        # Only clear default marker if no explicit -m flag was provided
        if config.option.markexpr == DEFAULT_MARKEXPR:
            config.option.markexpr = ""


# Project root
PROJECT_ROOT = Path(__file__).parent.parent

SAMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<path fill="currentColor" d="M12 2L2 22h20z"/></svg>'
)

REGISTRY_YAML = """
sources:
  - name: material-icons
    type: web-font
    prefix: mi
    url: "https://fonts.googleapis.com/icon?family=Material+Icons"
    render: '<span class="material-icons" style="{{ style }}">{{ name }}</span>'

  - name: health-icons
    type: svg-inline
    prefix: health
    url: "https://api.iconify.design/healthicons"

  - name: feather
    type: svg-sprite
    prefix: feather
    url: "/assets/feather-sprite.svg"

  - name: custom-icons
    type: local-svg
    prefix: custom
    path: "{custom_dir}"

aliases:
  success: "mi:check_circle"
  planning: "mi:event_note"
  doctor: "health:stethoscope"
  logo: "custom:logo"

colors:
  primary: "#1976D2"
  secondary: "#424242"
  success: "#4CAF50"

defaults:
  size: "24px"
  color: "currentColor"
"""


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_svg():
    return SAMPLE_SVG


@pytest.fixture
def custom_icons_dir(tmp_path):
    """Directory of local SVG icons containing logo.svg."""
    icons_dir = tmp_path / "custom-icons"
    icons_dir.mkdir()
    (icons_dir / "logo.svg").write_text(SAMPLE_SVG, encoding="utf-8")
    return icons_dir


@pytest.fixture
def fetched_dir(tmp_path):
    """Empty fetched-icon store."""
    path = tmp_path / "icons" / "fetched"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_registry(tmp_path):
    """Return a function that writes registry YAML and returns its path."""
    def _write(content: str, filename: str = "registry.yaml") -> Path:
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def registry_path(write_registry, custom_icons_dir):
    """Registry with one source of each type."""
    return write_registry(REGISTRY_YAML.replace("{custom_dir}", custom_icons_dir.as_posix()))


@pytest.fixture
def mock_transport():
    """
    Build an httpx.MockTransport from a handler and record the requests it saw.

    Usage:
        transport = mock_transport(lambda request: httpx.Response(200, text="<svg/>"))
        transport.requests  # list of httpx.Request
    """
    def _build(handler):
        requests = []

        async def _handle(request: httpx.Request):
            requests.append(request)
            response = handler(request)
            if hasattr(response, "__await__"):
                response = await response
            return response

        transport = httpx.MockTransport(_handle)
        transport.requests = requests
        return transport

    return _build


@pytest.fixture
def clean_icon_env(monkeypatch):
    """Remove SLIDE_GEN_* variables so config defaults apply."""
    for key in list(os.environ):
        if key.startswith("SLIDE_GEN_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
