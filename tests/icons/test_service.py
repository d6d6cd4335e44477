"""Tests for IconService wiring."""

import httpx
import pytest

from caches import SearchCache
from exceptions import ConfigError, IconSyntaxError, NotFoundError
from icons.resolver import IconOptions
from icons.service import IconService

SVG = '<svg xmlns="http://www.w3.org/2000/svg"><path fill="currentColor" d="M0 0"/></svg>'


def iconify_handler(request):
    if request.url.path == "/search":
        return httpx.Response(200, json={"icons": ["mdi:heart", "ms:favorite"], "total": 2, "limit": 64, "start": 0})
    if request.url.path == "/collections":
        return httpx.Response(200, json={"mdi": {"name": "Material Design Icons", "total": 7447}})
    if request.url.path == "/healthicons/stethoscope.svg":
        return httpx.Response(200, text=SVG)
    return httpx.Response(404)


@pytest.fixture
def transport(mock_transport):
    return mock_transport(iconify_handler)


@pytest.fixture
def service(registry_path, fetched_dir, tmp_path, transport):
    return IconService(
        registry_path=registry_path,
        fetched_dir=fetched_dir,
        search_cache=SearchCache(tmp_path / "search-cache", ttl=60),
        transport=transport,
    )


@pytest.mark.unit
class TestIconService:
    """Tests for the render/search/fetch entry points."""

    def test_invalid_registry_fails_at_construction(self, write_registry, fetched_dir):
        path = write_registry("sources:\n  - {name: x, type: bitmap, prefix: x}\n")

        with pytest.raises(ConfigError):
            IconService(registry_path=path, fetched_dir=fetched_dir)

    def test_uses_config_defaults(self, registry_path, clean_icon_env, tmp_path):
        clean_icon_env.setenv("SLIDE_GEN_ICON_REGISTRY", str(registry_path))
        clean_icon_env.setenv("SLIDE_GEN_FETCHED_DIR", str(tmp_path / "store"))
        clean_icon_env.setenv("SLIDE_GEN_FETCH_TIMEOUT_MS", "2500")
        clean_icon_env.setenv("SLIDE_GEN_SEARCH_CACHE_DIR", str(tmp_path / "cache"))

        service = IconService()

        assert service.loader.is_loaded()
        assert service.fetcher.fetched_dir == tmp_path / "store"
        assert service.fetcher.timeout_ms == 2500
        assert service.api.base_url == "https://api.iconify.design"
        assert service.search_cache.directory == tmp_path / "cache"
        assert service.search_cache.ttl == 86400

    @pytest.mark.asyncio
    async def test_render(self, service):
        html = await service.render("planning", IconOptions(color="primary"))

        assert "color: #1976D2" in html

    @pytest.mark.asyncio
    async def test_fetch_then_render_inline(self, service, fetched_dir):
        before = await service.render("doctor")
        await service.fetch("doctor")
        after = await service.render("doctor", IconOptions(color="success"))

        assert "data-icon-name" in before
        assert (fetched_dir / "healthicons" / "stethoscope.svg").exists()
        assert after.startswith("<svg")
        assert 'fill="#4CAF50"' in after

    @pytest.mark.asyncio
    async def test_search_uses_cache(self, service, transport):
        first = await service.search("heart", limit=64)
        second = await service.search("heart", limit=64)
        await service.search("heart", limit=10)

        assert first == second
        assert first.icons == ["mdi:heart", "ms:favorite"]
        assert len([r for r in transport.requests if r.url.path == "/search"]) == 2

    @pytest.mark.asyncio
    async def test_collections_use_cache(self, service, transport):
        first = await service.collections()
        second = await service.collections()

        assert first["mdi"].total == 7447
        assert first == second
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_warm_reports_failures_and_continues(self, service, fetched_dir):
        failures = await service.warm(["doctor", "health:missing", "health:../etc", "ms:"])

        assert set(failures) == {"health:missing", "health:../etc", "ms:"}
        assert isinstance(failures["health:missing"], NotFoundError)
        assert isinstance(failures["health:../etc"], IconSyntaxError)
        assert (fetched_dir / "healthicons" / "stethoscope.svg").exists()
