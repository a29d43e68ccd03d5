"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from package_radar.infrastructure.config import Settings, get_settings
from package_radar.infrastructure.npm_registry_adapter import NpmRegistryAdapter
from package_radar.services.analyze_packages import AnalyzePackagesUseCase
from package_radar.services.metadata_fetcher import MetadataFetcher

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds)
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


def build_use_case(client: httpx.AsyncClient, settings: Settings) -> AnalyzePackagesUseCase:
    """Wire the npm adapter and fetcher around an existing HTTP client."""
    registry = NpmRegistryAdapter(
        client=client,
        registry_url=settings.registry_url,
        downloads_url=settings.downloads_url,
    )
    fetcher = MetadataFetcher(registry, max_concurrency=settings.max_concurrent_requests)
    return AnalyzePackagesUseCase(fetcher)


def get_use_case() -> AnalyzePackagesUseCase:
    """Build the use-case with injected adapters."""
    assert _http_client is not None, "startup() was not called"
    return build_use_case(_http_client, get_settings())
