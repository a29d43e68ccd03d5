"""npm registry adapter — implements the RegistryClient port."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from package_radar.domain.entities import UNKNOWN_LICENSE, PackageMetadata
from package_radar.domain.exceptions import DownloadStatsError, RegistryFetchError

logger = logging.getLogger(__name__)

_REGISTRY_URL = "https://registry.npmjs.org"
_DOWNLOADS_URL = "https://api.npmjs.org/downloads/point/last-week"
_USER_AGENT = "package-radar/1.0"


def _encode_name(name: str) -> str:
    """Percent-encode the scope separator: ``@babel/core`` → ``@babel%2Fcore``."""
    return quote(name, safe="@")


def _license_text(raw: Any) -> str:
    # Old packuments carry {"type": "MIT", "url": ...} instead of a string.
    if isinstance(raw, dict):
        raw = raw.get("type")
    return raw if isinstance(raw, str) and raw else UNKNOWN_LICENSE


def _mapping(raw: Any) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _text(raw: Any) -> str:
    return raw if isinstance(raw, str) else ""


def _parse_packument(name: str, data: dict[str, Any]) -> PackageMetadata:
    """Map a packument onto ``PackageMetadata``.

    Registry mirrors and hand-published packages do not always follow the
    documented shape, so every nested field is type-checked and anything
    unexpected falls back to its empty default.
    """
    latest = _text(_mapping(data.get("dist-tags")).get("latest"))
    time = _mapping(data.get("time"))
    version_info = _mapping(_mapping(data.get("versions")).get(latest)) if latest else {}
    maintainers = data.get("maintainers")
    dependencies = {
        dep: spec
        for dep, spec in _mapping(version_info.get("dependencies")).items()
        if isinstance(spec, str)
    }

    return PackageMetadata(
        name=name,
        description=_text(data.get("description")),
        version=latest,
        license=_license_text(data.get("license")),
        homepage=_text(data.get("homepage")),
        repository=_text(_mapping(data.get("repository")).get("url")),
        maintainers=len(maintainers) if isinstance(maintainers, list) else 0,
        last_published=_text(time.get(latest)) if latest else "",
        dependencies=dependencies,
    )


class NpmRegistryAdapter:
    """Concrete ``RegistryClient`` backed by the public npm HTTP APIs."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        registry_url: str = _REGISTRY_URL,
        downloads_url: str = _DOWNLOADS_URL,
    ) -> None:
        self._client = client
        self._registry_url = registry_url.rstrip("/")
        self._downloads_url = downloads_url.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        }

    async def fetch_package(self, name: str) -> PackageMetadata:
        """GET {registry}/{name} → PackageMetadata for the ``latest`` tag."""
        url = f"{self._registry_url}/{_encode_name(name)}"
        try:
            resp = await self._client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise RegistryFetchError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 404:
            raise RegistryFetchError(f"Package not found in registry: {name}")
        if resp.status_code != 200:
            raise RegistryFetchError(
                f"Registry returned HTTP {resp.status_code} for {name}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise RegistryFetchError(f"Malformed registry response for {name}: {exc}") from exc
        if not isinstance(data, dict):
            raise RegistryFetchError(f"Malformed registry response for {name}")

        return _parse_packument(name, data)

    async def fetch_weekly_downloads(self, name: str) -> int:
        """GET {downloads}/{name} → last week's download count."""
        url = f"{self._downloads_url}/{_encode_name(name)}"
        try:
            resp = await self._client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise DownloadStatsError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code != 200:
            raise DownloadStatsError(
                f"Download API returned HTTP {resp.status_code} for {name}"
            )

        try:
            downloads = resp.json().get("downloads")
        except (ValueError, AttributeError) as exc:
            raise DownloadStatsError(f"Malformed download stats for {name}") from exc

        # bool is an int subclass; a JSON true is not a download count.
        if isinstance(downloads, bool) or not isinstance(downloads, int):
            return 0
        return downloads
