"""Port: package registry client — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from package_radar.domain.entities import PackageMetadata


class RegistryClient(Protocol):
    """Abstract contract for looking up packages in a public registry."""

    async def fetch_package(self, name: str) -> PackageMetadata:
        """Return metadata for the latest version of *name*.

        Raises :class:`~package_radar.domain.exceptions.RegistryFetchError`
        when the lookup fails.
        """
        ...

    async def fetch_weekly_downloads(self, name: str) -> int:
        """Return last week's download count for *name*.

        Raises :class:`~package_radar.domain.exceptions.DownloadStatsError`
        when the lookup fails.
        """
        ...
