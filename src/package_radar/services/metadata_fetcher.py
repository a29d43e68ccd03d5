"""Metadata fetcher — concurrent registry lookups with per-package isolation.

Every package is looked up independently: a failed metadata request turns
into a degraded record for that package only, and a failed download-count
request leaves the count at zero.  Once all lookups have settled, a fixed
table of well-known replacements is applied.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Iterable

from package_radar.domain.entities import PackageMetadata
from package_radar.domain.exceptions import DownloadStatsError, RegistryFetchError
from package_radar.domain.ports.registry_client import RegistryClient

logger = logging.getLogger(__name__)

ALTERNATIVES: dict[str, tuple[str, ...]] = {
    "moment": ("date-fns", "dayjs", "luxon"),
    "lodash": ("lodash-es", "ramda"),
    "underscore": ("lodash-es", "ramda"),
    "request": ("axios", "node-fetch", "got"),
    "jquery": ("cash-dom", "umbrella"),
}


def alternatives_for(name: str) -> tuple[str, ...]:
    """Return suggested replacements for *name* (empty if none are known)."""
    return ALTERNATIVES.get(name, ())


class MetadataFetcher:
    """Fetch registry metadata for a batch of packages.

    Parameters
    ----------
    client:
        Adapter that talks to the package registry.
    max_concurrency:
        Upper bound on packages being looked up at the same time.
    """

    def __init__(self, client: RegistryClient, max_concurrency: int = 10) -> None:
        self._client = client
        self._max_concurrency = max(1, max_concurrency)

    async def fetch(self, package_names: Iterable[str]) -> dict[str, PackageMetadata]:
        """Look up every package and return ``{name: metadata}``."""
        names = list(dict.fromkeys(package_names))
        sem = asyncio.Semaphore(self._max_concurrency)

        async def _fetch_bounded(name: str) -> PackageMetadata:
            async with sem:
                return await self._fetch_one(name)

        records = await asyncio.gather(*(_fetch_bounded(name) for name in names))

        degraded = sum(1 for r in records if r.is_degraded)
        logger.info(
            "Fetched metadata for %d package(s), %d failed", len(records), degraded
        )

        return {
            record.name: dataclasses.replace(
                record, alternatives=alternatives_for(record.name)
            )
            for record in records
        }

    async def _fetch_one(self, name: str) -> PackageMetadata:
        try:
            metadata = await self._client.fetch_package(name)
        except RegistryFetchError as exc:
            logger.warning("Error fetching metadata for %s: %s", name, exc)
            return PackageMetadata.degraded(name, str(exc) or type(exc).__name__)

        try:
            downloads = await self._client.fetch_weekly_downloads(name)
        except DownloadStatsError:
            logger.debug("Could not fetch download stats for %s", name, exc_info=True)
            downloads = 0

        return dataclasses.replace(metadata, name=name, weekly_downloads=downloads)
