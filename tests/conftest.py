"""Shared test fixtures for PackageRadar tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from package_radar.domain.entities import PackageMetadata
from package_radar.domain.exceptions import DownloadStatsError, RegistryFetchError


class FakeRegistryClient:
    """In-memory ``RegistryClient`` recording every call it receives."""

    def __init__(
        self,
        packages: dict[str, PackageMetadata] | None = None,
        downloads: dict[str, int] | None = None,
    ) -> None:
        self.packages = packages or {}
        self.downloads = downloads or {}
        self.package_calls: list[str] = []
        self.download_calls: list[str] = []

    async def fetch_package(self, name: str) -> PackageMetadata:
        self.package_calls.append(name)
        if name not in self.packages:
            raise RegistryFetchError(f"Package not found in registry: {name}")
        return self.packages[name]

    async def fetch_weekly_downloads(self, name: str) -> int:
        self.download_calls.append(name)
        if name not in self.downloads:
            raise DownloadStatsError(f"no stats for {name}")
        return self.downloads[name]


@pytest.fixture
def fake_registry() -> FakeRegistryClient:
    return FakeRegistryClient(
        packages={
            "lodash": PackageMetadata(name="lodash", version="4.17.21", license="MIT"),
            "moment": PackageMetadata(name="moment", version="2.30.1", license="MIT"),
            "react": PackageMetadata(name="react", version="18.3.1", license="MIT"),
        },
        downloads={"lodash": 50_000_000, "react": 25_000_000},
    )


def write(root: Path, relative: str, content: str) -> Path:
    """Create *relative* below *root* (with parents) and return its path."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def lodash_project(tmp_path: Path) -> Path:
    """``a.ts`` and ``b/c.js`` both using lodash; ``b/c.js`` also imports a local module."""
    write(tmp_path, "a.ts", 'import "lodash";\n')
    write(tmp_path, "b/c.js", 'const fp = require("lodash/fp");\nconst local = require("./local");\n')
    return tmp_path
