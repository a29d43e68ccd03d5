"""Tests for the analyze-packages use case (all three trigger modes)."""

from __future__ import annotations

import pytest

from conftest import write
from package_radar.domain.exceptions import InvalidInputError, NoPackagesFoundError
from package_radar.services.analyze_packages import AnalyzePackagesUseCase
from package_radar.services.metadata_fetcher import MetadataFetcher


@pytest.fixture
def use_case(fake_registry) -> AnalyzePackagesUseCase:
    return AnalyzePackagesUseCase(MetadataFetcher(fake_registry))


# ── analyze_directory ───────────────────────────────────────────────────────


class TestAnalyzeDirectory:
    async def test_usage_scenario(self, use_case, lodash_project):
        report = await use_case.analyze_directory(str(lodash_project))

        assert report.packages_found == 1
        assert report.files_analyzed == 2
        (row,) = report.packages
        assert row.usage.name == "lodash"
        assert row.usage.count == 2
        assert set(row.usage.files) == {
            str(lodash_project / "a.ts"),
            str(lodash_project / "b" / "c.js"),
        }
        assert row.metadata.weekly_downloads == 50_000_000
        assert row.metadata.alternatives == ("lodash-es", "ramda")
        assert report.suggested_analysis == ()
        assert [n.name for n in report.tree] == ["b", "a.ts"]

    async def test_only_node_modules_means_no_packages(self, use_case, tmp_path, fake_registry):
        write(tmp_path, "node_modules/foo.js", 'require("left-pad");')

        with pytest.raises(NoPackagesFoundError):
            await use_case.analyze_directory(str(tmp_path))
        assert fake_registry.package_calls == []

    async def test_missing_directory_is_invalid(self, use_case, tmp_path):
        with pytest.raises(InvalidInputError):
            await use_case.analyze_directory(str(tmp_path / "nope"))

    async def test_file_is_not_a_directory(self, use_case, tmp_path):
        path = write(tmp_path, "a.js", 'require("lodash");')
        with pytest.raises(InvalidInputError):
            await use_case.analyze_directory(str(path))

    async def test_deep_dive_files_reported(self, use_case, tmp_path):
        write(tmp_path, "big.ts", "".join(f'import m{i} from "mod-{i}";\n' for i in range(4)))
        write(tmp_path, "small.ts", 'import a from "mod-0";\n')

        report = await use_case.analyze_directory(str(tmp_path))

        assert report.suggested_analysis == (str(tmp_path / "big.ts"),)
        # Unknown to the registry, so every record is degraded but present.
        assert report.packages_found == 4
        assert all(row.metadata.is_degraded for row in report.packages)
        assert report.packages[0].usage.name == "mod-0"


# ── analyze_file ────────────────────────────────────────────────────────────


class TestAnalyzeFile:
    async def test_single_file(self, use_case, tmp_path):
        path = write(tmp_path, "app.tsx", 'import React from "react";\nimport moment from "moment";\n')

        report = await use_case.analyze_file(str(path))

        assert report.tree == ()
        assert dict(report.package_imports) == {str(path): frozenset({"react", "moment"})}
        assert report.suggested_analysis == (str(path),)
        assert {row.usage.name for row in report.packages} == {"react", "moment"}

    async def test_unsupported_extension(self, use_case, tmp_path, fake_registry):
        path = write(tmp_path, "main.py", "import requests\n")
        with pytest.raises(InvalidInputError, match="not a JavaScript or TypeScript file"):
            await use_case.analyze_file(str(path))
        assert fake_registry.package_calls == []

    async def test_missing_file(self, use_case, tmp_path):
        with pytest.raises(InvalidInputError, match="File not found"):
            await use_case.analyze_file(str(tmp_path / "gone.js"))

    async def test_no_packages(self, use_case, tmp_path):
        path = write(tmp_path, "local.js", 'const x = require("./x");\n')
        with pytest.raises(NoPackagesFoundError):
            await use_case.analyze_file(str(path))


# ── analyze_files ───────────────────────────────────────────────────────────


class TestAnalyzeFiles:
    async def test_selected_files(self, use_case, tmp_path):
        a = write(tmp_path, "a.js", 'require("lodash");')
        b = write(tmp_path, "b.js", 'require("./local");')
        c = write(tmp_path, "sub/c.ts", 'import _ from "lodash";\nimport r from "react";')

        report = await use_case.analyze_files([str(a), str(b), str(c)])

        assert report.tree == ()
        assert list(report.package_imports) == [str(a), str(c)]
        assert report.suggested_analysis == (str(a), str(c))
        lodash = next(row for row in report.packages if row.usage.name == "lodash")
        assert lodash.usage.count == 2
        assert report.packages[0].usage.name == "lodash"

    async def test_empty_selection_is_invalid(self, use_case):
        with pytest.raises(InvalidInputError):
            await use_case.analyze_files([])

    async def test_one_bad_path_rejects_whole_request(self, use_case, tmp_path, fake_registry):
        good = write(tmp_path, "a.js", 'require("lodash");')
        bad = write(tmp_path, "style.css", "body {}")

        with pytest.raises(InvalidInputError):
            await use_case.analyze_files([str(good), str(bad)])
        assert fake_registry.package_calls == []

    async def test_no_packages_in_selection(self, use_case, tmp_path):
        a = write(tmp_path, "a.js", "console.log(1);")
        with pytest.raises(NoPackagesFoundError):
            await use_case.analyze_files([str(a)])

    async def test_repeated_paths_count_once(self, use_case, tmp_path):
        a = write(tmp_path, "a.js", 'require("lodash");')
        report = await use_case.analyze_files([str(a), str(a)])
        assert report.packages[0].usage.count == 1
