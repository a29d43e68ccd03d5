"""Analyze-packages use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It supports the
three ways an analysis can be requested (one file, a directory tree, an
explicit list of files) and depends only on the :class:`MetadataFetcher`,
which in turn reaches the registry through the ``RegistryClient`` port.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Sequence
from types import MappingProxyType

from package_radar.domain.entities import AnalysisReport, WalkResult
from package_radar.domain.exceptions import (
    FileAccessError,
    InvalidInputError,
    NoPackagesFoundError,
)
from package_radar.services.file_filter import SOURCE_EXTENSIONS, is_source_file
from package_radar.services.import_extractor import extract_file
from package_radar.services.metadata_fetcher import MetadataFetcher
from package_radar.services.report_assembler import assemble
from package_radar.services.tree_walker import walk
from package_radar.services.usage_aggregator import aggregate

logger = logging.getLogger(__name__)


def _require_source_file(path: str) -> str:
    full_path = os.path.abspath(path)
    if not os.path.isfile(full_path):
        raise InvalidInputError(f"File not found: {path}")
    if not is_source_file(full_path):
        raise InvalidInputError(
            f"{path} is not a JavaScript or TypeScript file "
            f"(expected one of {', '.join(SOURCE_EXTENSIONS)})"
        )
    return full_path


class AnalyzePackagesUseCase:
    """Orchestrates the source → package report pipeline.

    Parameters
    ----------
    fetcher:
        Looks up registry metadata for the packages found.
    """

    def __init__(self, fetcher: MetadataFetcher) -> None:
        self._fetcher = fetcher

    # ── Public entry points ─────────────────────────────────────────────

    async def analyze_file(self, path: str) -> AnalysisReport:
        """Analyze a single source file."""
        full_path = _require_source_file(path)
        logger.info("Analyzing file %s", full_path)

        try:
            packages = extract_file(full_path)
        except FileAccessError as exc:
            raise InvalidInputError(str(exc)) from exc

        if not packages:
            raise NoPackagesFoundError("No npm packages found in the current file")

        analysis = WalkResult(
            package_imports=MappingProxyType({full_path: packages}),
            suggested_analysis=(full_path,),
        )
        return await self._build_report(analysis)

    async def analyze_directory(self, path: str) -> AnalysisReport:
        """Analyze every eligible source file below a directory."""
        full_path = os.path.abspath(path)
        if not os.path.isdir(full_path):
            raise InvalidInputError(f"Directory not found: {path}")
        logger.info("Analyzing project %s", full_path)

        analysis = await asyncio.to_thread(walk, full_path)
        if not analysis.package_imports:
            raise NoPackagesFoundError("No npm packages found in the project")

        return await self._build_report(analysis)

    async def analyze_files(self, paths: Sequence[str]) -> AnalysisReport:
        """Analyze an explicit selection of source files."""
        if not paths:
            raise InvalidInputError("No files selected for analysis")

        full_paths = list(dict.fromkeys(_require_source_file(p) for p in paths))
        logger.info("Analyzing %d selected file(s)", len(full_paths))

        package_imports: dict[str, frozenset[str]] = {}
        for full_path in full_paths:
            try:
                packages = extract_file(full_path)
            except FileAccessError as exc:
                logger.warning("Error analyzing imports in %s: %s", full_path, exc)
                continue
            if packages:
                package_imports[full_path] = packages

        if not package_imports:
            raise NoPackagesFoundError("No npm packages found in selected files")

        analysis = WalkResult(
            package_imports=MappingProxyType(package_imports),
            suggested_analysis=tuple(package_imports),
        )
        return await self._build_report(analysis)

    # ── Pipeline ────────────────────────────────────────────────────────

    async def _build_report(self, analysis: WalkResult) -> AnalysisReport:
        usage, unique_packages = aggregate(analysis.package_imports)
        logger.info(
            "Found %d unique package(s) across %d file(s)",
            len(unique_packages),
            len(analysis.package_imports),
        )

        metadata = await self._fetcher.fetch(usage)
        return assemble(analysis, usage, metadata)
