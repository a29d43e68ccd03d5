"""Report assembler — join usage counts with registry metadata."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from package_radar.domain.entities import (
    AnalysisReport,
    PackageMetadata,
    PackageReport,
    PackageUsage,
    WalkResult,
)

NO_METADATA_DESCRIPTION = "No metadata available"


def _placeholder(name: str) -> PackageMetadata:
    return PackageMetadata(name=name, description=NO_METADATA_DESCRIPTION, version="Unknown")


def assemble(
    analysis: WalkResult,
    usage: Mapping[str, PackageUsage],
    metadata: Mapping[str, PackageMetadata],
) -> AnalysisReport:
    """Build the final report, most-used packages first.

    Ties keep the insertion order of *usage*.
    """
    ranked = sorted(usage.values(), key=lambda u: -u.count)
    packages = tuple(
        PackageReport(usage=u, metadata=metadata.get(u.name) or _placeholder(u.name))
        for u in ranked
    )
    return AnalysisReport(
        tree=analysis.tree,
        package_imports=analysis.package_imports,
        suggested_analysis=analysis.suggested_analysis,
        usage=MappingProxyType(dict(usage)),
        packages=packages,
    )
