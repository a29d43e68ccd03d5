"""Usage aggregation — fold per-file package sets into a per-package index."""

from __future__ import annotations

from collections.abc import Mapping

from package_radar.domain.entities import PackageUsage


def aggregate(
    package_imports: Mapping[str, frozenset[str]],
) -> tuple[dict[str, PackageUsage], frozenset[str]]:
    """Count how many files reference each package.

    ``files`` lists follow the iteration order of *package_imports*.  Keys
    of the returned index appear in first-seen order.
    """
    counts: dict[str, int] = {}
    files: dict[str, list[str]] = {}

    for path, packages in package_imports.items():
        for pkg in sorted(packages):
            counts[pkg] = counts.get(pkg, 0) + 1
            files.setdefault(pkg, []).append(path)

    usage = {
        pkg: PackageUsage(name=pkg, count=count, files=tuple(files[pkg]))
        for pkg, count in counts.items()
    }
    return usage, frozenset(usage)
