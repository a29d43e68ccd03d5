"""Domain exception hierarchy.

Errors raised deep in the pipeline are caught at the narrowest scope that
still lets the scan make progress (per file, per package).  Only
:class:`InvalidInputError` and :class:`NoPackagesFoundError` reach the
interface layer, which translates them for the caller.
"""

from __future__ import annotations


class PackageRadarError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidInputError(PackageRadarError):
    """The analysis target does not exist or is not a supported source file."""


# ── Filesystem errors ───────────────────────────────────────────────────────


class FileAccessError(PackageRadarError):
    """A file or directory could not be read during traversal."""


# ── Registry errors ─────────────────────────────────────────────────────────


class RegistryFetchError(PackageRadarError):
    """The primary registry metadata request failed for a package."""


class DownloadStatsError(PackageRadarError):
    """The weekly download-count request failed for a package."""


# ── Outcomes ────────────────────────────────────────────────────────────────


class NoPackagesFoundError(PackageRadarError):
    """The scan finished without finding any registry package references.

    Not a failure: callers report it as an empty result.
    """
