"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

UNKNOWN_LICENSE = "Unknown"
FETCH_FAILED_DESCRIPTION = "Could not fetch package data"


class NodeType(str, Enum):
    """Kind of entry in the scanned project tree."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class TreeNode:
    """A directory or file visited by the tree walker."""

    type: NodeType
    name: str
    path: str
    children: tuple[TreeNode, ...] = ()


@dataclass(frozen=True, slots=True)
class FileAnalysis:
    """The distinct packages referenced by one source file."""

    path: str
    packages: frozenset[str]


@dataclass(frozen=True, slots=True)
class WalkResult:
    """Everything the tree walker learned about one directory subtree."""

    tree: tuple[TreeNode, ...] = ()
    package_imports: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    suggested_analysis: tuple[str, ...] = ()

    @property
    def file_analyses(self) -> list[FileAnalysis]:
        return [FileAnalysis(path, pkgs) for path, pkgs in self.package_imports.items()]


@dataclass(frozen=True, slots=True)
class PackageUsage:
    """How many files reference a package, and which ones."""

    name: str
    count: int
    files: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PackageMetadata:
    """Registry metadata for one package.

    A *degraded* record (``error`` set) stands in for a package whose
    registry lookup failed: only ``name``, ``description`` and ``error`` are
    meaningful and ``version`` is empty.
    """

    name: str
    description: str = ""
    version: str = ""
    license: str = UNKNOWN_LICENSE
    homepage: str = ""
    repository: str = ""
    maintainers: int = 0
    last_published: str = ""
    dependencies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    weekly_downloads: int = 0
    alternatives: tuple[str, ...] = ()
    error: str | None = None

    @classmethod
    def degraded(cls, name: str, error: str) -> PackageMetadata:
        return cls(name=name, description=FETCH_FAILED_DESCRIPTION, version="", error=error)

    @property
    def is_degraded(self) -> bool:
        return self.error is not None


@dataclass(frozen=True, slots=True)
class PackageReport:
    """One row of the final report: usage joined with metadata."""

    usage: PackageUsage
    metadata: PackageMetadata


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """The final structured output returned to the caller."""

    tree: tuple[TreeNode, ...]
    package_imports: Mapping[str, frozenset[str]]
    suggested_analysis: tuple[str, ...]
    usage: Mapping[str, PackageUsage]
    packages: tuple[PackageReport, ...]

    @property
    def files_analyzed(self) -> int:
        return len(self.package_imports)

    @property
    def packages_found(self) -> int:
        return len(self.usage)
