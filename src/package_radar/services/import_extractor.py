"""Import extraction — find the registry packages a JS/TS file references.

This is textual pattern matching over the raw file, not parsing: matches
inside comments or strings are counted and unusual formatting is missed.
Each pattern is scanned independently, so malformed input simply yields
fewer matches.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from package_radar.domain.exceptions import FileAccessError
from package_radar.domain.value_objects import PackageName

logger = logging.getLogger(__name__)

_IMPORT_PATTERNS: list[re.Pattern[str]] = [
    # const x = require("pkg")
    re.compile(r"""require\(['"]([^'"]+)['"]\)"""),
    # import x from "pkg" / import { a, b } from 'pkg' / import * as x from "pkg"
    # Bindings are whitespace-separated tokens that may span lines but never
    # contain a quote or a statement boundary. Tokens are possessive and a scan
    # stops at the next "import", so long unterminated runs stay linear.
    re.compile(r"""\bimport\s++(?:(?!import\b)[^'";\s]++\s++)+?from\s*['"]([^'"]+)['"]"""),
    # await import("pkg")
    re.compile(r"""import\(['"]([^'"]+)['"]\)"""),
    # import "pkg/polyfill"
    re.compile(r"""\bimport\s*['"]([^'"]+)['"]"""),
]


def _specifiers(text: str) -> list[str]:
    found: list[str] = []
    for pattern in _IMPORT_PATTERNS:
        found.extend(match.group(1) for match in pattern.finditer(text))
    return found


def extract(text: str) -> frozenset[str]:
    """Return the distinct package names referenced in *text*."""
    packages: set[str] = set()
    for specifier in _specifiers(text):
        name = PackageName.from_specifier(specifier)
        if name is not None:
            packages.add(name.value)
    return frozenset(packages)


def read_source(path: str | Path) -> str:
    """Read a source file as UTF-8, replacing undecodable bytes."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FileAccessError(f"Unable to read {path}: {exc}") from exc


def extract_file(path: str | Path) -> frozenset[str]:
    """Read *path* and extract its package references."""
    packages = extract(read_source(path))
    logger.debug("%s references %d package(s)", path, len(packages))
    return packages
