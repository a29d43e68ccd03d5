"""Tree walker — scan a directory tree for package references.

The walk is depth-first and synchronous.  Each recursive call returns its
own immutable :class:`WalkResult`; the parent merges the child results
explicitly instead of sharing an accumulator.
"""

from __future__ import annotations

import logging
import os
from types import MappingProxyType

from package_radar.domain.entities import NodeType, TreeNode, WalkResult
from package_radar.domain.exceptions import FileAccessError
from package_radar.services.file_filter import is_source_file, should_skip_dir
from package_radar.services.import_extractor import extract_file

logger = logging.getLogger(__name__)

# Files referencing more distinct packages than this are flagged for review.
DEEP_DIVE_THRESHOLD = 3


def _list_entries(path: str) -> tuple[list[str], list[str]]:
    """Return (directories, source files) under *path* in listing order."""
    directories: list[str] = []
    files: list[str] = []

    with os.scandir(path) as entries:
        for entry in entries:
            try:
                # Symlinked directories are not followed, so link cycles cannot recurse.
                if entry.is_dir(follow_symlinks=False):
                    if not should_skip_dir(entry.name):
                        directories.append(entry.name)
                elif is_source_file(entry.name):
                    files.append(entry.name)
            except OSError as exc:
                logger.warning("Unable to access %s: %s", entry.path, exc)

    return directories, files


def walk(root: str | os.PathLike[str]) -> WalkResult:
    """Scan *root* recursively and return its tree and package references.

    An unreadable or missing *root* yields an empty result.
    """
    root_path = os.path.abspath(os.fspath(root))
    try:
        directories, files = _list_entries(root_path)
    except OSError as exc:
        logger.warning("Unable to list %s: %s", root_path, exc)
        return WalkResult()

    nodes: list[TreeNode] = []
    package_imports: dict[str, frozenset[str]] = {}
    suggested: list[str] = []

    for name in directories:
        full_path = os.path.join(root_path, name)
        sub = walk(full_path)
        nodes.append(
            TreeNode(type=NodeType.DIRECTORY, name=name, path=full_path, children=sub.tree)
        )
        package_imports.update(sub.package_imports)
        suggested.extend(sub.suggested_analysis)

    for name in files:
        full_path = os.path.join(root_path, name)
        nodes.append(TreeNode(type=NodeType.FILE, name=name, path=full_path))

        try:
            packages = extract_file(full_path)
        except FileAccessError as exc:
            logger.warning("Error analyzing imports in %s: %s", full_path, exc)
            continue

        if packages:
            package_imports[full_path] = packages
            if len(packages) > DEEP_DIVE_THRESHOLD:
                suggested.append(full_path)

    return WalkResult(
        tree=tuple(nodes),
        package_imports=MappingProxyType(package_imports),
        suggested_analysis=tuple(suggested),
    )
