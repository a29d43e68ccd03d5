"""File filtering — decide which directories to descend into and which files to scan."""

from __future__ import annotations

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
    }
)

# Exact, case-sensitive suffixes: "App.JS" is not scanned.
SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")


def should_skip_dir(name: str) -> bool:
    """Return *True* if a directory called *name* must not be traversed."""
    return name in SKIP_DIRS or name.startswith(".")


def is_source_file(name: str) -> bool:
    """Return *True* if *name* has one of the scanned source extensions."""
    return name.endswith(SOURCE_EXTENSIONS)
