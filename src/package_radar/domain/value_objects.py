"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PackageName:
    """Normalized registry package name derived from an import specifier.

    ``lodash/fp`` becomes ``lodash`` and ``@babel/core/lib/x`` becomes
    ``@babel/core``.  Relative and absolute specifiers (``./x``, ``/x``) do
    not name a registry package and are rejected by :meth:`from_specifier`.
    """

    value: str

    @classmethod
    def from_specifier(cls, specifier: str) -> PackageName | None:
        """Normalize *specifier*, or return ``None`` if it names no package."""
        spec = specifier.strip()
        if not spec or spec.startswith((".", "/")):
            return None

        parts = spec.split("/")
        if spec.startswith("@"):
            # A scope alone ("@babel" or "@babel/") is not installable.
            if len(parts) < 2 or not parts[1] or parts[0] == "@":
                return None
            return cls(value=f"{parts[0]}/{parts[1]}")
        return cls(value=parts[0])

    @property
    def is_scoped(self) -> bool:
        return self.value.startswith("@")

    def __str__(self) -> str:
        return self.value
