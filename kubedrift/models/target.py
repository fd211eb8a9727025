"""Target list entries."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Target:
    """One entry of the target list: which resource to check and against which manifest.

    ``manifest`` is relative to a version directory under the manifest root.
    ``ignore`` holds dot-separated field paths excluded from comparison.
    """

    api_version: str
    kind: str
    manifest: str
    ignore: frozenset[str] = field(default_factory=frozenset)

    @property
    def label(self) -> str:
        """Heading printed above this target's result block."""
        return f"# {posixpath.basename(self.manifest)}"

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Target:
        """Build a Target from one decoded target-list entry.

        Raises:
            ValueError: a required key is missing or has the wrong type.
        """
        missing = [key for key in ("apiVersion", "kind", "manifest") if not raw.get(key)]
        if missing:
            raise ValueError(f"target entry is missing {', '.join(missing)}: {raw!r}")
        ignore = raw.get("ignore") or []
        if not isinstance(ignore, list):
            raise ValueError(f"target ignore must be a list, got {type(ignore).__name__}")
        return cls(
            api_version=str(raw["apiVersion"]),
            kind=str(raw["kind"]),
            manifest=str(raw["manifest"]),
            ignore=frozenset(str(path) for path in ignore),
        )
