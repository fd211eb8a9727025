"""Cluster version values.

A version is ``major.minor.patch`` followed by an arbitrary suffix such as
``-rc.1`` or ``+build.7``.  The suffix is kept verbatim for display but never
takes part in ordering: ``4.12.3-rc1`` and ``4.12.3-rc2`` compare equal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

from kubedrift.errors import ParseError

_RE_VERSION = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)(.*)", re.DOTALL)

_UINT32_MAX = 2**32 - 1


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Parsed ``major.minor.patch[suffix]`` version."""

    major: int
    minor: int
    patch: int
    suffix: str = field(default="")

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse *text*, ignoring surrounding whitespace.

        Raises:
            ParseError: no numeric ``x.y.z`` prefix, or a component exceeds
                the unsigned 32-bit range.
        """
        match = _RE_VERSION.match(text.strip())
        if match is None:
            raise ParseError(text)
        parts = []
        for raw in match.group(1, 2, 3):
            digits = raw.lstrip("0") or "0"
            if len(digits) > 10 or int(digits) > _UINT32_MAX:
                raise ParseError(text, f"component {digits[:16]} out of range")
            parts.append(int(digits))
        return cls(parts[0], parts[1], parts[2], match.group(4))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.triple == other.triple

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.triple < other.triple

    def __hash__(self) -> int:
        return hash(self.triple)


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as *a* is older than, equal to, or newer than *b*."""
    if a.triple < b.triple:
        return -1
    if a.triple > b.triple:
        return 1
    return 0
