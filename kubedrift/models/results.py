"""Resolution and diff outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from kubedrift.models.target import Target

if TYPE_CHECKING:
    from kubedrift.manifests.version import Version


@dataclass(frozen=True)
class Resolution:
    """A manifest path that exists on disk, and the version it belongs to.

    ``notice`` is set when a fallback version was substituted.
    """

    path: Path
    version: Version
    notice: str | None = None


@dataclass
class DiffResult:
    """Drift found for one target.

    missing -- identities desired but absent from the cluster.
    extra   -- identities present in the cluster but not desired.
    changed -- ``"<identity>\\n<delta>"`` entries for matched objects that differ.
    """

    missing: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)

    @property
    def equal(self) -> bool:
        return not (self.missing or self.extra or self.changed)


@dataclass
class TargetReport:
    """Outcome of one pass of the orchestration loop."""

    target: Target
    resolution: Resolution | None = None
    result: DiffResult | None = None
    skipped: str | None = None

    @property
    def label(self) -> str:
        return self.target.label
