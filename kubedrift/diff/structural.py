"""Recursive structural diff for resource payloads.

Walks two JSON-like trees in parallel and produces one :class:`FieldDelta` per
leaf that differs.  Every node is addressed by a path of steps: mapping keys
(``str``) and sequence indices (``int``).  An optional ignore predicate is
consulted for every path before descending, so an ignored path suppresses its
whole subtree.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import Any

PathStep = str | int
FieldPath = tuple[PathStep, ...]
IgnorePredicate = Callable[[FieldPath], bool]


class _Missing:
    """Marks a side of a comparison where the key or index does not exist."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FieldDelta:
    """A single differing leaf.  Either side may be :data:`MISSING`."""

    path: FieldPath
    desired: Any
    live: Any


class IgnoreFilter:
    """Suppresses paths whose dot-joined form is one of *paths*.

    Matching is exact set membership; ``containers.0.image`` names index 0 of
    ``containers``.  When *root* is given (the payload field name, e.g.
    ``spec``), the path is also tried with that prefix so ``spec.replicas`` and
    ``replicas`` both address the same field.
    """

    def __init__(self, paths: Collection[str], root: str = "") -> None:
        self._paths = frozenset(paths)
        self._root = root

    def __call__(self, path: FieldPath) -> bool:
        if not self._paths:
            return False
        joined = ".".join(str(step) for step in path)
        if joined in self._paths:
            return True
        if self._root:
            prefixed = f"{self._root}.{joined}" if joined else self._root
            return prefixed in self._paths
        return False


def compute_delta(desired: Any, live: Any, ignore: IgnorePredicate | None = None) -> list[FieldDelta]:
    """Return the differing leaves between *desired* and *live*, in path order."""
    changes: list[FieldDelta] = []
    _diff_values(desired, live, (), changes, ignore)
    return changes


def format_path(path: FieldPath, root: str = "") -> str:
    """Human-readable path: ``spec.containers[0].image``."""
    out = root
    for step in path:
        if isinstance(step, int):
            out += f"[{step}]"
        else:
            out = f"{out}.{step}" if out else step
    return out or "<root>"


def render_delta(changes: list[FieldDelta], root: str = "") -> str:
    """Render *changes* as text; ``-`` is the desired value, ``+`` the live one."""
    blocks = []
    for change in changes:
        lines = [f"{format_path(change.path, root)}:"]
        if change.desired is not MISSING:
            lines.append(f"  - {_json_str(change.desired)}")
        if change.live is not MISSING:
            lines.append(f"  + {_json_str(change.live)}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def _json_str(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, default=str)


def _diff_values(
    desired: Any,
    live: Any,
    path: FieldPath,
    changes: list[FieldDelta],
    ignore: IgnorePredicate | None,
) -> None:
    if ignore is not None and ignore(path):
        return

    if isinstance(desired, dict) and isinstance(live, dict):
        for key in sorted(desired.keys() | live.keys(), key=str):
            _diff_values(desired.get(key, MISSING), live.get(key, MISSING), (*path, key), changes, ignore)
        return

    if isinstance(desired, list) and isinstance(live, list):
        for i in range(max(len(desired), len(live))):
            old = desired[i] if i < len(desired) else MISSING
            new = live[i] if i < len(live) else MISSING
            _diff_values(old, new, (*path, i), changes, ignore)
        return

    if desired is MISSING or live is MISSING or type(desired) is not type(live) or desired != live:
        if _same_number(desired, live):
            return
        changes.append(FieldDelta(path=path, desired=desired, live=live))


def _same_number(a: Any, b: Any) -> bool:
    """YAML and the API server may disagree on int vs float for whole numbers."""
    numeric = (int, float)
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    return isinstance(a, numeric) and isinstance(b, numeric) and a == b
