"""Diff engine: identity matching and filtered structural deltas.

Submodules:
    structural -- Recursive payload diff with exact ignore-path filtering.
    engine     -- diff_object / diff_list and the provider-backed ObjectDiffer.
"""

from kubedrift.diff.engine import ObjectDiffer, diff_list, diff_object, identity
from kubedrift.diff.structural import FieldDelta, IgnoreFilter, compute_delta, render_delta

__all__ = [
    "FieldDelta",
    "IgnoreFilter",
    "ObjectDiffer",
    "compute_delta",
    "diff_list",
    "diff_object",
    "identity",
    "render_delta",
]
