"""Reconciliation of desired objects against live cluster state.

Desired and live objects are joined on :func:`identity`.  A singular desired
object is fetched by name; a desired ``List`` is compared against the whole
live collection for its resource type, which also surfaces *extra* objects
that exist in the cluster but not in the defaults.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from kubedrift.diff.structural import IgnoreFilter, compute_delta, render_delta
from kubedrift.errors import NotFoundInCluster
from kubedrift.models.objects import CONFIGMAP_KIND, K8sObject
from kubedrift.models.results import DiffResult
from kubedrift.models.target import Target
from kubedrift.observability.logging import get_logger

if TYPE_CHECKING:
    from kubedrift.cluster.client import LiveStateProvider

_log = get_logger("diff.engine")


def identity(obj: K8sObject) -> str:
    """``"<apiVersion> <kind> [<namespace>/]<name>"``."""
    return obj.identity


def diff_object(desired: K8sObject, live: K8sObject, ignore: Collection[str] = ()) -> str:
    """Render the filtered delta between two objects' payloads.

    ConfigMaps compare ``data``; every other kind compares ``spec``.  An empty
    string means no difference.
    """
    if desired.kind == CONFIGMAP_KIND:
        root, ours, theirs = "data", desired.data, live.data
    else:
        root, ours, theirs = "spec", desired.spec, live.spec
    changes = compute_delta(ours, theirs, IgnoreFilter(ignore, root=root))
    return render_delta(changes, root=root)


def diff_list(
    desired_items: Sequence[K8sObject],
    live_items: Sequence[K8sObject],
    ignore: Collection[str] = (),
) -> DiffResult:
    """Match two collections by identity and classify every object.

    ``missing`` and ``changed`` follow the order of *desired_items*; ``extra``
    is sorted by identity.  If several live objects share an identity the last
    one is used.
    """
    live_by_id: dict[str, K8sObject] = {}
    for obj in live_items:
        key = identity(obj)
        if key in live_by_id:
            _log.warning("duplicate_live_identity", identity=key)
        live_by_id[key] = obj
    seen = dict.fromkeys(live_by_id, False)

    result = DiffResult()
    for desired in desired_items:
        key = identity(desired)
        live = live_by_id.get(key)
        if live is None:
            result.missing.append(key)
            continue
        seen[key] = True
        delta = diff_object(desired, live, ignore)
        if delta:
            result.changed.append(f"{key}\n{delta}")

    result.extra.extend(sorted(key for key, was_seen in seen.items() if not was_seen))
    return result


class ObjectDiffer:
    """Compares desired objects against what a live-state provider reports."""

    def __init__(self, provider: LiveStateProvider) -> None:
        self._provider = provider

    async def diff(self, target: Target, desired: K8sObject) -> DiffResult:
        """Diff *desired* (singular or list) against the cluster.

        Errors other than a missing singular object propagate to the caller.
        """
        locator = await self._provider.resolve_locator(target.api_version, target.kind)
        if desired.is_list:
            live_items = await self._provider.list(locator)
            return diff_list(desired.items or (), live_items, target.ignore)
        return await self._diff_single(locator, desired, target.ignore)

    async def _diff_single(self, locator: object, desired: K8sObject, ignore: Collection[str]) -> DiffResult:
        try:
            live = await self._provider.get(locator, desired.name, desired.namespace)
        except NotFoundInCluster:
            return DiffResult(missing=[identity(desired)])
        delta = diff_object(desired, live, ignore)
        if not delta:
            return DiffResult()
        return DiffResult(changed=[f"{identity(desired)}\n{delta}"])
