"""Live cluster state via the kubernetes-asyncio dynamic client.

The dynamic client's discovery cache maps an apiVersion/kind pair to the
resource endpoint (the *locator*), so arbitrary kinds, including CRDs, can be
read without generated API classes.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Protocol

import aiohttp

from kubedrift.errors import (
    ConfigError,
    NotFoundInCluster,
    ResourceLocatorError,
    TransportError,
)
from kubedrift.manifests.version import Version
from kubedrift.models.objects import K8sObject
from kubedrift.observability.logging import get_logger

_log = get_logger("cluster.client")

CLUSTER_VERSION_API = "config.openshift.io/v1"
CLUSTER_VERSION_KIND = "ClusterVersion"
CLUSTER_VERSION_NAME = "version"

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


class LiveStateProvider(Protocol):
    """Read-only view of live cluster objects."""

    async def resolve_locator(self, api_version: str, kind: str) -> Any:
        """Return an opaque handle addressing the collection for *kind*."""

    async def get(self, locator: Any, name: str, namespace: str = "") -> K8sObject:
        """Fetch one object.  Raises NotFoundInCluster if it does not exist."""

    async def list(self, locator: Any) -> list[K8sObject]:
        """Fetch every object of the collection, across all namespaces."""


class KubernetesLiveState:
    """LiveStateProvider backed by ``kubernetes_asyncio.dynamic.DynamicClient``."""

    def __init__(self, dynamic_client: Any) -> None:
        self._client = dynamic_client

    @classmethod
    @asynccontextmanager
    async def connect(cls, kubeconfig: Path | None = None) -> AsyncIterator[KubernetesLiveState]:
        """Load credentials, open an API client and yield a provider.

        Uses *kubeconfig* when it exists, otherwise the in-cluster service
        account.  The underlying connection pool is closed on exit.
        """
        from kubernetes_asyncio import config as k8s_config
        from kubernetes_asyncio.client import ApiClient
        from kubernetes_asyncio.dynamic import DynamicClient

        try:
            if kubeconfig is not None and Path(kubeconfig).is_file():
                await k8s_config.load_kube_config(config_file=str(kubeconfig))
                _log.info("k8s client configured from kubeconfig", kubeconfig=str(kubeconfig))
            else:
                k8s_config.load_incluster_config()
                _log.info("k8s client configured from in-cluster service account")
        except k8s_config.ConfigException as exc:
            raise ConfigError(f"could not load cluster credentials: {exc}") from exc

        async with ApiClient() as api:
            try:
                client = await DynamicClient(api)
            except _TRANSPORT_ERRORS as exc:
                raise TransportError(f"api discovery failed: {exc}") from exc
            yield cls(client)

    async def resolve_locator(self, api_version: str, kind: str) -> Any:
        from kubernetes_asyncio.dynamic.exceptions import (
            DynamicApiError,
            ResourceNotFoundError,
            ResourceNotUniqueError,
        )

        try:
            return await self._client.resources.get(api_version=api_version, kind=kind)
        except (ResourceNotFoundError, ResourceNotUniqueError) as exc:
            raise ResourceLocatorError(api_version, kind, exc) from exc
        except (DynamicApiError, *_TRANSPORT_ERRORS) as exc:
            raise TransportError(f"resolving {api_version} {kind}: {exc}") from exc

    async def get(self, locator: Any, name: str, namespace: str = "") -> K8sObject:
        from kubernetes_asyncio.dynamic.exceptions import DynamicApiError, NotFoundError

        try:
            resp = await self._client.get(locator, name=name, namespace=namespace or None)
        except NotFoundError as exc:
            raise NotFoundInCluster(getattr(locator, "kind", ""), name, namespace) from exc
        except (DynamicApiError, *_TRANSPORT_ERRORS) as exc:
            raise TransportError(f"get {name}: {exc}") from exc
        return K8sObject.from_dict(resp.to_dict())

    async def list(self, locator: Any) -> list[K8sObject]:
        from kubernetes_asyncio.dynamic.exceptions import DynamicApiError

        try:
            resp = await self._client.get(locator)
        except (DynamicApiError, *_TRANSPORT_ERRORS) as exc:
            raise TransportError(f"list {getattr(locator, 'kind', '')}: {exc}") from exc
        return list_items(resp.to_dict())

    async def cluster_version(self) -> Version:
        """Read the desired version from the OpenShift ClusterVersion object.

        Raises:
            ParseError: the reported version string is malformed.
        """
        locator = await self.resolve_locator(CLUSTER_VERSION_API, CLUSTER_VERSION_KIND)
        try:
            resp = await self._client.get(locator, name=CLUSTER_VERSION_NAME)
        except Exception as exc:
            raise TransportError(f"reading cluster version: {exc}") from exc
        raw = resp.to_dict()
        text = str(((raw.get("status") or {}).get("desired") or {}).get("version") or "")
        version = Version.parse(text)
        _log.info("cluster version detected", version=str(version))
        return version


def list_items(raw: dict[str, Any]) -> list[K8sObject]:
    """Decode a list response body into objects.

    Items in list responses omit ``apiVersion``/``kind``; they are filled in
    from the list itself (``FooList`` -> ``Foo``).
    """
    api_version = str(raw.get("apiVersion") or "")
    list_kind = str(raw.get("kind") or "")
    item_kind = list_kind.removesuffix("List")
    out = []
    for item in raw.get("items") or []:
        item = dict(item)
        item.setdefault("apiVersion", api_version)
        item.setdefault("kind", item_kind)
        out.append(K8sObject.from_dict(item))
    return out
