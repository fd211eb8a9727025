"""Generic representation of a cluster resource or resource list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

CONFIGMAP_KIND = "ConfigMap"


@dataclass(frozen=True)
class K8sObject:
    """A resource as loaded from a manifest or returned by the API server.

    A *list* object carries ``items`` (possibly empty); a singular object has
    ``items`` set to ``None``.  Only ``spec`` or ``data`` is ever compared.
    """

    api_version: str
    kind: str
    name: str = ""
    namespace: str = ""
    spec: Any = None
    data: Any = None
    items: tuple[K8sObject, ...] | None = None

    @property
    def is_list(self) -> bool:
        return self.items is not None

    @property
    def payload_field(self) -> str:
        """Name of the top-level field whose contents are compared."""
        return "data" if self.kind == CONFIGMAP_KIND else "spec"

    @property
    def payload(self) -> Any:
        return self.data if self.kind == CONFIGMAP_KIND else self.spec

    @property
    def identity(self) -> str:
        """Join key between desired and live objects."""
        if not self.namespace:
            return f"{self.api_version} {self.kind} {self.name}"
        return f"{self.api_version} {self.kind} {self.namespace}/{self.name}"

    def __str__(self) -> str:
        return self.identity

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> K8sObject:
        """Decode a manifest document or API response body.

        Raises:
            ValueError: ``raw`` or its ``metadata`` is not a mapping, or ``items``
                is not a sequence.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"expected a mapping, got {type(raw).__name__}")
        metadata = raw.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ValueError(f"metadata must be a mapping, got {type(metadata).__name__}")
        items: tuple[K8sObject, ...] | None = None
        # a null items field decodes as a singular object
        raw_items = raw.get("items")
        if raw_items is not None:
            if not isinstance(raw_items, list):
                raise ValueError(f"items must be a list, got {type(raw_items).__name__}")
            items = tuple(cls.from_dict(item) for item in raw_items)
        return cls(
            api_version=str(raw.get("apiVersion") or ""),
            kind=str(raw.get("kind") or ""),
            name=str(metadata.get("name") or ""),
            namespace=str(metadata.get("namespace") or ""),
            spec=raw.get("spec"),
            data=raw.get("data"),
            items=items,
        )
