"""Exception hierarchy for kubedrift.

Everything raised on purpose by this package derives from :class:`DriftError`
so the orchestration loop can downgrade per-target failures to a skip.
"""

from __future__ import annotations

from enum import StrEnum


class DriftError(Exception):
    """Base class for all kubedrift errors."""


class ParseError(DriftError, ValueError):
    """Raised when a string is not a ``major.minor.patch`` version."""

    def __init__(self, text: str, detail: str = "") -> None:
        message = f"could not parse version {text!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.text = text


class ConfigError(DriftError):
    """Raised when a required startup option is missing or invalid."""


class ManifestLoadError(DriftError):
    """Raised when a manifest or target list cannot be read or parsed."""

    def __init__(self, path: object, cause: Exception | str) -> None:
        super().__init__(f"failed to load {path}: {cause}")
        self.path = path
        self.cause = cause


class ResolutionReason(StrEnum):
    """Why a manifest could not be resolved."""

    NOT_FOUND = "NotFound"
    EXHAUSTED = "Exhausted"


class ResolutionFailure(DriftError):
    """No manifest exists for the requested version (and no usable fallback)."""

    def __init__(self, reason: ResolutionReason, manifest: str, version: object) -> None:
        if reason is ResolutionReason.NOT_FOUND:
            detail = f"manifest {manifest} not found for version {version}"
        else:
            detail = f"manifest {manifest} not found for version {version} or any fallback version"
        super().__init__(detail)
        self.reason = reason
        self.manifest = manifest
        self.version = version


class NotFoundInCluster(DriftError):
    """The requested object does not exist in the live cluster."""

    def __init__(self, kind: str, name: str, namespace: str = "") -> None:
        where = f"{namespace}/{name}" if namespace else name
        super().__init__(f"{kind} {where} not found in cluster")
        self.kind = kind
        self.name = name
        self.namespace = namespace


class ResourceLocatorError(DriftError):
    """The cluster does not serve the requested apiVersion/kind."""

    def __init__(self, api_version: str, kind: str, cause: Exception | None = None) -> None:
        message = f"no resource found for {api_version} {kind}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.api_version = api_version
        self.kind = kind


class TransportError(DriftError):
    """A call to the cluster API failed."""
