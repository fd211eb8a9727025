"""Configuration loading from CLI values and environment variables.

Explicit values (normally from click options) win; unset values fall back to
``KUBEDRIFT_*`` environment variables, then to defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

from kubedrift.errors import ConfigError, ParseError
from kubedrift.manifests.version import Version
from kubedrift.models.config import DriftConfig, LogConfig

_LOG_LEVELS = {"debug", "info", "warning", "error"}
_LOG_FORMATS = {"json", "console"}


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEDRIFT_{key}", default)


def _env_bool(key: str, default: bool) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _pick(value: str | None, key: str, default: str = "") -> str:
    if value is not None and value != "":
        return value
    return _env(key, default)


def _validate_choice(name: str, value: str, valid: set[str]) -> str:
    if value.lower() not in valid:
        raise ConfigError(f"Invalid {name}: {value}. Must be one of {sorted(valid)}")
    return value.lower()


def default_kubeconfig() -> Path | None:
    try:
        return Path.home() / ".kube" / "config"
    except RuntimeError:
        return None


def load_config(
    target: str | None = None,
    manifest: str | None = None,
    kubeconfig: str | None = None,
    cluster_version: str | None = None,
    fallback: bool | None = None,
    color: bool | None = None,
    log_level: str | None = None,
    log_format: str | None = None,
) -> DriftConfig:
    """Build the run configuration.

    Raises:
        ConfigError: a required option is missing, or a value is invalid
            (including an unparseable cluster version).
    """
    target_path = _pick(target, "TARGET")
    if not target_path:
        raise ConfigError("--target option is required")
    manifest_dir = _pick(manifest, "MANIFEST")
    if not manifest_dir:
        raise ConfigError("--manifest option is required")

    kubeconfig_path = _pick(kubeconfig, "KUBECONFIG") or os.environ.get("KUBECONFIG", "").split(os.pathsep)[0]
    version_text = _pick(cluster_version, "CLUSTER_VERSION")
    parsed_version = None
    if version_text:
        try:
            parsed_version = Version.parse(version_text)
        except ParseError as exc:
            raise ConfigError(f"couldn't parse cluster version: {exc}") from exc

    return DriftConfig(
        target_path=Path(target_path),
        manifest_dir=Path(manifest_dir),
        kubeconfig=Path(kubeconfig_path).expanduser() if kubeconfig_path else default_kubeconfig(),
        cluster_version=parsed_version,
        fallback=fallback if fallback is not None else _env_bool("FALLBACK", True),
        color=color if color is not None else _env_bool("COLOR", True),
        log=load_log_config(log_level, log_format),
    )


def load_log_config(level: str | None = None, fmt: str | None = None) -> LogConfig:
    """Resolve logging options.  Raises ConfigError on unknown values."""
    return LogConfig(
        level=_validate_choice("log level", _pick(level, "LOG_LEVEL", "warning"), _LOG_LEVELS),
        format=_validate_choice("log format", _pick(fmt, "LOG_FORMAT", "console"), _LOG_FORMATS),
    )
