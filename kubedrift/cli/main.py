"""kubedrift command-line interface.

Commands:
    run      -- compare default manifests against the live cluster.
    compare  -- compare two manifest files offline.
    versions -- list manifest versions and the fallback order for a version.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from kubedrift.cluster.client import KubernetesLiveState
from kubedrift.config import load_config, load_log_config
from kubedrift.diff.engine import ObjectDiffer, diff_list, diff_object, identity
from kubedrift.errors import ConfigError, DriftError
from kubedrift.manifests.loader import load_object, load_targets
from kubedrift.manifests.resolver import fallback_priority
from kubedrift.manifests.scanner import scan_versions
from kubedrift.manifests.version import Version
from kubedrift.models.config import DriftConfig
from kubedrift.models.objects import K8sObject
from kubedrift.models.results import DiffResult, TargetReport
from kubedrift.observability.logging import get_logger, setup_logging
from kubedrift.report import OutputFormatter
from kubedrift.runner import run_targets


def _fatal(exc: Exception) -> SystemExit:
    get_logger("cli").critical("fatal startup error", error=str(exc))
    return SystemExit(1)


@click.group()
@click.version_option(package_name="kubedrift")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level for stderr diagnostics [env: KUBEDRIFT_LOG_LEVEL].",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"], case_sensitive=False),
    default=None,
    help="Log renderer [env: KUBEDRIFT_LOG_FORMAT].",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """Report drift between default manifests and a live cluster."""
    try:
        log = load_log_config(log_level, log_format)
    except ConfigError as exc:
        raise click.BadParameter(str(exc)) from exc
    setup_logging(log.level, log.format)
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log.level
    ctx.obj["log_format"] = log.format


@cli.command()
@click.option("--target", "target", default=None, help="Path to the target list YAML [env: KUBEDRIFT_TARGET].")
@click.option(
    "--manifest",
    "manifest",
    default=None,
    help="Directory of per-version default manifests [env: KUBEDRIFT_MANIFEST].",
)
@click.option("--kubeconfig", default=None, help="Path to the kubeconfig file (default ~/.kube/config).")
@click.option("--cluster-version", default=None, help="Cluster version; detected from the cluster when omitted.")
@click.option(
    "--fallback/--no-fallback",
    default=None,
    help="Use the nearest available version when the exact one has no manifest (default on).",
)
@click.option("--color/--no-color", default=None, help="Colorize output (default on).")
@click.pass_context
def run(
    ctx: click.Context,
    target: str | None,
    manifest: str | None,
    kubeconfig: str | None,
    cluster_version: str | None,
    fallback: bool | None,
    color: bool | None,
) -> None:
    """Compare default manifests against the live cluster."""
    try:
        config = load_config(
            target=target,
            manifest=manifest,
            kubeconfig=kubeconfig,
            cluster_version=cluster_version,
            fallback=fallback,
            color=color,
            log_level=ctx.obj.get("log_level"),
            log_format=ctx.obj.get("log_format"),
        )
    except ConfigError as exc:
        raise _fatal(exc) from exc

    formatter = OutputFormatter(color=config.color)
    try:
        asyncio.run(_run(config, formatter))
    except DriftError as exc:
        raise _fatal(exc) from exc


async def _run(config: DriftConfig, formatter: OutputFormatter) -> list[TargetReport]:
    targets = load_targets(config.target_path)
    if not targets:
        return []

    async with KubernetesLiveState.connect(config.kubeconfig) as provider:
        version = config.cluster_version or await provider.cluster_version()
        get_logger("cli").info("checking targets", version=str(version), targets=len(targets))
        return await run_targets(
            targets,
            manifest_root=config.manifest_dir,
            version=version,
            fallback=config.fallback,
            differ=ObjectDiffer(provider),
            formatter=formatter,
        )


@cli.command()
@click.argument("desired", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("live", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--ignore", "ignore", multiple=True, help="Dot-separated field path to ignore (repeatable).")
@click.option("--color/--no-color", default=True, help="Colorize output.")
def compare(desired: Path, live: Path, ignore: tuple[str, ...], color: bool) -> None:
    """Compare two manifest files without contacting a cluster."""
    try:
        ours = load_object(desired)
        theirs = load_object(live)
    except DriftError as exc:
        raise click.ClickException(str(exc)) from exc
    OutputFormatter(color=color).result(compare_objects(ours, theirs, ignore))


def compare_objects(desired: K8sObject, live: K8sObject, ignore: tuple[str, ...] = ()) -> DiffResult:
    """Diff two loaded manifests; a singular side is treated as a one-item list."""
    if not desired.is_list and not live.is_list:
        delta = diff_object(desired, live, ignore)
        return DiffResult(changed=[f"{identity(desired)}\n{delta}"] if delta else [])
    desired_items = desired.items if desired.is_list else (desired,)
    live_items = live.items if live.is_list else (live,)
    return diff_list(desired_items or (), live_items or (), ignore)


@cli.command()
@click.option(
    "--manifest",
    "manifest",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of per-version default manifests.",
)
@click.option("--cluster-version", default=None, help="Show the fallback order for this version.")
def versions(manifest: Path, cluster_version: str | None) -> None:
    """List available manifest versions, oldest first."""
    available = scan_versions(manifest)
    if cluster_version is None:
        for version in available:
            click.echo(str(version))
        return
    try:
        target = Version.parse(cluster_version)
    except DriftError as exc:
        raise click.BadParameter(str(exc), param_hint="--cluster-version") from exc
    for version in fallback_priority(target, available):
        marker = "*" if version == target else " "
        click.echo(f"{marker} {version}")
