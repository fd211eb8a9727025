"""Entry point for `python -m kubedrift`.

Usage:
    python -m kubedrift run --target targets.yaml --manifest manifests/
"""

from __future__ import annotations

from kubedrift.cli import cli

cli()
