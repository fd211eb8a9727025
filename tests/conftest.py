"""Shared fixtures for kubedrift tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """CLI tests configure structlog against CliRunner's streams; undo that after each test."""
    yield
    structlog.reset_defaults()
