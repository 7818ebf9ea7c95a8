"""Shared pytest fixtures for walidator tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated working directory with no walidator.toml above it.

    Clears ``WALIDATOR_*`` env vars so ambient configuration never leaks in.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("WALIDATOR_CONFIG", raising=False)
    for name in ("WALIDATOR_VERBOSE", "WALIDATOR_JSON_OUTPUT", "WALIDATOR_QUIET"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def write_config(project_root: Path):
    """Write a walidator.toml into the isolated project root."""

    def _write(content: str) -> Path:
        path = project_root / "walidator.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo handler and context changes made by the logging setup during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()
