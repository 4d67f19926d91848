"""Shared pytest fixtures for exprcalc tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory with no config environment variable set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EXPRCALC_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def write_config(isolated_config: Path) -> Callable[[str, str], Path]:
    """Write a TOML config file into the isolated directory."""

    def _write(content: str, name: str = "exprcalc.toml") -> Path:
        path = isolated_config / name
        path.write_text(content)
        return path

    return _write
