"""Tests for the top-level exprcalc API."""

import pytest

import exprcalc


def test_public_entry_points() -> None:
    ast = exprcalc.parse("(1 + 2) * x")
    assert exprcalc.evaluate(ast, {"x": 3}) == 9.0
    assert exprcalc.eval_expr("1 + 2 * 3") == 7.0


def test_errors_exported() -> None:
    with pytest.raises(exprcalc.ParseError):
        exprcalc.parse("1 +")
    with pytest.raises(exprcalc.EngineError):
        exprcalc.eval_expr("x", {})


def test_version_string() -> None:
    assert isinstance(exprcalc.__version__, str)
    assert exprcalc.__version__


def test_version_matches_checkout() -> None:
    import tomllib
    from pathlib import Path

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    with pyproject.open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert exprcalc.__version__ == expected
