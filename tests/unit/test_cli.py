"""Tests for CLI commands."""

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from exprcalc.cli import app, parse_constant


@pytest.fixture(autouse=True)
def _no_config(isolated_config: Path) -> Path:
    return isolated_config


def test_eval_prints_result(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "1 + 2 * 3"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "7"


def test_eval_fractional_result(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "1 / 4"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0.25"


def test_eval_reads_stdin(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval"], input="2 ^ 3 ^ 2\n")
    assert result.exit_code == 0
    assert result.stdout.strip() == "512"


def test_eval_reads_stdin_with_dash(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "-"], input="sqrt(81)")
    assert result.exit_code == 0
    assert result.stdout.strip() == "9"


def test_eval_division_by_zero_is_not_an_error(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "1/0"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "inf"


def test_eval_parse_error_points_at_offset(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "1 + * 2"])
    assert result.exit_code == 1
    assert "error: Unexpected token '*' at offset 4" in result.output
    assert "  1 + * 2\n      ^" in result.output


def test_eval_lex_error(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "2 @ 3"])
    assert result.exit_code == 1
    assert "Unexpected character '@'" in result.output


def test_eval_unknown_variable(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "x + 1"])
    assert result.exit_code == 1
    assert "Unknown variable: x" in result.output


def test_eval_with_constants(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "x * y", "--const", "x=3", "-D", "y=0.5"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "1.5"


def test_eval_bad_constant(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "x", "--const", "x"])
    assert result.exit_code == 2


def test_eval_no_builtins(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "pi", "--no-builtins"])
    assert result.exit_code == 1
    assert "Unknown variable: pi" in result.output


def test_eval_ast(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "--ast", "2 * -3^2 + f(x)"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "((2.0 * (-(3.0 ^ 2.0))) + f(x))"


def test_eval_long_sum_from_stdin(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval"], input="+".join(["1"] * 2000))
    assert result.exit_code == 0
    assert result.stdout.strip() == "2000"


def test_eval_long_sum_ast(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "--ast", "-"], input="+".join(["1"] * 2000))
    assert result.exit_code == 0
    assert result.stdout.count("+") == 1999


def test_eval_nesting_too_deep(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval"], input="(" * 600 + "1" + ")" * 600)
    assert result.exit_code == 1
    assert "error: Expression nested too deeply at offset 100" in result.output
    assert "Traceback" not in result.output


def test_eval_function_arity_error(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["eval", "hypot(3)"])
    assert result.exit_code == 1
    assert "hypot() takes exactly 2 arguments (1 given)" in result.output


def test_eval_uses_config_file(
    cli_runner: CliRunner, write_config: Callable[..., Path]
) -> None:
    write_config("[exprcalc]\nprecision = 3\n\n[exprcalc.constants]\ng = 9.81\n")
    result = cli_runner.invoke(app, ["eval", "g * 2"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "19.6"


def test_eval_explicit_config(cli_runner: CliRunner, write_config: Callable[..., Path]) -> None:
    path = write_config("[exprcalc]\nbuiltins = false\n", "custom.toml")
    result = cli_runner.invoke(app, ["eval", "sqrt(4)", "--config", str(path)])
    assert result.exit_code == 1
    assert "Unknown function: sqrt()" in result.output


def test_eval_invalid_config(cli_runner: CliRunner, write_config: Callable[..., Path]) -> None:
    write_config("[exprcalc]\nprecision = 'many'\n")
    result = cli_runner.invoke(app, ["eval", "1"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_repl_session(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["repl"], input="1 + 1\n\n(1 +\n2 * 3\nquit\n")
    assert result.exit_code == 0
    assert "exprcalc REPL" in result.output
    assert "2\n" in result.output
    assert "Unexpected end of expression" in result.output
    assert "6\n" in result.output


def test_repl_ends_on_eof(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["repl", "-D", "k=4"], input="k!\n")
    assert result.exit_code == 0
    assert "24" in result.output


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("exprcalc ")


def test_parse_constant() -> None:
    assert parse_constant("rate = 0.25") == ("rate", 0.25)
