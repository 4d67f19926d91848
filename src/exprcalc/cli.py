"""
exprcalc CLI.

Commands:
- eval: Evaluate one expression given as an argument or on stdin
- repl: Interactive read-eval-print loop
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from exprcalc._version import get_version
from exprcalc.core.config import CalcConfig, load_config
from exprcalc.core.environment import Environment
from exprcalc.core.errors import ConfigError, EngineError
from exprcalc.core.expression_lang import evaluate, parse

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "EXPRCALC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

REPL_PROMPT = "> "
REPL_BANNER = "exprcalc REPL v{version}\n\nEnter expressions to see their value, or 'exit' to quit."

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"exprcalc {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Configure root logging for CLI runs.

    ``--verbose`` forces DEBUG; otherwise EXPRCALC_LOG_LEVEL is honoured,
    defaulting to WARNING.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("exprcalc").setLevel(level)


def parse_constant(spec: str) -> tuple[str, float]:
    """Parse a ``NAME=VALUE`` constant definition."""
    name, sep, raw = spec.partition("=")
    name = name.strip()
    if not sep or not name.isidentifier():
        raise typer.BadParameter(f"Expected NAME=VALUE, got {spec!r}")
    try:
        return name, float(raw)
    except ValueError:
        raise typer.BadParameter(f"Value for {name!r} is not a number: {raw!r}") from None


def _load_config_or_exit(config_path: Path | None) -> CalcConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        err_console.print(f"error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(code=2)


def _report_error(error: EngineError, source: str) -> None:
    err_console.print(
        error.format(source), style="red", markup=False, highlight=False, soft_wrap=True
    )


def _run(source: str, env: Environment, config: CalcConfig, show_ast: bool) -> bool:
    """Evaluate one expression and print the outcome. Returns False on error."""
    try:
        expr = parse(source)
        if show_ast:
            console.print(str(expr), markup=False, highlight=False, soft_wrap=True)
            return True
        result = evaluate(expr, env)
    except EngineError as e:
        logger.debug("Expression %r failed: %s", source, e)
        _report_error(e, source)
        return False
    console.print(config.format_result(result), markup=False, highlight=False)
    return True


# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="exprcalc - evaluate arithmetic expressions",
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to an exprcalc.toml configuration file"),
]
ConstOption = Annotated[
    list[str] | None,
    typer.Option("--const", "-D", help="Define a constant as NAME=VALUE (repeatable)"),
]
NoBuiltinsOption = Annotated[
    bool,
    typer.Option("--no-builtins", help="Do not provide built-in functions and constants"),
]


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """exprcalc CLI main callback for global options."""
    configure_logging(verbose)


def _build_environment(
    config: CalcConfig, constants: list[str] | None, no_builtins: bool
) -> Environment:
    if no_builtins:
        config = config.model_copy(update={"builtins": False})
    extra = dict(parse_constant(spec) for spec in constants or [])
    return config.build_environment(extra)


@app.command("eval")
def eval_command(
    expression: Annotated[
        str | None,
        typer.Argument(help="Expression to evaluate; read from stdin when omitted or '-'"),
    ] = None,
    constants: ConstOption = None,
    no_builtins: NoBuiltinsOption = False,
    show_ast: Annotated[
        bool, typer.Option("--ast", help="Print the parsed expression instead of its value")
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """Evaluate an expression and print the result."""
    config = _load_config_or_exit(config_path)
    env = _build_environment(config, constants, no_builtins)

    source = expression
    if source is None or source == "-":
        source = sys.stdin.read().strip()

    if not _run(source, env, config, show_ast):
        raise typer.Exit(code=1)


@app.command("repl")
def repl_command(
    constants: ConstOption = None,
    no_builtins: NoBuiltinsOption = False,
    config_path: ConfigOption = None,
) -> None:
    """Start an interactive session. Enter 'exit', 'quit', or Ctrl-D to leave."""
    config = _load_config_or_exit(config_path)
    env = _build_environment(config, constants, no_builtins)

    try:
        import readline  # noqa: F401 - enables line editing and history for input()
    except ImportError:
        pass

    typer.echo(REPL_BANNER.format(version=get_version()))
    typer.echo("")

    while True:
        try:
            line = input(REPL_PROMPT)
        except (EOFError, KeyboardInterrupt):
            typer.echo("")
            break

        line = line.strip()
        if not line:
            continue
        if line.lower() in ("exit", "quit"):
            break

        _run(line, env, config, show_ast=False)


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main(sys.argv[1:])
