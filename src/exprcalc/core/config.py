"""
Configuration for the exprcalc command line.

Configuration is loaded from the ``[exprcalc]`` table of a TOML file:

    [exprcalc]
    builtins = true
    precision = 12

    [exprcalc.constants]
    g = 9.81

The file is found by, in order:
    - an explicit path (``--config``)
    - the EXPRCALC_CONFIG environment variable
    - ``exprcalc.toml`` in the current directory

When none exists, defaults are used.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from exprcalc.core.builtins import build_environment
from exprcalc.core.environment import Environment
from exprcalc.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EXPRCALC_CONFIG"
DEFAULT_CONFIG_FILE = "exprcalc.toml"

# 2**53: every integer below this is exactly representable as a double
_EXACT_INT_LIMIT = 2**53


class CalcConfig(BaseModel):
    """Settings for evaluating expressions from the CLI."""

    builtins: bool = Field(default=True, description="Include built-in functions and constants")
    precision: int | None = Field(
        default=None,
        ge=1,
        le=17,
        description="Significant digits when printing results (None = shortest repr)",
    )
    constants: dict[str, float] = Field(default_factory=dict)

    @field_validator("constants")
    @classmethod
    def _check_names(cls, value: dict[str, float]) -> dict[str, float]:
        for name in value:
            if not name.isidentifier():
                raise ValueError(f"Invalid constant name: {name!r}")
        return value

    def build_environment(self, extra_constants: dict[str, float] | None = None) -> Environment:
        """Environment with configured constants, then *extra_constants*, over the built-ins."""
        constants = {**self.constants, **(extra_constants or {})}
        return build_environment(constants=constants, include_builtins=self.builtins)

    def format_result(self, value: float) -> str:
        """Render a result the way the CLI prints it.

        Integral values print without a trailing ".0" unless they are too
        large to be exact.
        """
        if self.precision is not None:
            return f"{value:.{self.precision}g}"
        if value.is_integer() and abs(value) < _EXACT_INT_LIMIT:
            return str(int(value))
        return repr(value)


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Locate the configuration file to use, if any."""
    if explicit is not None:
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    candidate = Path.cwd() / DEFAULT_CONFIG_FILE
    if candidate.exists():
        return candidate
    return None


def load_config(path: Path | None = None) -> CalcConfig:
    """Load configuration from *path* or the default search locations.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = find_config_file(path)
    if config_path is None:
        logger.debug("No config file found, using defaults")
        return CalcConfig()

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return _parse_config(data.get("exprcalc", {}), config_path)


def _parse_config(section: Any, source: Path) -> CalcConfig:
    if not isinstance(section, dict):
        raise ConfigError(f"[exprcalc] in {source} must be a table")
    try:
        return CalcConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e
