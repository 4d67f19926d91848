"""Version lookup for exprcalc.

The ``version`` key in the checkout's pyproject.toml wins, so an editable
install reports the version being developed. Installed wheels have no
pyproject.toml next to the package and fall back to the distribution
metadata recorded at install time.
"""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

# src/exprcalc/_version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_VERSION_RE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """Return the exprcalc version, or ``0.0.0`` when neither source knows it."""
    if _PYPROJECT.is_file():
        if match := _VERSION_RE.search(_PYPROJECT.read_text(encoding="utf-8")):
            return match.group(1)
    try:
        return _metadata_version("exprcalc")
    except PackageNotFoundError:
        return "0.0.0"
