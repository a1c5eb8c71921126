"""pressmark: compose site pages as immutable markup trees."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version as load_pkg_version
from pathlib import Path

from .config import SiteConfig, load_config
from .content import PublishingContext, load_snapshot
from .themes import PRIMARY_THEME, Theme, get_theme

__all__ = [
    "PRIMARY_THEME",
    "PublishingContext",
    "SiteConfig",
    "Theme",
    "__version__",
    "get_theme",
    "load_config",
    "load_snapshot",
]


def _read_local_project_version() -> str:
    """Read the project version from pyproject.toml when the package is uninstalled."""
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return "0.0.0"
    return data.get("project", {}).get("version", "0.0.0")


try:
    __version__ = load_pkg_version("pressmark")
except PackageNotFoundError:
    __version__ = _read_local_project_version()
