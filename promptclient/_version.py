"""Version lookup for promptclient."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path

_UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version from the distribution metadata, or from pyproject.toml in an uninstalled checkout."""
    try:
        return package_version("promptclient")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if not pyproject_path.is_file():
        return _UNKNOWN_VERSION

    import tomllib

    project = tomllib.loads(pyproject_path.read_text(encoding="utf-8")).get("project", {})
    return str(project.get("version", _UNKNOWN_VERSION))


__version__ = get_version()
