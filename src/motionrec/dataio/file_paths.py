"""Helpers for constructing standard file paths."""

from pathlib import Path

from ..config.app_config import AppPaths


def export_directory(base: str | Path | None = None) -> Path:
    """
    Resolve the directory exports are written to.

    ``base`` wins when given (``~`` is expanded); otherwise the application
    data root is used.
    """
    if base:
        return Path(base).expanduser()
    return AppPaths().exports
