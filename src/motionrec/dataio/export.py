"""Export file naming and atomic writes."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime
from pathlib import Path

EXPORT_PREFIX = "motion_data_"
EXPORT_SUFFIX = ".csv"
_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def _read_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# mkstemp creates 0600 files; exports get the mode a plain open() would give.
_FILE_MODE = 0o666 & ~_read_umask()


def export_filename(when: datetime | None = None) -> str:
    """
    Return the export file name for ``when`` (defaults to now).

    Example: "motion_data_2025-09-25_14-03-59.csv"
    """
    stamp = (when or datetime.now()).strftime(_TIMESTAMP_FORMAT)
    return f"{EXPORT_PREFIX}{stamp}{EXPORT_SUFFIX}"


def unique_export_path(directory: Path, when: datetime | None = None) -> Path:
    """
    Return a path in ``directory`` that does not exist yet.

    Two exports inside the same second get ``_1``, ``_2``... suffixes instead
    of overwriting each other.
    """
    directory = Path(directory)
    base = export_filename(when)
    candidate = directory / base
    stem = base[: -len(EXPORT_SUFFIX)]
    n = 0
    while candidate.exists():
        n += 1
        candidate = directory / f"{stem}_{n}{EXPORT_SUFFIX}"
    return candidate


def write_text_atomic(path: Path, text: str, encoding: str = "utf-8") -> Path:
    """
    Write ``text`` to ``path`` so readers never see a partial file.

    Data goes to a temporary file in the same directory, is fsynced, then
    renamed over ``path``. The temporary file is removed if anything fails
    and the original error propagates.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, _FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    return path
