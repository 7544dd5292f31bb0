"""Default application paths."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AppPaths:
    """
    Commonly used paths for the recorder.

    ``MOTIONREC_DATA_ROOT`` overrides the default ``data`` folder relative to
    the repository root so that packaged installs can store exports
    elsewhere.
    """

    # repo_root points at the project root (one level above src/)
    repo_root: Path = Path(__file__).resolve().parents[3]
    data_root: Path = field(init=False)
    exports: Path = field(init=False)

    def __post_init__(self) -> None:
        env_data_root = os.environ.get("MOTIONREC_DATA_ROOT")
        if env_data_root:
            self.data_root = Path(env_data_root).expanduser()
        else:
            self.data_root = self.repo_root / "data"
        self.exports = self.data_root / "exports"

    def ensure(self) -> None:
        """Create directories if they do not yet exist."""
        for path in (self.data_root, self.exports):
            path.mkdir(parents=True, exist_ok=True)
