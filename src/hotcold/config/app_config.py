"""Default application paths."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AppPaths:
    """
    Commonly used paths for the desktop application.

    ``HOTCOLD_FILES_DIR`` overrides the default private ``data/files`` folder
    relative to the repository root so that packaged installs can keep the
    status log elsewhere.
    """

    # repo_root points at the project root (one level above src/)
    repo_root: Path = Path(__file__).resolve().parents[3]
    files_dir: Path = field(init=False)
    config_dir: Path = field(init=False)

    def __post_init__(self) -> None:
        env_files_dir = os.environ.get("HOTCOLD_FILES_DIR")
        if env_files_dir:
            self.files_dir = Path(env_files_dir).expanduser()
        else:
            self.files_dir = self.repo_root / "data" / "files"

        self.config_dir = Path(__file__).resolve().parent

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "hotcold.yaml"
