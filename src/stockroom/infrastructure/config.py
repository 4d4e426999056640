"""Runtime settings, read from the environment.

    STOCKROOM_DATA_DIR    directory holding the JSON collections
                          (default: ``<project root>/data``)
    STOCKROOM_LOG_LEVEL   logging level name (default: WARNING)

CLI options override both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

INVENTORY_FILE = "inventory.json"
ACTIVITY_FILE = "activity_log.json"
USERS_FILE = "users.json"


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        data_dir = env.get("STOCKROOM_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            log_level=env.get("STOCKROOM_LOG_LEVEL", "WARNING").upper(),
        )

    def override(self, data_dir: Path | None = None, log_level: str | None = None) -> Settings:
        settings = self
        if data_dir is not None:
            settings = replace(settings, data_dir=Path(data_dir))
        if log_level is not None:
            settings = replace(settings, log_level=log_level.upper())
        return settings

    @property
    def inventory_path(self) -> Path:
        return self.data_dir / INVENTORY_FILE

    @property
    def activity_path(self) -> Path:
        return self.data_dir / ACTIVITY_FILE

    @property
    def users_path(self) -> Path:
        return self.data_dir / USERS_FILE
