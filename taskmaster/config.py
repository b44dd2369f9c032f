"""Settings for taskmaster, resolved from environment variables.

Recognised variables:
- TASKMASTER_FILE: path of the JSON task file (default ~/.tasks.json)
- TASKMASTER_HISTORY: interactive shell history file (default ~/.taskmaster_history)
- TASKMASTER_LOG_LEVEL: log level name (default WARNING)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from taskmaster.errors import UnknownTaskError

ENV_PREFIX = "TASKMASTER"

DEFAULT_TASK_FILE = ".tasks.json"
DEFAULT_HISTORY_FILE = ".taskmaster_history"
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str) -> Optional[Path]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


def home_dir() -> Path:
    """Return the user's home directory.

    Raises:
        UnknownTaskError: If the home directory cannot be determined
    """
    try:
        return Path.home()
    except RuntimeError as exc:
        raise UnknownTaskError("Could not determine home directory") from exc


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    The home directory is only consulted when a path without an
    environment override is actually used.

    Attributes:
        task_file_override: Task file from TASKMASTER_FILE, if set
        history_file_override: History file from TASKMASTER_HISTORY, if set
        log_level: Name of the log level for the taskmaster logger
    """

    task_file_override: Optional[Path] = None
    history_file_override: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def task_file(self) -> Path:
        """Path of the JSON file holding the tasks."""
        return self.task_file_override or home_dir() / DEFAULT_TASK_FILE

    @property
    def history_file(self) -> Path:
        """Path of the interactive shell history file."""
        return self.history_file_override or home_dir() / DEFAULT_HISTORY_FILE


def get_settings() -> Settings:
    """Build Settings from the current environment."""
    log_level = os.environ.get(_k("LOG_LEVEL"), "").strip().upper() or DEFAULT_LOG_LEVEL
    return Settings(
        task_file_override=_env_path(_k("FILE")),
        history_file_override=_env_path(_k("HISTORY")),
        log_level=log_level,
    )
