from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values


LOGGER = logging.getLogger("temp_cleanup")

ENV_USER_TEMP = "TEMP"
ENV_WINDIR = "WINDIR"
ENV_TASK_NAME = "TEMP_CLEANUP_TASK_NAME"
ENV_LOG_LEVEL = "TEMP_CLEANUP_LOG_LEVEL"
ENV_DOTENV_FILE = "TEMP_CLEANUP_ENV_FILE"

DEFAULT_TASK_NAME = "TempCleanupTask"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_DOTENV_FILE = Path.home() / ".temp-cleanup.env"


@dataclass(frozen=True)
class CleanupConfig:
    target_folders: tuple[Path, ...]
    task_name: str = DEFAULT_TASK_NAME
    log_level: str = DEFAULT_LOG_LEVEL


def read_dotenv_file(dotenv_path: Path) -> dict[str, str]:
    if not dotenv_path.is_file():
        return {}
    try:
        raw = dotenv_values(dotenv_path)
    except (OSError, UnicodeDecodeError):
        LOGGER.warning("[CONFIG]: Cannot read %s, ignoring it", dotenv_path, exc_info=True)
        return {}
    return {str(key): str(value) for key, value in raw.items() if value is not None}


def resolve_target_folders(values: Mapping[str, str]) -> tuple[Path, ...]:
    folders: list[Path] = []
    user_temp = str(values.get(ENV_USER_TEMP) or "").strip()
    if user_temp:
        folders.append(Path(user_temp))
    windir = str(values.get(ENV_WINDIR) or "").strip()
    if windir:
        folders.append(Path(windir) / "Temp")
    return tuple(folders)


def load_config(
    *,
    environ: Mapping[str, str] | None = None,
    dotenv_path: Path | None = None,
) -> CleanupConfig:
    env = dict(os.environ if environ is None else environ)
    if dotenv_path is None:
        dotenv_path = Path(env.get(ENV_DOTENV_FILE) or DEFAULT_DOTENV_FILE)

    # process environment wins over the dotenv file
    values = {**read_dotenv_file(Path(dotenv_path)), **env}

    task_name = str(values.get(ENV_TASK_NAME) or "").strip() or DEFAULT_TASK_NAME
    log_level = str(values.get(ENV_LOG_LEVEL) or "").strip().upper() or DEFAULT_LOG_LEVEL

    return CleanupConfig(
        target_folders=resolve_target_folders(values),
        task_name=task_name,
        log_level=log_level,
    )
