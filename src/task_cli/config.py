# src/task_cli/config.py

"""Settings resolved from flags, environment variables (+ optional .env) and a JSON config file.

Resolution order for each value:
    explicit flag > TASK_* environment variable > config file > built-in default

The config file is "task.json", looked up in the current directory first and
then in "<user config dir>/task/".
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

APP_NAME = "task"
ENV_PREFIX = "TASK"
CONFIG_FILE_NAME = f"{APP_NAME}.json"
TASKS_FILE_NAME = "tasks.json"

DEFAULT_PRIORITY = "medium"
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(environ: Mapping[str, str], name: str) -> str | None:
    v = environ.get(name)
    if v is None or v.strip() == "":
        return None
    return v


def _as_bool(raw: Any, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in {"1", "true", "yes", "y", "on"}


def user_config_dir(environ: Mapping[str, str] | None = None) -> Path | None:
    """Per-user configuration directory for the current platform, or None if unknown."""
    environ = os.environ if environ is None else environ

    if sys.platform == "win32":
        appdata = _env(environ, "APPDATA")
        return Path(appdata) if appdata else None

    home = _home_dir(environ)
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" if home else None

    xdg = _env(environ, "XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return home / ".config" if home else None


def _home_dir(environ: Mapping[str, str]) -> Path | None:
    home = _env(environ, "HOME") or _env(environ, "USERPROFILE")
    if home:
        return Path(home)
    try:
        return Path.home()
    except RuntimeError:
        return None


def default_tasks_path(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    config_dir = user_config_dir(environ)
    if config_dir is not None:
        return config_dir / APP_NAME / TASKS_FILE_NAME
    home = _home_dir(environ)
    if home is not None:
        return home / f".{APP_NAME}" / TASKS_FILE_NAME
    return Path(TASKS_FILE_NAME)


def config_search_paths(
    cwd: Path | None = None, environ: Mapping[str, str] | None = None
) -> list[Path]:
    paths = [(cwd or Path.cwd()) / CONFIG_FILE_NAME]
    config_dir = user_config_dir(environ)
    if config_dir is not None:
        paths.append(config_dir / APP_NAME / CONFIG_FILE_NAME)
    return paths


def read_config_file(paths: list[Path]) -> tuple[dict[str, Any], Path | None]:
    """
    Return the first config file found as a dict.

    A malformed file is logged and skipped; a missing config is not an error.
    """
    for path in paths:
        if not path.is_file():
            continue
        try:
            data = json.loads(path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable config file %s", path, exc_info=True)
            continue
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not an object", path)
            continue
        return data, path
    return {}, None


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Storage ----
    tasks_file: Path
    config_file: Path | None

    # ---- Command defaults / policies ----
    default_priority: str
    confirm_remove: bool

    # ---- Logging ----
    log_level: str
    log_dir: Path | None

    @staticmethod
    def load(
        *,
        file_flag: str | None = None,
        cwd: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        environ = os.environ if environ is None else environ
        cfg, cfg_path = read_config_file(config_search_paths(cwd, environ))

        raw_file = file_flag or _env(environ, _k("FILE")) or cfg.get("file")
        tasks_file = Path(str(raw_file)).expanduser() if raw_file else default_tasks_path(environ)

        default_priority = str(cfg.get("priority") or DEFAULT_PRIORITY)

        confirm_remove = _as_bool(
            _env(environ, _k("CONFIRM_REMOVE")),
            _as_bool(cfg.get("confirm_remove"), True),
        )

        log_level = (_env(environ, _k("LOG_LEVEL")) or str(cfg.get("log_level") or DEFAULT_LOG_LEVEL)).upper()

        raw_log_dir = _env(environ, _k("LOG_DIR")) or cfg.get("log_dir")
        log_dir = Path(str(raw_log_dir)).expanduser() if raw_log_dir else None

        return Settings(
            tasks_file=tasks_file,
            config_file=cfg_path,
            default_priority=default_priority,
            confirm_remove=confirm_remove,
            log_level=log_level,
            log_dir=log_dir,
        )


def get_settings(*, file_flag: str | None = None) -> Settings:
    """Load .env from the working directory (without overriding the real environment) and resolve settings."""
    load_dotenv(Path.cwd() / ".env", override=False)
    return Settings.load(file_flag=file_flag)
