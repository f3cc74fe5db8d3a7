"""
Configuration management for unfold.

Settings live in a YAML file in the user's config directory:

    db_path: ~/unfold.db
    history_limit: 100
    log_level: INFO
    aliases:
      today: list tasks status:due

Environment variables UNFOLD_DB and UNFOLD_LOG_LEVEL take priority over
the file.
"""

import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "unfold.db"
DEFAULT_HISTORY_LIMIT = 100
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CliSettings:
    db_path: str = DEFAULT_DB_PATH
    history_limit: int = DEFAULT_HISTORY_LIMIT
    log_level: str = "WARNING"
    aliases: dict[str, str] = field(default_factory=dict)


def get_config_dir() -> Path:
    """Get the configuration directory, creating it if needed."""
    # Use XDG_CONFIG_HOME if set, otherwise ~/.config
    config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    config_dir = Path(config_home) / "unfold"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def load_settings(path: Optional[Path] = None) -> CliSettings:
    """
    Load settings from YAML, then apply environment overrides.

    A missing file gives defaults. An unreadable or malformed file is
    logged and also gives defaults.
    """
    path = Path(path) if path else get_config_path()
    data = _read_yaml(path)
    settings = _settings_from_dict(data)

    env_db = os.environ.get("UNFOLD_DB")
    if env_db:
        settings.db_path = env_db
    env_level = os.environ.get("UNFOLD_LOG_LEVEL")
    if env_level:
        settings.log_level = _log_level(env_level, settings.log_level)

    return settings


def save_settings(settings: CliSettings, path: Optional[Path] = None) -> Path:
    """Write settings to YAML."""
    path = Path(path) if path else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(settings), f, default_flow_style=False, sort_keys=False)
    return path


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", path)
        return {}
    return data


def _settings_from_dict(data: dict) -> CliSettings:
    settings = CliSettings()

    if data.get("db_path"):
        settings.db_path = str(Path(str(data["db_path"])).expanduser())

    if "history_limit" in data:
        try:
            limit = int(data["history_limit"])
        except (TypeError, ValueError):
            logger.warning("Invalid history_limit %r; using %d",
                           data["history_limit"], DEFAULT_HISTORY_LIMIT)
        else:
            if limit > 0:
                settings.history_limit = limit

    if data.get("log_level"):
        settings.log_level = _log_level(str(data["log_level"]), settings.log_level)

    aliases = data.get("aliases") or {}
    if isinstance(aliases, dict):
        settings.aliases = {
            str(word).lower(): str(command)
            for word, command in aliases.items()
            if word and command
        }
    else:
        logger.warning("Ignoring aliases: expected a mapping")

    return settings


def _log_level(value: str, fallback: str) -> str:
    level = value.strip().upper()
    if level in LOG_LEVELS:
        return level
    logger.warning("Unknown log level %r; using %s", value, fallback)
    return fallback
