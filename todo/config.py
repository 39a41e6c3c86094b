import logging
from functools import lru_cache
from pathlib import Path

import yaml

CONFIG_FILE = ".todo.yaml"

DEFAULT_CONFIG = {
    "tasks_file": "tasks.json",
    "logging_level": "WARNING",
}


def config_file() -> Path:
    """Return config file path in the working directory."""
    return Path.cwd() / CONFIG_FILE


def _validate_config(cfg: dict) -> None:
    """Validate config structure. Fail fast on invalid types."""
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a mapping, got {type(cfg).__name__}")

    tasks_file = cfg.get("tasks_file")
    if not isinstance(tasks_file, str) or not tasks_file.strip():
        raise ValueError("Config 'tasks_file' must be a non-empty string")

    level = cfg.get("logging_level")
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ValueError(f"Config 'logging_level' is not a logging level: {level!r}")


def _clear_cache():
    load_config.cache_clear()


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load .todo.yaml over the defaults, or the defaults alone if not found."""
    cfg = dict(DEFAULT_CONFIG)
    path = config_file()
    if not path.exists():
        return cfg
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
    cfg.update(data)
    _validate_config(cfg)
    return cfg


def tasks_file() -> Path:
    """Return the backing file path; relative paths resolve against the working directory."""
    path = Path(load_config()["tasks_file"]).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def logging_level() -> str:
    return load_config()["logging_level"].upper()
