"""
Configuration loader for backlog.

Settings come from backlog.env (optional), then BACKLOG_* environment
variables, then command line flags, each overriding the previous.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from . import envparse

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "backlog.env"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variables that override the file
ENV_OVERRIDES = {
    "BACKLOG_DB_PATH": "DB_PATH",
    "BACKLOG_LOG_LEVEL": "LOG_LEVEL",
    "BACKLOG_LOG_FILE": "LOG_FILE",
}


@dataclass(frozen=True)
class BacklogConfig:
    """Runtime settings from backlog.env"""
    db_path: Path = Path("database.json")
    log_level: str = "WARNING"
    log_file: Optional[Path] = None  # None: no file logging
    lock_timeout: int = 5  # Seconds to wait for another session to exit
    clear_screen: bool = True


def _parse_log_level(value: str, default: str) -> str:
    level = value.strip().upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{value}', using {default}")
        return default
    return level


def _parse_timeout(value: str, default: int) -> int:
    try:
        timeout = int(value)
    except ValueError:
        logger.warning(f"Invalid LOCK_TIMEOUT '{value}', using {default}")
        return default
    if timeout < 0:
        logger.warning(f"Negative LOCK_TIMEOUT '{value}', using {default}")
        return default
    return timeout


def config_from_env(env: Mapping[str, str]) -> BacklogConfig:
    """Build config from parsed KEY=value pairs."""
    defaults = BacklogConfig()
    log_file = env.get("LOG_FILE", "").strip()
    return BacklogConfig(
        db_path=Path(env.get("DB_PATH") or defaults.db_path),
        log_level=_parse_log_level(env.get("LOG_LEVEL", defaults.log_level), defaults.log_level),
        log_file=Path(log_file) if log_file else None,
        lock_timeout=_parse_timeout(env.get("LOCK_TIMEOUT", str(defaults.lock_timeout)), defaults.lock_timeout),
        clear_screen=env.get("CLEAR_SCREEN", "true").lower() == "true",
    )


def load_config(config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> BacklogConfig:
    """Load backlog.env and apply environment overrides.

    A missing default backlog.env is fine; a missing explicit config_path
    raises FileNotFoundError.
    """
    environ = os.environ if environ is None else environ

    env: dict[str, str] = {}
    if config_path is not None:
        env.update(envparse.load_env(config_path))
    elif Path(DEFAULT_CONFIG_FILE).exists():
        env.update(envparse.load_env(Path(DEFAULT_CONFIG_FILE)))

    for var, key in ENV_OVERRIDES.items():
        if environ.get(var):
            env[key] = environ[var]

    return config_from_env(env)


def apply_cli_overrides(config: BacklogConfig, db_path: Optional[str] = None, verbose: bool = False) -> BacklogConfig:
    """Apply --db / --verbose on top of loaded config."""
    if db_path:
        config = replace(config, db_path=Path(db_path))
    if verbose:
        config = replace(config, log_level="DEBUG")
    return config
