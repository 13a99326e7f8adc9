"""
Environment-driven settings for the ResearchStudy builder.

Values are read from the process environment after loading the project
``.env`` file (once) with python-dotenv:

    RS_LOG_LEVEL       logging level name (default INFO)
    RS_JSON_LOG        emit JSON log lines to stderr (default false)
    RS_LOG_FILE        also write JSON logs to this path
    RS_DEFAULT_STATUS  status given to newly built studies (default active)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_STUDY_STATUS
from .errors import ConfigurationError

_env_loaded = False

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _ensure_env_loaded():
    """Ensure .env is loaded exactly once."""
    global _env_loaded
    if not _env_loaded:
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(env_path)
        _env_loaded = True


@dataclass
class BuilderSettings:
    """Resolved runtime settings."""
    log_level: int = logging.INFO
    json_log: bool = False
    log_file: Optional[str] = None
    default_status: str = DEFAULT_STUDY_STATUS


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level in RS_LOG_LEVEL: {value!r}")
    return level


def load_settings() -> BuilderSettings:
    """
    Build settings from the environment.

    Raises:
        ConfigurationError: If RS_LOG_LEVEL names an unknown level.
    """
    _ensure_env_loaded()
    return BuilderSettings(
        log_level=_parse_level(os.environ.get("RS_LOG_LEVEL", "INFO")),
        json_log=os.environ.get("RS_JSON_LOG", "").strip().lower() in _TRUE_VALUES,
        log_file=os.environ.get("RS_LOG_FILE") or None,
        default_status=os.environ.get("RS_DEFAULT_STATUS") or DEFAULT_STUDY_STATUS,
    )
