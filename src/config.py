"""Runtime settings read from the environment.

Settings are built once at startup by ``load_settings()`` and passed into
the roster check. Nothing below the entry point reads ``os.environ``.

Environment variables:
- API_TOKEN: RobotEvents API bearer token (required)
- SLACK_WEBHOOK_URL: Slack incoming webhook (required)
- EVENT_IDS: comma-separated RobotEvents event ids
- ROBOTEVENTS_BASE_URL: API root, defaults to the public v2 API
- SNAPSHOT_DIR: where ``{event_id}_teams.json`` files live
- ROSTERWATCH_DB: SQLite run history path, empty to disable
- REQUEST_TIMEOUT: HTTP timeout in seconds
- LOG_LEVEL: logging level name
"""

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.scraper.robotevents_strategy import DEFAULT_BASE_URL

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(Exception):
    """Raised when required settings are missing or invalid."""


class Settings(BaseModel):
    api_token: str
    slack_webhook_url: str
    event_ids: List[str] = []
    base_url: str = DEFAULT_BASE_URL
    snapshot_dir: str = "."
    db_path: Optional[str] = "rosterwatch.db"
    request_timeout: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"must be one of {sorted(LOG_LEVELS)}")
        return value


def parse_event_ids(raw: Optional[str]) -> List[str]:
    """Split a comma-separated id list, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or the given mapping)."""
    env = os.environ if environ is None else environ

    token = env.get("API_TOKEN", "").strip()
    if not token:
        raise ConfigError("API_TOKEN environment variable is not set")
    webhook_url = env.get("SLACK_WEBHOOK_URL", "").strip()
    if not webhook_url:
        raise ConfigError("SLACK_WEBHOOK_URL environment variable is not set")

    values = {
        "api_token": token,
        "slack_webhook_url": webhook_url,
        "event_ids": parse_event_ids(env.get("EVENT_IDS")),
    }
    optional = {
        "base_url": "ROBOTEVENTS_BASE_URL",
        "snapshot_dir": "SNAPSHOT_DIR",
        "request_timeout": "REQUEST_TIMEOUT",
        "log_level": "LOG_LEVEL",
    }
    for field, var in optional.items():
        if env.get(var):
            values[field] = env[var]
    if "ROSTERWATCH_DB" in env:
        values["db_path"] = env["ROSTERWATCH_DB"] or None

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
