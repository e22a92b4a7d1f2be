"""Runtime settings loaded from the environment (and an optional .env file)."""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from lightning_nodes.errors import ConfigError

DEFAULT_DATABASE_URL = "sqlite://nodes.db"
MEMORY_DATABASE = ":memory:"

# Environment variable -> Settings field
ENV_FIELDS = {
    "DATABASE_URL": "database_url",
    "POLL_INTERVAL_SECS": "poll_interval_secs",
    "HTTP_HOST": "host",
    "HTTP_PORT": "port",
    "FETCH_TIMEOUT_SECS": "fetch_timeout_secs",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Service settings. Every field has a default."""

    database_url: str = DEFAULT_DATABASE_URL
    poll_interval_secs: int = Field(default=60, ge=1, description="Seconds between sync cycles")
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=0, le=65535)
    fetch_timeout_secs: Optional[float] = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout for the remote fetch; None disables it",
    )
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "Settings":
        """
        Load `.env` (default: searched from the working directory) silently if present, then build Settings from process variables.
        Unset or empty variables fall back to the field default.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))
        values = {}
        for env_name, field_name in ENV_FIELDS.items():
            raw = os.environ.get(env_name)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def parse_database_url(url: str) -> str:
    """
    Resolve a database URL to a sqlite path, or MEMORY_DATABASE.
    Accepts sqlite://path, sqlite:path, sqlite::memory:, :memory: and bare paths.
    """
    value = url.strip()
    if not value:
        raise ConfigError("DATABASE_URL is empty")
    if value.startswith("sqlite://"):
        value = value[len("sqlite://"):]
    elif value.startswith("sqlite:"):
        value = value[len("sqlite:"):]
    value = value.split("?", 1)[0]
    if not value:
        raise ConfigError(f"DATABASE_URL has no path: {url!r}")
    return value
