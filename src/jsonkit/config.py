"""jsonkit Configuration

Settings are read from environment variables:
- JSONKIT_LOG_LEVEL: logging level for the CLI (default: INFO)
- JSONKIT_ENCODING: text encoding for file stores (default: utf-8)
- JSONKIT_INDENT: JSON indentation for written files (default: 2)
- JSONKIT_WRITE_RETRIES: attempts for file writes on transient OS errors (default: 3)
"""

import os
import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator

LOG_FORMAT = '%(asctime)s - JSONKIT - %(levelname)s - %(message)s'


class Settings(BaseModel):
    """Runtime settings shared by the file stores and the CLI."""

    log_level: str = Field(default="INFO", description="Logging level name")
    encoding: str = Field(default="utf-8", description="Text encoding for files")
    indent: int = Field(default=2, ge=0, description="JSON indentation")
    write_retries: int = Field(default=3, ge=1, description="Attempts per file write")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level


def load_settings() -> Settings:
    """Build Settings from JSONKIT_* environment variables."""
    env_map = {
        "log_level": "JSONKIT_LOG_LEVEL",
        "encoding": "JSONKIT_ENCODING",
        "indent": "JSONKIT_INDENT",
        "write_retries": "JSONKIT_WRITE_RETRIES",
    }
    values = {
        field: os.environ[var]
        for field, var in env_map.items()
        if os.environ.get(var)
    }
    return Settings(**values)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command line use.

    Args:
        level: Level name; defaults to JSONKIT_LOG_LEVEL
    """
    level = (level or load_settings().log_level).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug(f"Logging configured at {level}")
