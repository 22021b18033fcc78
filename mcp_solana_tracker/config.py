import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from the .env file at the project root
dotenv_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=dotenv_path)

DEFAULT_BASE_URL = "https://data.solanatracker.io"
DEFAULT_TIMEOUT = 30.0
API_KEY_HEADER = "x-api-key"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised at startup when the environment cannot produce valid settings."""


class Settings(BaseModel):
    model_config = {"frozen": True}

    api_key: str = Field(..., repr=False) # Never echoed in logs or reprs
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Reads settings from the process environment.

    SOLANA_TRACKER_API_KEY is required; its absence is fatal and must be
    surfaced before the MCP session is opened.
    """
    api_key = os.getenv("SOLANA_TRACKER_API_KEY")
    if not api_key:
        raise ConfigurationError("SOLANA_TRACKER_API_KEY environment variable is required")

    raw_timeout = os.getenv("SOLANA_TRACKER_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"SOLANA_TRACKER_TIMEOUT must be a number of seconds, got {raw_timeout!r}")

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        api_key=api_key,
        base_url=os.getenv("SOLANA_TRACKER_BASE_URL", DEFAULT_BASE_URL),
        timeout=timeout,
        log_level=log_level,
    )
