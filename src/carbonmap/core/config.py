import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file lives in the project root (parent of src/)
# Only use if it exists (deployments pass environment variables directly)
# Path: core/config.py -> carbonmap -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@lru_cache
def get_project_root() -> Path:
    """Get the project root directory.

    Looks for pyproject.toml or .git walking up from this file,
    falling back to the current working directory.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google Earth Engine service account
    # Raw JSON key (typically injected as a deployment secret)
    gee_service_account_key: str | None = None
    # Path to a JSON key file on disk
    gee_key_file: str | None = None
    # GEE Cloud Project ID; falls back to project_id inside the key
    gee_project_id: str | None = None

    # HTTP server
    frontend_origin: str = "*"
    host: str = "0.0.0.0"
    port: int = 4000

    # Initialize Earth Engine at startup instead of on the first request
    eager_gee_init: bool = False

    # Include tracebacks in 500 responses
    debug: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the server and CLI."""
    logging.basicConfig(
        level=level or settings.log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
