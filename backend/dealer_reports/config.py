"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings

# Check if .env file exists and is readable
_env_file = None
try:
    env_path = Path(".env")
    if env_path.exists() and os.access(env_path, os.R_OK):
        _env_file = ".env"
except (OSError, PermissionError):
    # If we can't access .env, continue without it
    pass


class Settings(BaseSettings):
    """All configuration for the dealership reporting application.

    Values are loaded from environment variables or a .env file.
    """

    # Application
    app_name: str = "dealer-reports"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./data/dealer_reports.db"

    # Logging
    json_logs: bool = False
    log_level: str = "INFO"

    # Batch jobs
    missing_reports_lookback_days: int = 365  # check-missing default window

    model_config = {
        "env_file": _env_file,
        "env_file_encoding": "utf-8",
        "env_file_ignore_empty": True,
    }
