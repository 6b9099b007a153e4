"""
Configuration management using pydantic-settings.

LEARNING NOTES:
- pydantic-settings automatically loads values from environment variables
- It supports .env files out of the box (via python-dotenv)
- These are APPLICATION settings (where things live, how chatty to be).
  The user's chosen working directory is different: it's remembered in
  the JSON settings store (see storage.SettingsStore) so the folder
  chooser can update it.

Environment variables are loaded in this priority order:
1. System environment variables (highest priority)
2. .env file in current directory
3. Default values defined in the Settings class
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Example:
        # In .env or shell:
        DAY_PLANNER_DEFAULT_WORKING_DIRECTORY=~/todos

        # In Python:
        settings = Settings()
        settings.default_working_directory  # -> "~/todos"
    """

    # === Storage Configuration ===
    settings_file: Path = Field(
        default_factory=lambda: Path.home() / ".day-planner" / "settings.json",
        description="JSON file holding user settings such as the working directory"
    )

    default_working_directory: str = Field(
        default="~/Documents/work-todos",
        description="Folder used until the user picks one"
    )

    # === Logging Configuration ===
    log_level: str = Field(
        default="WARNING",
        description="Log level for the day_planner logger"
    )

    # === Pydantic Settings Configuration ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # e.g., DAY_PLANNER_SETTINGS_FILE, DAY_PLANNER_LOG_LEVEL
        env_prefix="DAY_PLANNER_",
        extra="ignore",
    )


# ============================================================================
# Singleton Pattern for Settings
# ============================================================================
# A module-level variable caches the Settings instance so the .env file is
# read once per process.

_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (lazy-loaded singleton).

    Returns:
        Settings: The application settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings
    _settings = None
