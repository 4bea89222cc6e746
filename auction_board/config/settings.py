import logging
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEAM_ROSTER = [
    "Malnad Bulls",
    "Crimson Warriors",
    "Friends XI",
    "Bengaluru Gladiators",
    "Mysore Karadas",
    "SDP GC",
    "UCCB",
    "Sanatan Strikers",
]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Data Source Configuration
    team_roster: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TEAM_ROSTER),
        description="Ordered list of team names; each maps to '<name>.csv'.",
    )
    data_base_url: str = Field(
        "excel_data/",
        description="URL prefix (http/https) or local folder holding the team CSV files.",
    )

    # Auction Rules
    fixed_budget: float = Field(
        100_000_000,
        ge=0,
        description="Starting budget per team, used to derive the remaining amount.",
    )

    # Fetch Behaviour
    request_timeout_seconds: float = Field(
        30.0, gt=0, description="Timeout applied to every single CSV fetch."
    )
    fetch_max_attempts: int = Field(
        1, ge=1, description="Attempts per team fetch (1 disables retries)."
    )
    fetch_concurrency: int = Field(
        1, ge=1, description="Maximum number of teams fetched at the same time."
    )

    # Presentation
    dashboard_output: Path = Field(
        Path("dashboard.html"), description="Where the HTML dashboard is written."
    )
    refresh_interval_seconds: Optional[float] = Field(
        None, gt=0, description="Refresh periodically when set; run once otherwise."
    )

    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' is not a known level. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
