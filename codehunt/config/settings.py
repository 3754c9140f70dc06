import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from codehunt.models.enums import StorageBackend


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Persistence Configuration
    storage_backend: StorageBackend = Field(
        StorageBackend.FILE, description="Where hunt state is persisted."
    )
    state_file: Path = Field(
        Path("data/hunt_state.json"),
        description="JSON file used by the file storage backend.",
    )
    storage_namespace: str = Field(
        "default",
        min_length=1,
        description="Session scope prefixed to every persisted key.",
    )

    # Supabase Configuration (only used by the supabase backend)
    supabase_url: Optional[str] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Anon or service key for the Supabase project."
    )
    supabase_table: str = Field(
        "hunt_state", description="Table holding namespace/key/value rows."
    )

    # Admin Gate
    admin_username: str = Field("admin", description="Administrator login name.")
    admin_password: SecretStr = Field(
        SecretStr("password123"), description="Administrator password."
    )

    # Mini-game tuning
    reaction_target_ms: int = Field(
        100,
        gt=0,
        description="Best reaction time (ms) needed to win the Reaction Test.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )
    log_file: Optional[Path] = Field(
        None, description="Optional file sink for logs (rotated)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEHUNT_",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
