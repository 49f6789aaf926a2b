"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """File store configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")

    @property
    def items_path(self) -> Path:
        return self.data_dir / "items.json"

    @property
    def movements_dir(self) -> Path:
        return self.data_dir / "movements"

    @property
    def on_hand_dir(self) -> Path:
        return self.data_dir / "on_hand"


class LedgerSettings(BaseSettings):
    """Movement ledger policy."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    # Attempts per movement when the store reports a sequence conflict
    max_attempts: int = Field(default=3, ge=1, le=10)

    # Reject OPENING on items that already have history
    single_opening: bool = False


class ReportSettings(BaseSettings):
    """Reporting defaults."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    timezone: str = "UTC"
    location_timezones: dict[str, str] = Field(default_factory=dict)
    default_window_days: int = Field(default=30, ge=0)
    top_selling_limit: int = Field(default=10, ge=1)
    history_limit: int = Field(default=50, ge=1)

    def timezone_for(self, location_id: str) -> str:
        return self.location_timezones.get(location_id, self.timezone)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
