"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local snapshot storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stockledger.db"
    snapshot_key: str = "inventory_system_data_v2"

    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class RemoteSettings(BaseSettings):
    """Remote snapshot store configuration."""

    model_config = SettingsConfigDict(env_prefix="REMOTE_")

    enabled: bool = True
    base_url: str = "http://localhost:3000/api"
    key: str = "inventory"
    token: SecretStr | None = None
    timeout: float = 10.0


class SyncSettings(BaseSettings):
    """Debounced remote push configuration."""

    model_config = SettingsConfigDict(env_prefix="SYNC_")

    debounce_seconds: float = 1.0
    flush_on_shutdown: bool = True


class AccessSettings(BaseSettings):
    """
    Static secrets for the two access roles.

    These only guard against accidental destructive actions. They are not
    hashed, rate-limited or rotated.
    """

    model_config = SettingsConfigDict(env_prefix="ACCESS_")

    admin_secret: SecretStr = SecretStr("0000")
    product_only_secret: SecretStr = SecretStr("1111")


class LedgerSettings(BaseSettings):
    """Ledger and serial allocation rules."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    max_range_size: int = 100
    serial_seed: str = "SN00001"
    serial_pad: int = 5
    duplicate_report_limit: int = 5
    initial_stock_remark: str = "Initial stock registration"


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "StockLedger"
    app_version: str = "2.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    access: AccessSettings = Field(default_factory=AccessSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


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
