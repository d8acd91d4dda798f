from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Config to load from .env file
ENV_SETTINGS_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = ENV_SETTINGS_CONFIG

    name: str = Field("Backtesting Transaction Fetcher", validation_alias="APP_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class FetcherSettings(BaseSettings):
    """Settings related to the JSON-RPC block source and the range fetcher."""

    model_config = ENV_SETTINGS_CONFIG

    # Timeout for a single RPC call (seconds)
    rpc_timeout: int = Field(default=30, gt=0, validation_alias="RPC_TIMEOUT")
    # Connection pool size of the shared aiohttp session
    rpc_pool_size: int = Field(default=10, gt=0, validation_alias="RPC_POOL_SIZE")
    # Blocks per barrier-synchronized batch
    batch_size: int = Field(default=10, gt=0, validation_alias="FETCH_BATCH_SIZE")
    # Max in-flight RPC calls across the whole run
    max_concurrent: int = Field(default=5, gt=0, validation_alias="FETCH_MAX_CONCURRENT")
    output_format: str = Field(default="simple", validation_alias="FETCH_OUTPUT_FORMAT")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each sub-settings class reads its own flat env vars through validation_alias.
    """

    model_config = ENV_SETTINGS_CONFIG

    app: AppSettings = Field(default_factory=AppSettings)
    fetcher: FetcherSettings = Field(default_factory=FetcherSettings)


# Singleton instance
settings = Settings()
