from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "INFO"

    # Data paths
    data_dir: str = "sample_data"

    # Order fetching / pagination
    order_fetch_limit: int = 1000
    default_page_size: int = 20
    max_page_limit: int = 250

    # Chart settings
    default_granularity: str = "hourly"
    week_scheme: str = "iso"
    display_timezone: Optional[str] = None

    # Fallback behaviour when the order source cannot be read
    sample_data_on_failure: bool = True
    sample_data_seed: Optional[int] = None

    # Seed data settings
    default_seed_days: int = 400
    default_seed_orders: int = 1500
    default_seed_products: int = 60
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
