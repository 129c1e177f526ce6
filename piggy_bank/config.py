"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
The withdrawal fee and its threshold are business constants of the ledger and are not configurable.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class PiggyBankConfig(BaseSettings):
    """Piggy bank service configuration"""

    model_config = SettingsConfigDict(
        env_prefix="PIGGY_BANK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    # Presentation
    currency_symbol: str = "R$"


# Global configuration instance
config = PiggyBankConfig()


def get_config() -> PiggyBankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> PiggyBankConfig:
    """Reload configuration from environment"""
    global config
    config = PiggyBankConfig()
    return config
