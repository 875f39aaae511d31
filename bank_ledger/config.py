"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
Account product rules (minimum balances, rates, fees, caps) are fixed by the
account types and are intentionally not part of this configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class LedgerConfig(BaseSettings):
    """Bank ledger configuration"""
    
    model_config = SettingsConfigDict(
        env_prefix="BANK_LEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Optional[str] = None  # If None, logs to stderr
    
    # Display configuration
    currency_symbol: str = "$"
    display_precision: int = 2


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
