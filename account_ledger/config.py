"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class LedgerConfig(BaseSettings):
    """Account ledger configuration"""

    # Savings product defaults (used when an account is opened without explicit terms)
    default_interest_rate_percent: str = "0.0"
    default_withdraw_limit_per_month: int = 3
    default_withdrawal_fee: str = "2.0"

    # Label recorded when the caller does not supply a date
    default_date_label: str = "N/A"

    # Reporting configuration
    statement_precision: int = 2  # Decimal places shown on statements

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False


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
