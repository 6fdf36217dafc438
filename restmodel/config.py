"""
Configuration Settings
Environment variables and client settings
"""

import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RESTMODEL_", env_file=".env", extra="ignore")

    # API
    BASE_URL: str = "http://127.0.0.1:8000"
    API_KEY: Optional[str] = None
    API_KEY_HEADER: str = "X-API-Key"
    TIMEOUT: float = 30

    # Logging
    LOG_LEVEL: str = "WARNING"

settings = Settings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply the configured log level to the package logger"""
    logger = logging.getLogger("restmodel")
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    return logger
