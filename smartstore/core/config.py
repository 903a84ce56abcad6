# smartstore/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # HTTP
    CORS_ORIGINS: list[str] = [
        "http://127.0.0.1:5500",
        "http://localhost:5500",
    ]

    # Database
    DATABASE_BACKEND: Literal["sqlite", "memory"] = "sqlite"
    DATABASE_PATH: str = "smartstore.db"

    # Inventory
    ALLOW_NEGATIVE_STOCK: bool = True
    EXPIRING_SOON_DAYS: int = 7

    # Reporting
    HOURS_PER_WORKDAY: int = 8
    DAYS_PER_MONTH: int = 30
    BREAK_EVEN_WINDOW_DAYS: int = 30
    BEST_SELLERS_LIMIT: int = 5


    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SMARTSTORE_",
        extra="forbid",
    )


settings = Settings()
