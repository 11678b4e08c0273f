# app/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CheckoutMode = Literal["status_flip", "archive"]


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string)

    Pool policy mirrors the storage layer's limits:
      - DB_MAX_OPEN_CONNS   : hard cap on concurrent connections
      - DB_MAX_IDLE_CONNS   : connections kept open when idle
      - DB_CONN_MAX_LIFETIME: seconds before a connection is recycled
    """

    PROJECT_NAME: str = "Storefront Backend"
    API_V1_STR: str = "/api/v1"
    APP_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str

    DB_MAX_OPEN_CONNS: int = 25
    DB_MAX_IDLE_CONNS: int = 10
    DB_CONN_MAX_LIFETIME: int = 300
    DB_POOL_TIMEOUT: float = 30.0
    DB_PING_TIMEOUT: float = 5.0

    # Background liveness polling (seconds)
    HEALTH_CHECK_INTERVAL: float = 10.0

    # Per-request deadline (seconds)
    REQUEST_TIMEOUT: float = 5.0

    # status_flip: mark lines checked_out in place
    # archive    : move lines into order_history
    CHECKOUT_MODE: CheckoutMode = "status_flip"

    # Simulated payment gateway decision
    PAYMENT_SIMULATION_APPROVE: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_scheme(cls, v: str) -> str:
        # SQLAlchemy only understands the postgresql:// scheme
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
