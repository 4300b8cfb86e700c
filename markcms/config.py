"""
markcms configuration: all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Storage backend: "postgres" for production, "memory" for local runs and tests
    BACKEND: str = os.environ.get("MARKCMS_BACKEND", "postgres")

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.environ.get("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.environ.get("DB_POOL_MAX_SIZE", "20"))

    # Auth
    JWT_SECRET: str = os.environ.get("JWT_SECRET", "")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = 24
    SESSION_COOKIE: str = "session"
    SESSION_IDLE_MINUTES: int = int(os.environ.get("SESSION_IDLE_MINUTES", "60"))

    # Dashboard
    DASHBOARD_RECENT_LIMIT: int = 5
    ACTIVE_USER_RATIO: float = 0.4

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def COOKIE_SECURE(self) -> bool:
        return self.ENVIRONMENT != "development"


# Singleton instance
settings = Settings()

if settings.BACKEND not in ("postgres", "memory"):
    raise RuntimeError(f"MARKCMS_BACKEND must be 'postgres' or 'memory', got {settings.BACKEND!r}")
if settings.BACKEND == "postgres" and not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")
if not settings.JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is required")
