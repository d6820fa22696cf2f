# qa_service/config.py

"""
Configuration for the Q&A service.

All tunables come from environment variables, with defaults suitable for
local development (SQLite file database, permissive CORS).

Environment variables
=====================

- DATABASE_URL
    Async SQLAlchemy URL.
    Default: "sqlite+aiosqlite:///./qa_service.db"
    Production: "postgresql+asyncpg://user:password@db:5432/qa"

- DATABASE_ECHO
    Echo SQL statements. Default: false

- SECRET_KEY / JWT_ALGORITHM / ACCESS_TOKEN_EXPIRE_MINUTES
    JWT signing settings. Defaults: "change-me" / "HS256" / 30

- QA_API_PREFIX
    URL prefix for every router. Default: "/api"

- QA_CORS_ORIGINS
    Comma-separated list of allowed origins, "*" for all. Default: "*"

- QA_DEBUG
    "1", "true", "yes" or "on" enables FastAPI debug mode. Default: false

- QA_LOG_LEVEL
    Logging level name. Default: "INFO"

- QA_HOST / QA_PORT
    Bind address for the development server. Defaults: "0.0.0.0" / 8000
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _normalize_prefix(prefix: str) -> str:
    prefix = prefix.strip()
    if not prefix or prefix == "/":
        return ""
    if not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix.rstrip("/")


@dataclass
class Settings:
    """
    Configuration values for the Q&A service.
    """

    database_url: str = "sqlite+aiosqlite:///./qa_service.db"
    database_echo: bool = False

    secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    api_prefix: str = "/api"
    title: str = "Q&A Service"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build a Settings instance using environment variables as overrides
        on top of the defaults.
        """
        port = _env_int("QA_PORT", cls.port)
        if port <= 0 or port > 65535:
            port = cls.port

        expire = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", cls.access_token_expire_minutes)
        if expire <= 0:
            expire = cls.access_token_expire_minutes

        cors_raw = os.getenv("QA_CORS_ORIGINS", "").strip()
        if not cors_raw or cors_raw == "*":
            cors_origins = ["*"]
        else:
            cors_origins = [p.strip() for p in cors_raw.split(",") if p.strip()] or ["*"]

        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            database_echo=_env_bool("DATABASE_ECHO", cls.database_echo),
            secret_key=os.getenv("SECRET_KEY", cls.secret_key),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", cls.jwt_algorithm),
            access_token_expire_minutes=expire,
            api_prefix=_normalize_prefix(os.getenv("QA_API_PREFIX", cls.api_prefix)),
            debug=_env_bool("QA_DEBUG", cls.debug),
            log_level=os.getenv("QA_LOG_LEVEL", cls.log_level).strip().upper() or cls.log_level,
            host=os.getenv("QA_HOST", cls.host),
            port=port,
            cors_origins=cors_origins,
        )


# Singleton settings instance
_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Return the global Settings instance, creating it from environment
    variables on first use.
    """
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def set_settings(settings: Optional[Settings]) -> None:
    """
    Replace the global Settings instance (``None`` resets to the
    environment on next access). Mainly useful for tests.
    """
    global _SETTINGS
    _SETTINGS = settings


__all__ = ["Settings", "get_settings", "set_settings"]
