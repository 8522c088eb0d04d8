# forum_server/config.py

"""
Runtime configuration for the forum server.

Values are read from the environment (a local ``.env`` file is loaded first
via python-dotenv):

- JWT_SECRET_KEY               secret used to sign session tokens (required)
- DATABASE_URL                 SQLAlchemy URL of the backing store
- ACCESS_TOKEN_EXPIRE_MINUTES  session token validity window
- STORE_TIMEOUT_SECONDS        upper bound on waiting for the store
- COOKIE_SECURE                mark the AuthToken cookie as Secure
- REQUIRE_AUTHORSHIP           only the author may edit or delete a node
- LOG_LEVEL                    root log level
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


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
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a positive integer, got {raw!r}")
    if value <= 0:
        raise RuntimeError(f"{name} must be a positive integer, got {raw!r}")
    return value


@dataclass
class Settings:
    jwt_secret_key: str
    database_url: str = "sqlite:///./forum.db"
    access_token_expire_minutes: int = 60
    store_timeout_seconds: int = 5
    cookie_secure: bool = True
    require_authorship: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        secret = os.getenv("JWT_SECRET_KEY", "").strip()
        if not secret:
            raise RuntimeError("JWT_SECRET_KEY must be set")

        return cls(
            jwt_secret_key=secret,
            database_url=os.getenv("DATABASE_URL", cls.database_url).strip() or cls.database_url,
            access_token_expire_minutes=_env_int("ACCESS_TOKEN_EXPIRE_MINUTES", cls.access_token_expire_minutes),
            store_timeout_seconds=_env_int("STORE_TIMEOUT_SECONDS", cls.store_timeout_seconds),
            cookie_secure=_env_bool("COOKIE_SECURE", cls.cookie_secure),
            require_authorship=_env_bool("REQUIRE_AUTHORSHIP", cls.require_authorship),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).strip() or cls.log_level,
        )


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Return the process-wide settings, building them from the environment
    on first use.
    """
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
