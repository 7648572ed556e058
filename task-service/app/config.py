"""Settings loaded from environment variables.

All database variables are required; the service refuses to start without them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

REQUIRED_DB_VARS = ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD")


class ConfigError(Exception):
    pass


def _env(environ: Mapping[str, str], name: str, default: str = "") -> str:
    v = environ.get(name)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _env(environ, name)
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None



def _is_missing(environ: Mapping[str, str], name: str) -> bool:
    # passwords may legitimately be whitespace
    if name == "DB_PASSWORD":
        return environ.get(name, "") == ""
    return _env(environ, name) == ""

@dataclass(frozen=True)
class DBSettings:
    host: str
    port: int
    name: str
    user: str
    password: str

    def __repr__(self) -> str:
        return f"DBSettings(host={self.host!r}, port={self.port}, name={self.name!r}, user={self.user!r})"


@dataclass(frozen=True)
class Settings:
    db: DBSettings
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    log_level: str = "INFO"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_DB_VARS if _is_missing(environ, name)]
        if missing:
            raise ConfigError(
                "database configuration is incomplete, missing: " + ", ".join(missing)
            )

        db = DBSettings(
            host=_env(environ, "DB_HOST"),
            port=_env_int(environ, "DB_PORT", 5432),
            name=_env(environ, "DB_NAME"),
            user=_env(environ, "DB_USER"),
            # passwords are taken verbatim
            password=environ["DB_PASSWORD"],
        )
        return Settings(
            db=db,
            app_host=_env(environ, "APP_HOST", "0.0.0.0"),
            app_port=_env_int(environ, "APP_PORT", 8080),
            log_level=_env(environ, "LOG_LEVEL", "INFO").upper(),
        )
