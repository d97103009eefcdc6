"""
Environment-backed settings.

Every setting is a small function that reads `os.environ` when called, so
tests can flip values with `monkeypatch.setenv` without reloading modules.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_USER = "postgres"
DEFAULT_DB_NAME = "college_db"
DEFAULT_DB_PORT = 5432
DEFAULT_DB_POOL_SIZE = 10
DEFAULT_DB_COMMAND_TIMEOUT_S = 30.0
DEFAULT_SERVER_PORT = 3000
DEFAULT_APP_ENV = "development"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's `sslmode` in the DSN query string.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def db_host() -> str:
    return _env_str("DB_HOST", DEFAULT_DB_HOST)


def db_user() -> str:
    return _env_str("DB_USER", DEFAULT_DB_USER)


def db_password() -> str:
    # Empty is a legitimate password for local trust setups.
    return os.environ.get("DB_PASSWORD", "")


def db_name() -> str:
    return _env_str("DB_DATABASE", DEFAULT_DB_NAME)


def db_port() -> int:
    return _env_int("DB_PORT", DEFAULT_DB_PORT)


def db_pool_size() -> int:
    size = _env_int("DB_POOL_SIZE", DEFAULT_DB_POOL_SIZE)
    return size if size > 0 else DEFAULT_DB_POOL_SIZE


def db_command_timeout() -> float:
    timeout = _env_float("DB_COMMAND_TIMEOUT", DEFAULT_DB_COMMAND_TIMEOUT_S)
    return timeout if timeout > 0 else DEFAULT_DB_COMMAND_TIMEOUT_S


def database_url() -> str:
    """
    DSN for the connection pool.

    `DATABASE_URL` wins when set; otherwise the DSN is assembled from the
    individual `DB_*` variables.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    credentials = quote(db_user(), safe="")
    password = db_password()
    if password:
        credentials = f"{credentials}:{quote(password, safe='')}"
    return f"postgresql://{credentials}@{db_host()}:{db_port()}/{quote(db_name(), safe='')}"


def server_port() -> int:
    return _env_int("SERVER_PORT", DEFAULT_SERVER_PORT)


def app_env() -> str:
    return _env_str("APP_ENV", DEFAULT_APP_ENV).lower()


def is_production() -> bool:
    return app_env() == "production"


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
