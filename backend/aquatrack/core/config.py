"""Environment-selected settings classes (``APP_ENV``)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"
_TRUTHY: Final = frozenset({"1", "true", "yes", "y", "on"})

# No-op when there is no .env file
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a yes/no flag; unset means ``default``, anything unrecognised means ``False``."""
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Settings shared by every environment, read from the process environment.

    Access and refresh tokens are signed with different keys
    (``JWT_SECRET_KEY`` and ``JWT_REFRESH_SECRET_KEY``) so one kind can never
    be replayed as the other. Access tokens carry the user id in the ``id``
    claim plus ``iss``/``aud``, which are checked on every request.
    """

    APP_ENV = "development"
    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")
    APP_COMMIT = os.getenv("APP_COMMIT", "unknown")

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_ACCESS_KEY_AT_LEAST_32_BYTES")
    JWT_REFRESH_SECRET_KEY = os.getenv(
        "JWT_REFRESH_SECRET_KEY", "CHANGE_ME_REFRESH_KEY_AT_LEAST_32_BYTES"
    )
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_IDENTITY_CLAIM = "id"

    JWT_ISSUER = os.getenv("JWT_ISSUER", "aquatrack")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "aquatrack-clients")
    JWT_ENCODE_ISSUER = JWT_ISSUER
    JWT_DECODE_ISSUER = JWT_ISSUER
    JWT_ENCODE_AUDIENCE = JWT_AUDIENCE
    JWT_DECODE_AUDIENCE = JWT_AUDIENCE

    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("JWT_ACCESS_TOKEN_MINUTES", 60))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("JWT_REFRESH_TOKEN_DAYS", 7))

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./aquatrack.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    APP_ENV = "development"
    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses fixed signing keys so tokens are reproducible across a run.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "testing-access-secret-key-0123456789abcdef"
    JWT_REFRESH_SECRET_KEY = "testing-refresh-secret-key-0123456789abcdef"
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Production defaults; secrets are expected from the environment."""

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# ``APP_ENV`` value -> settings class
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
