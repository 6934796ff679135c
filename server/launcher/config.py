# server/launcher/config.py

import os
import re
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def clean_hostname(hostname: str) -> str:
    """Strip a protocol prefix and any trailing path from a hostname"""
    hostname = re.sub(r"^https?://", "", hostname.strip())
    return re.sub(r"/.*$", "", hostname)


def mask_connection_string(url: str) -> str:
    return re.sub(r":([^@/]+)@", ":****@", url)


def build_database_url(environ=None) -> Optional[str]:
    """
    Resolve the database connection string.

    DATABASE_URL wins when present. Otherwise the URL is assembled from
    POSTGRES_HOSTNAME, POSTGRES_PASSWORD and POSTGRES_DB (all three required),
    with POSTGRES_USER and POSTGRES_PORT falling back to postgres/5432.
    """
    environ = os.environ if environ is None else environ

    database_url = environ.get("DATABASE_URL")
    if database_url:
        # SQLAlchemy no longer accepts the legacy postgres:// scheme
        if database_url.startswith("postgres://"):
            database_url = "postgresql://" + database_url[len("postgres://"):]
        return database_url

    hostname = environ.get("POSTGRES_HOSTNAME")
    password = environ.get("POSTGRES_PASSWORD")
    database = environ.get("POSTGRES_DB")

    if not (hostname and password and database):
        return None

    username = environ.get("POSTGRES_USER", "postgres")
    port = environ.get("POSTGRES_PORT", "5432")

    logger.info(f"Building connection string with hostname: {hostname}")
    hostname = clean_hostname(hostname)
    logger.info(f"Cleaned hostname: {hostname}")

    url = f"postgresql://{username}:{password}@{hostname}:{port}/{database}"
    logger.info(f"Connection string (password hidden): {mask_connection_string(url)}")
    return url


class Config:
    FLASK_ENV = "production"
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-change-me")

    SQLALCHEMY_DATABASE_URI = build_database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
    }

    # "database" or "memory"
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "database").lower()

    ACCESS_CODE = os.environ.get("ACCESS_CODE")
    REQUIRE_ACCESS_CODE = _env_bool("REQUIRE_ACCESS_CODE", True)

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            "CORS_ORIGINS", "http://localhost:3000,http://localhost:5000,http://localhost:5173"
        ).split(",")
        if origin.strip()
    ]

    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    CREATE_RATE_LIMIT = os.environ.get("CREATE_RATE_LIMIT", "30 per minute")

class DevelopmentConfig(Config):
    FLASK_ENV = "development"
    SQLALCHEMY_DATABASE_URI = Config.SQLALCHEMY_DATABASE_URI or "sqlite:///launcher.db"


class ProductionConfig(Config):
    FLASK_ENV = "production"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": 10,
        "pool_recycle": 300,
        "connect_args": {"connect_timeout": 10, "sslmode": "prefer"},
    }


class TestingConfig(Config):
    FLASK_ENV = "testing"
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    STORAGE_BACKEND = "database"
    ACCESS_CODE = "letmein"
    REQUIRE_ACCESS_CODE = True
    RATELIMIT_ENABLED = False


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(env: Optional[str] = None):
    env = (env or os.environ.get("FLASK_ENV", "production")).lower()
    return config_by_name.get(env, ProductionConfig)
