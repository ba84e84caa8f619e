# workforce_api/config.py
import os
from datetime import timedelta

DEV_JWT_SECRET = "dev-jwt-secret"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    return [p.strip() for p in (os.getenv(name) or default).split(",") if p.strip()]


class Config:
    APP_ENV = "development"

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///workforce.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", DEV_JWT_SECRET)
    JWT_TOKEN_LOCATION = ["cookies"]
    JWT_ACCESS_COOKIE_NAME = "token"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    # persistent cookie: max-age follows the token lifetime
    JWT_SESSION_COOKIE = False
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_SAMESITE = "Lax"
    JWT_COOKIE_CSRF_PROTECT = _env_flag("JWT_COOKIE_CSRF_PROTECT", False)
    JWT_DECODE_LEEWAY = 120  # 2 minutes grace for clock skew

    CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    APP_ENV = "development"


class TestingConfig(Config):
    APP_ENV = "testing"
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test-jwt-secret"
    JWT_COOKIE_CSRF_PROTECT = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(Config):
    APP_ENV = "production"
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_SAMESITE = "Strict"


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def config_for_env(name: str | None = None):
    return CONFIGS.get((name or os.getenv("APP_ENV") or "development").lower(), DevelopmentConfig)
