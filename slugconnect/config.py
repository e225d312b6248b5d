from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load project-root .env early so both pydantic-settings and any direct os.getenv access
# see consistent values, even if the process CWD is not the repo root.
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_IN_TEST = (os.getenv("ENVIRONMENT") or "").lower() == "test" or bool(os.getenv("PYTEST_CURRENT_TEST"))
if _ENV_PATH.exists() and not _IN_TEST:
    load_dotenv(dotenv_path=_ENV_PATH, override=True)


def _parse_origins(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set)):
        return [str(item).strip() for item in raw if str(item).strip()]
    s = str(raw).strip()
    if not s:
        return []
    # Support JSON array string or comma-separated string.
    if s.startswith("["):
        try:
            parsed = json.loads(s)
            items = parsed if isinstance(parsed, list) else [parsed]
        except ValueError:
            items = s.strip("[]").split(",")
    else:
        items = s.split(",")
    return [str(item).strip().strip('"') for item in items if str(item).strip()]


class Settings(BaseSettings):
    app_name: str = Field(default="SlugConnect API")
    api_prefix: str = Field(default="/api")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Database configuration
    # DB_URL / ORM_DB_URL win; otherwise sqlite in development, discrete DB_* for MySQL.
    db_url: str | None = Field(default=None, validation_alias="DB_URL")
    orm_db_url: str | None = Field(default=None, validation_alias="ORM_DB_URL")
    orm_use_mysql: bool = Field(default=False, validation_alias="ORM_USE_MYSQL")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=3306, validation_alias="DB_PORT")
    db_name: str = Field(default="slugconnect", validation_alias="DB_NAME")
    db_user: str = Field(default="root", validation_alias="DB_USER")
    db_password: str = Field(default="password", validation_alias="DB_PASSWORD")
    db_charset: str = Field(default="utf8mb4", validation_alias="DB_CHARSET")

    jwt_secret: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60)
    confirmation_token_expire_minutes: int = Field(default=60 * 24)

    # Sign-up rules
    allowed_email_domain: str = Field(default="ucsc.edu", validation_alias="ALLOWED_EMAIL_DOMAIN")
    password_min_length: int = Field(default=6, validation_alias="PASSWORD_MIN_LENGTH")
    require_email_confirmation: bool = Field(default=False, validation_alias="REQUIRE_EMAIL_CONFIRMATION")
    max_interests: int = Field(default=10, validation_alias="MAX_INTERESTS")

    # Public URL of the web front end; confirmation links point at its onboarding page.
    app_base_url: str = Field(default="http://localhost:3000", validation_alias="APP_BASE_URL")

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> list[str]:
        return _parse_origins(v)

    @field_validator("allowed_email_domain", mode="before")
    @classmethod
    def _strip_domain(cls, v: Any) -> str:
        return str(v or "").strip().lstrip("@").lower()

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def build_sqlalchemy_db_url(settings: Settings) -> str:
    if settings.orm_db_url:
        return settings.orm_db_url

    if settings.db_url:
        return settings.db_url

    # In development, default ORM to sqlite unless explicitly configured.
    if settings.environment.lower() in ("development", "test"):
        if settings.orm_use_mysql:
            return _mysql_url(settings)
        return "sqlite:///./dev.db"

    return _mysql_url(settings)


def _mysql_url(settings: Settings) -> str:
    # NOTE: passwords with special chars are safest passed through DB_URL.
    return (
        f"mysql+pymysql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?charset={settings.db_charset}"
    )
