from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
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
    app_name: str = Field(default="Skill Gap Readiness Backend")
    api_prefix: str = Field(default="/api")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=True)

    # Database configuration
    # DB_URL / ORM_DB_URL win over the discrete DB_* settings.
    db_url: str | None = Field(default=None, validation_alias="DB_URL")
    orm_db_url: str | None = Field(default=None, validation_alias="ORM_DB_URL")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=3306, validation_alias="DB_PORT")
    db_name: str = Field(default="skillgap", validation_alias="DB_NAME")
    db_user: str = Field(default="root", validation_alias="DB_USER")
    db_password: str = Field(default="password", validation_alias="DB_PASSWORD")
    db_charset: str = Field(default="utf8mb4", validation_alias="DB_CHARSET")

    # Shared with the identity service that mints bearer tokens.
    jwt_secret: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        validation_alias="CORS_ORIGINS",
    )

    # Requirement / recommendation generator (OpenAI-compatible chat completions API).
    generator_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GENERATOR_API_KEY", "PERPLEXITY_API_KEY"),
    )
    generator_base_url: str = Field(default="https://api.perplexity.ai", validation_alias="GENERATOR_BASE_URL")
    generator_model: str = Field(default="sonar-pro", validation_alias="GENERATOR_MODEL")
    generator_timeout_seconds: float = Field(default=30.0, validation_alias="GENERATOR_TIMEOUT_SECONDS")
    # Only the top N ordered gaps are described to the recommendation generator.
    generator_max_gaps: int = Field(default=5, ge=1, validation_alias="GENERATOR_MAX_GAPS")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> list[str]:
        return _parse_origins(v)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def build_sqlalchemy_db_url(settings: Settings) -> str:
    # Prefer a dedicated ORM URL if provided.
    if settings.orm_db_url:
        return settings.orm_db_url

    if settings.db_url:
        return settings.db_url

    # In development, default ORM to sqlite unless explicitly configured.
    if settings.environment.lower() in {"development", "test"}:
        return "sqlite:///./dev.db"

    # NOTE: password may include special chars; safest is to rely on DB_URL for complex passwords.
    return (
        f"mysql+pymysql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?charset={settings.db_charset}"
    )


def is_generator_configured(settings: Settings) -> bool:
    return bool((settings.generator_api_key or "").strip())
