"""
Rentomatic Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates them, and builds a Settings object. `create_app()` receives
       one instance and hands it to its collaborators via `app.state`; no
       business-logic module reads the environment itself.
Who:   The application factory, the repository dependency, Alembic and the
       `rentomatic-manage` CLI.
When:  Once at startup. The CLI builds its own instance AFTER applying the
       JSON config file to the environment (see manage.py).

Where values come from:
    `rentomatic-manage` reads config/<APPLICATION_CONFIG>.json and exports
    each entry unless already set. Docker Compose passes the same variables
    to the web container. Names follow the Postgres image conventions
    (POSTGRES_USER, POSTGRES_PASSWORD, ...). FLASK_ENV / FLASK_CONFIG are
    accepted as aliases of APP_ENV / APP_CONFIG for older config files.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

VALID_APP_CONFIGS = {"development", "testing", "production"}
_APP_CONFIG_SHORTHANDS = {"dev": "development", "test": "testing", "prod": "production"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local development stack.
    Production deployments MUST override POSTGRES_PASSWORD.
    """

    # ── Application ───────────────────────────────────────────────────────
    app_env: str = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "FLASK_ENV"),
    )
    # Selects the configuration variant: development, testing, production
    app_config: str = Field(
        default="development",
        validation_alias=AliasChoices("APP_CONFIG", "FLASK_CONFIG"),
    )

    # ── Postgres ──────────────────────────────────────────────────────────
    # POSTGRES_DB is the admin database used for provisioning;
    # APPLICATION_DB is the one the application actually queries.
    postgres_db: str = Field(default="postgres")
    postgres_user: str = Field(default="postgres")
    postgres_password: str = Field(default="postgres")
    postgres_hostname: str = Field(default="localhost")
    postgres_port: int = Field(default=5432, ge=1, le=65535)
    application_db: str = Field(default="application")

    # Connection pool, handed straight to SQLAlchemy
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Repository ────────────────────────────────────────────────────────
    # sql:    SqlRoomRepository against APPLICATION_DB
    # memory: MemRoomRepository seeded from ROOMS_FILE (JSON array of rooms)
    repository_backend: str = Field(default="sql")
    rooms_file: Optional[str] = Field(default=None)

    # ── HTTP ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    log_level: str = Field(default="INFO")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("app_config")
    @classmethod
    def validate_app_config(cls, v: str) -> str:
        name = _APP_CONFIG_SHORTHANDS.get(v.lower(), v.lower())
        if name not in VALID_APP_CONFIGS:
            raise ValueError(
                f"Invalid app_config '{v}'. Must be one of: {sorted(VALID_APP_CONFIGS)}"
            )
        return name

    @field_validator("repository_backend")
    @classmethod
    def validate_repository_backend(cls, v: str) -> str:
        backend = v.lower()
        if backend not in {"sql", "memory"}:
            raise ValueError(f"Invalid repository_backend '{v}'. Must be 'sql' or 'memory'")
        return backend

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.app_config == "production"

    def _postgres_url(self, database: str) -> URL:
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_hostname,
            port=self.postgres_port,
            database=database,
        )

    @property
    def database_url(self) -> URL:
        """URL of the application database (APPLICATION_DB)."""
        return self._postgres_url(self.application_db)

    @property
    def admin_database_url(self) -> URL:
        """URL of the admin database (POSTGRES_DB), used to CREATE DATABASE."""
        return self._postgres_url(self.postgres_db)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for the running process, built on first use."""
    return Settings()
