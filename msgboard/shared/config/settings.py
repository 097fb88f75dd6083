# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_SETTINGS = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///board.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SETTINGS


class StorageConfig(BaseSettings):
    backend: Literal["sql", "json", "memory"] = Field("sql", alias="STORAGE_BACKEND")
    data_dir: Path = Field(Path("instance"), alias="DATA_DIR")

    model_config = _SETTINGS

    @property
    def users_file(self) -> Path:
        return self.data_dir / "users.json"

    @property
    def posts_file(self) -> Path:
        return self.data_dir / "posts.json"


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    session_cookie_name: str = Field("board_session", alias="SESSION_COOKIE_NAME")

    # Sessions and credentials
    session_ttl: int = Field(7 * 24 * 60 * 60, ge=0, alias="SESSION_TTL")
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # CSRF protection
    enable_csrf: bool = Field(False, alias="ENABLE_CSRF")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SETTINGS

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


class PostsConfig(BaseSettings):
    recent_limit: int = Field(50, ge=0, alias="POSTS_RECENT_LIMIT")
    max_length: int = Field(1000, ge=1, alias="POSTS_MAX_LENGTH")

    model_config = _SETTINGS


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _posts_config_factory() -> PostsConfig:
    return PostsConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")
    static_dir: Path | None = Field(None, alias="STATIC_DIR")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    posts: PostsConfig = Field(default_factory=_posts_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if not self.security.enable_csrf:
            warnings.append("⚠️  CSRF protection is DISABLED")
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.storage.backend == "memory":
            warnings.append("⚠️  STORAGE_BACKEND=memory loses every user and post on restart")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "PostsConfig",
    "SecurityConfig",
    "StorageConfig",
    "load_config",
]
