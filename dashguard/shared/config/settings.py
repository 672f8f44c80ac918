# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _section_config() -> SettingsConfigDict:
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )


def _split_csv(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///data/dashguard.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _section_config()


class SessionConfig(BaseSettings):
    cookie_name: str = Field("session", min_length=1, alias="SESSION_COOKIE_NAME")
    ttl_days: int = Field(7, ge=1, le=365, alias="SESSION_TTL_DAYS")
    # Fraction of gated requests that also reclaim expired session rows.
    sweep_probability: float = Field(0.0, ge=0.0, le=1.0, alias="SESSION_SWEEP_PROBABILITY")

    model_config = _section_config()

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_days * 24 * 60 * 60


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _section_config()

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        return _split_csv(value)

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @field_validator("cookie_samesite")
    @classmethod
    def _validate_samesite(cls, value: str) -> str:
        normalized = value.strip().capitalize()
        if normalized not in ("Lax", "Strict"):
            raise ValueError("COOKIE_SAMESITE must be Lax or Strict")
        return normalized


class GateConfig(BaseSettings):
    public_paths: Annotated[list[str], NoDecode] = Field(
        ["/login", "/api/auth/login", "/api/auth/logout"], alias="PUBLIC_PATHS"
    )
    api_prefix: str = Field("/api/", alias="API_PATH_PREFIX")
    login_path: str = Field("/login", alias="LOGIN_PATH")
    home_path: str = Field("/", alias="HOME_PATH")

    model_config = _section_config()

    @field_validator("public_paths", mode="before")
    @classmethod
    def _parse_paths(cls, value: str | list[str]) -> list[str]:
        return _split_csv(value)

    @field_validator("public_paths")
    @classmethod
    def _validate_paths(cls, value: list[str]) -> list[str]:
        for path in value:
            if not path.startswith("/"):
                raise ValueError(f"public path must start with '/': {path!r}")
        return value

    @field_validator("api_prefix", "login_path", "home_path")
    @classmethod
    def _validate_absolute(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            raise ValueError("gate paths must start with '/'")
        return value


class BootstrapConfig(BaseSettings):
    username: str = Field("admin", min_length=3, alias="DEFAULT_ADMIN_USERNAME")
    password: str = Field("admin", min_length=4, alias="DEFAULT_ADMIN_PASSWORD")

    model_config = _section_config()


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    gate: GateConfig = Field(default_factory=GateConfig)
    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

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
    return AppConfig()


__all__ = [
    "AppConfig",
    "BootstrapConfig",
    "DatabaseConfig",
    "GateConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
