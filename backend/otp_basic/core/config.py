from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "otp-basic"
    app_env: str = "development"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080

    # "memory" keeps tokens in-process, "sql" persists through DATABASE_URL
    store_backend: Literal["memory", "sql"] = "sql"
    database_url: str = "sqlite:///./otp_basic.sqlite"
    db_pool_timeout: float = 5.0

    # base64 of 32 random bytes; when empty, secrets are stored as plain base32
    secret_encryption_key: str | None = None

    # TOTP
    totp_digits: int = Field(default=6, ge=6, le=8)
    totp_interval: int = Field(default=30, gt=0)
    totp_valid_window: int = Field(default=1, ge=0, le=10)
    default_issuer: str = "otp-basic"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("secret_encryption_key", mode="before")
    @classmethod
    def _blank_key_is_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return a cached settings object."""
    return Settings()
