from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


CsvList = Annotated[list[str], NoDecode]


def _parse_csv_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("[") and raw.endswith("]"):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [str(v).strip() for v in parsed if str(v).strip()]
            except ValueError:
                pass
        parts = [p.strip() for p in raw.split(",")]
        return [p for p in parts if p]
    return [str(value).strip()]


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: Literal["dev", "prod"] = Field(default="dev", validation_alias="APP_ENV")
    app_name: str = Field(default="series-matcher-backend", validation_alias="APP_NAME")
    api_v1_prefix: str = Field(default="/v1", validation_alias="API_V1_PREFIX")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=True, validation_alias="LOG_JSON")

    docs_enabled: bool = Field(default=True, validation_alias="DOCS_ENABLED")

    cors_allow_origins: CsvList = Field(default_factory=list, validation_alias="CORS_ALLOW_ORIGINS")
    cors_allow_methods: CsvList = Field(
        default_factory=lambda: ["GET", "POST", "DELETE", "OPTIONS"],
        validation_alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: CsvList = Field(
        default_factory=lambda: ["Authorization", "Content-Type", "Accept", "X-Request-ID"],
        validation_alias="CORS_ALLOW_HEADERS",
    )
    cors_allow_credentials: bool = Field(default=False, validation_alias="CORS_ALLOW_CREDENTIALS")

    enable_security_headers: bool = Field(default=True, validation_alias="ENABLE_SECURITY_HEADERS")
    trusted_proxy_headers: bool = Field(default=False, validation_alias="TRUSTED_PROXY_HEADERS")

    postgres_dsn: SecretStr = Field(..., validation_alias="POSTGRES_DSN")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_timeout_seconds: int = Field(default=30, validation_alias="DB_POOL_TIMEOUT_SECONDS")
    db_command_timeout_seconds: int = Field(default=30, validation_alias="DB_COMMAND_TIMEOUT_SECONDS")
    repository_timeout_seconds: float = Field(default=2.5, validation_alias="REPOSITORY_TIMEOUT_SECONDS")

    default_page_size: int = Field(default=20, validation_alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, validation_alias="MAX_PAGE_SIZE")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _validate_csv_lists(cls, v: Any) -> list[str]:
        return _parse_csv_list(v)

    @model_validator(mode="after")
    def _validate_ranges(self) -> "BaseAppSettings":
        if self.repository_timeout_seconds <= 0:
            raise ValueError("REPOSITORY_TIMEOUT_SECONDS must be positive")
        if self.db_pool_size <= 0:
            raise ValueError("DB_POOL_SIZE must be positive")
        if self.max_page_size <= 0:
            raise ValueError("MAX_PAGE_SIZE must be positive")
        if not (0 < self.default_page_size <= self.max_page_size):
            raise ValueError("DEFAULT_PAGE_SIZE must be within (0, MAX_PAGE_SIZE]")
        return self

    def postgres_dsn_plain(self) -> str:
        return self.postgres_dsn.get_secret_value()


class DevSettings(BaseAppSettings):
    docs_enabled: bool = Field(default=True, validation_alias="DOCS_ENABLED")


class ProdSettings(BaseAppSettings):
    docs_enabled: bool = Field(default=False, validation_alias="DOCS_ENABLED")


Settings = BaseAppSettings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    env = (os.getenv("APP_ENV") or "dev").strip().lower()
    if env == "prod":
        return ProdSettings()
    return DevSettings()
