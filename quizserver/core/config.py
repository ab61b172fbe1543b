from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Annotated, Any, List, Literal

from pydantic import AliasChoices, AnyUrl, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_FILE_ENV = "QUIZSERVER_CONFIG"
DEFAULT_CONFIG_FILE = "config.yaml"


class Settings(BaseSettings):
    # .env and config.yaml are both optional; unknown keys are rejected to catch typos
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid",
    )

    APP_NAME: str = "Quiz Server"
    APP_ENV: str = Field(
        "dev",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Application environment: dev|staging|prod",
    )

    BACKEND_HOST: str = Field(
        "0.0.0.0",
        validation_alias=AliasChoices("BACKEND_HOST", "app_host"),
        description="Interface to bind",
    )
    BACKEND_PORT: int = Field(
        8081,
        validation_alias=AliasChoices("BACKEND_PORT", "app_port"),
        description="Backend port to bind",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    # Storage
    STORAGE_BACKEND: Literal["filesystem", "supabase"] = Field(
        "filesystem",
        validation_alias=AliasChoices("STORAGE_BACKEND", "storage_backend"),
        description="Where quiz documents are kept",
    )
    QUIZZES_DIR: Path = Field(
        Path("quizzes"),
        validation_alias=AliasChoices("QUIZZES_DIR", "quizzes_dir"),
        description="Directory for the filesystem backend",
    )
    STORAGE_BUCKET: str | None = Field(
        None,
        validation_alias=AliasChoices("STORAGE_BUCKET", "storage_bucket", "s3_bucket"),
        description="Bucket for the object store backend",
    )

    # Supabase
    SUPABASE_URL: AnyUrl | None = Field(
        None,
        validation_alias=AliasChoices("SUPABASE_URL", "supabase_url"),
        description="Your Supabase project URL",
    )
    SUPABASE_SERVICE_ROLE_KEY: str | None = Field(
        None,
        validation_alias=AliasChoices("SUPABASE_SERVICE_ROLE_KEY", "supabase_service_role_key"),
        description="Service role key (server-side)",
    )

    # CORS origins
    FRONTEND_ORIGINS: Annotated[List[str], NoDecode] = Field(
        [
            "http://localhost:8081",
            "http://127.0.0.1:8081",
        ],
        validation_alias=AliasChoices("FRONTEND_ORIGINS", "frontend_origins"),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file),
            file_secret_settings,
        )

    @field_validator("FRONTEND_ORIGINS", mode="before")
    @classmethod
    def _parse_origins(cls, v: Any) -> Any:
        """
        FRONTEND_ORIGINS may be given as:
        - a JSON array: ["http://localhost:8081","http://localhost:3000"]
        - or a string: http://localhost:8081,http://localhost:3000
        - or with ; as the separator
        """
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                try:
                    return json.loads(s)
                except json.JSONDecodeError:
                    # broken JSON falls through to the plain split
                    pass
            return [item.strip() for item in s.replace(";", ",").split(",") if item.strip()]
        return v

    @model_validator(mode="before")
    @classmethod
    def _unpack_aws_section(cls, data: Any) -> Any:
        """Accept the legacy layout `aws: {s3_bucket: ...}` as STORAGE_BUCKET."""
        if not isinstance(data, dict) or "aws" not in data:
            return data
        data = dict(data)
        section = data.pop("aws")
        if section is None:
            return data
        if not isinstance(section, dict) or set(section) - {"s3_bucket"}:
            raise ValueError("aws section only supports the s3_bucket key")
        bucket_keys = ("STORAGE_BUCKET", "storage_bucket", "s3_bucket")
        if section.get("s3_bucket") and not any(key in data for key in bucket_keys):
            data["STORAGE_BUCKET"] = section["s3_bucket"]
        return data

    @model_validator(mode="after")
    def _check_backend(self) -> "Settings":
        if self.STORAGE_BACKEND == "supabase":
            missing = [
                name
                for name in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "STORAGE_BUCKET")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"supabase storage backend requires {', '.join(missing)}")
        return self


settings = Settings()
