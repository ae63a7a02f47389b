from __future__ import annotations

import json
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_JWT_SECRET = "default-secret-key"


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from employee_api.db.config.StoreSettings, which focuses on
    where the JSON documents live and how they are loaded.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Employee Management API")
    APP_DESCRIPTION: str = Field(
        default=(
            "REST API for managing employee records with JWT authentication "
            "and role-based access control."
        )
    )
    APP_VERSION: str = Field(default="1.0.0")

    # Environment label; anything other than "production" exposes error details
    ENVIRONMENT: str = Field(default="development", description="development/test/production")
    LOG_LEVEL: str = Field(default="INFO")

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Comma-separated list or JSON array of allowed origins.",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)

    # Tokens
    JWT_SECRET_KEY: str = Field(default=DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24, ge=1)

    # Passwords
    PASSWORD_HASH_ROUNDS: int = Field(default=10, ge=4, le=31)

    # Pagination defaults applied at the HTTP boundary
    DEFAULT_PAGE: int = Field(default=1, ge=1)
    DEFAULT_PER_PAGE: int = Field(default=10, ge=1)
    MAX_PER_PAGE: int = Field(default=100, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["http://localhost:5173"]
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Constructed on every call so tests can change the environment between cases.
    """
    return AppSettings()
