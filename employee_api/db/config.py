from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """
    Settings for the JSON document stores.

    Reads from environment variables (or .env via pydantic-settings):
      - DATA_DIR: directory holding the documents
      - USERS_FILE / EMPLOYEES_FILE: document file names inside DATA_DIR
      - STORE_STRICT_LOAD: raise instead of returning an empty collection when a
        document is missing or corrupt
    """

    DATA_DIR: Path = Field(default=Path("data"), description="Directory for JSON documents")
    USERS_FILE: str = Field(default="users.json")
    EMPLOYEES_FILE: str = Field(default="employees.json")
    STORE_STRICT_LOAD: bool = Field(
        default=False,
        description="Fail loudly on missing/corrupt documents instead of loading an empty list.",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def users_path(self) -> Path:
        return Path(self.DATA_DIR) / self.USERS_FILE

    @property
    def employees_path(self) -> Path:
        return Path(self.DATA_DIR) / self.EMPLOYEES_FILE


# PUBLIC_INTERFACE
def get_store_settings() -> StoreSettings:
    """Return store settings populated from the environment."""
    return StoreSettings()
