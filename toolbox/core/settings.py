"""Unified settings for toolbox."""

import importlib.metadata
from typing import ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_version(distribution: str) -> str:
    """Get version from installed package metadata."""
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


class Settings(BaseSettings):
    """Environment defaults for every toolbox operation."""

    DEBUG: bool = True

    PACKAGE_NAME: ClassVar[str] = "robyn-toolbox"
    VERSION: ClassVar[str] = get_version(PACKAGE_NAME)

    # Uploads
    MAX_FILE_SIZE: int = 1024 * 1024 * 1024
    ALLOWED_FILE_TYPES: list[str] = []
    RANDOM_NAME_LENGTH: int = 25

    # JSON
    MAX_JSON_SIZE: int = 1024 * 1024
    ALLOW_UNKNOWN_FIELDS: bool = False

    # Outbound
    PUSH_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(env_prefix="TOOLBOX_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()  # type: ignore
