"""Application configuration using Pydantic Settings."""

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Storage settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    storage_backend: Literal["mongodb", "memory"] = Field(
        default="mongodb",
        description="Storage provider implementation: mongodb or memory",
    )

    # MongoDB / DocumentDB
    mongodb_connection_string: str = Field(
        default="mongodb://localhost:27017/templates",
        description="MongoDB connection string; the path selects the database",
    )
    mongodb_namespace: str | None = Field(
        default=None,
        description="Optional suffix appended to collection names",
    )
    mongodb_connect_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Driver connect timeout in milliseconds",
    )
    mongodb_socket_timeout_ms: int = Field(
        default=30000,
        gt=0,
        description="Driver socket timeout in milliseconds",
    )
    mongodb_create_indexes: bool = Field(
        default=True,
        description="Create unique id indexes when connecting",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level used by the command line entry point",
    )


settings = Settings()
