"""Configuration management for fs-utils."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "fs-utils"

    file_encoding: str = "utf-8"
    copy_chunk_size: int = 64 * 1024

    detached_walk_workers: int = 4
    detached_walk_inline: bool = False

    model_config = {
        "env_prefix": "FS_UTILS_",
        "case_sensitive": False,
    }


settings = Settings()
