"""
Configuration management using Pydantic Settings.
Follows Single Responsibility Principle - only handles configuration.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="Object Gateway", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")

    # API Service
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    api_reload: bool = Field(default=False, alias="API_RELOAD")

    # MinIO / S3 compatible object storage
    minio_endpoint: str = Field(default="localhost:9000", alias="MINIO_ENDPOINT")
    minio_access_key: str = Field(default="minioadmin", alias="MINIO_ACCESS_KEY")
    minio_secret_key: str = Field(default="minioadmin", alias="MINIO_SECRET_KEY")
    minio_session_token: Optional[str] = Field(
        default=None, alias="MINIO_SESSION_TOKEN"
    )
    minio_use_ssl: bool = Field(default=False, alias="MINIO_USE_SSL")
    # A fixed region keeps URL signing offline (no bucket-location lookup)
    minio_region: str = Field(default="us-east-1", alias="MINIO_REGION")

    # Gateway behaviour
    presigned_default_expiry_seconds: int = Field(
        default=900, alias="PRESIGNED_DEFAULT_EXPIRY_SECONDS"
    )
    text_encoding: str = Field(default="utf-8", alias="TEXT_ENCODING")

    # Archive streaming
    archive_compression_level: int = Field(
        default=9, ge=0, le=9, alias="ARCHIVE_COMPRESSION_LEVEL"
    )
    archive_read_chunk_size: int = Field(
        default=64 * 1024, gt=0, alias="ARCHIVE_READ_CHUNK_SIZE"
    )
    upload_part_size: int = Field(
        default=5 * 1024 * 1024, ge=5 * 1024 * 1024, alias="UPLOAD_PART_SIZE"
    )  # S3 minimum multipart size
    stream_buffer_size: int = Field(
        default=1024 * 1024, gt=0, alias="STREAM_BUFFER_SIZE"
    )  # Max bytes held between compressor and uploader

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_dir: str = Field(default="logs", alias="LOG_DIR")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to ensure single instance (Singleton pattern).
    """
    return Settings()
