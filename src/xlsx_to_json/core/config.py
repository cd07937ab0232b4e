from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="XLSX_TO_JSON_", extra="ignore"
    )

    service_endpoint: Optional[str] = None
    api_key: Optional[str] = None
    api_key_header: str = "X-API-KEY"

    timeout_seconds: int = Field(default=60, ge=1)
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=2.0, ge=0)
    upload_retry_delay: float = Field(default=5.0, ge=0)
    download_retry_delay: float = Field(default=5.0, ge=0)

    max_file_size_mb: int = Field(default=50, ge=1)
    health_check: bool = True

    log_level: str = "INFO"
    debug: bool = False


def get_settings() -> Settings:
    return Settings()
