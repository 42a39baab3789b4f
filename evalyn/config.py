from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache

from .constants import MAX_UPLOAD_BYTES, DEFAULT_BACKEND_URL, DEFAULT_REQUEST_TIMEOUT


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EVALYN_",
        case_sensitive=False,
        extra="ignore"
    )

    # Remote analysis service
    backend_url: str = DEFAULT_BACKEND_URL
    request_timeout: Optional[float] = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Timeout in seconds for each remote call (None = wait forever)"
    )

    # Upload validation
    max_upload_bytes: int = Field(
        default=MAX_UPLOAD_BYTES,
        description="Largest accepted video size in bytes"
    )
    enforce_video_mime: bool = Field(
        default=False,
        description="Reject uploads whose content type is not video/*"
    )

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
