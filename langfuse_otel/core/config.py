from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from langfuse_otel.core.errors import MissingCredentialsError

DEFAULT_BASE_URL = "https://cloud.langfuse.com"
DEFAULT_SERVICE_NAME = "langfuse-otel-python"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    public_key: str = Field(default="", alias="LANGFUSE_PUBLIC_KEY")
    secret_key: str = Field(default="", alias="LANGFUSE_SECRET_KEY")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="LANGFUSE_BASE_URL")
    release: str | None = Field(default=None, alias="LANGFUSE_RELEASE")
    environment: str | None = Field(default=None, alias="LANGFUSE_ENVIRONMENT")
    is_public: bool = Field(default=False, alias="LANGFUSE_IS_PUBLIC")

    service_name: str = Field(default=DEFAULT_SERVICE_NAME, alias="LANGFUSE_SERVICE_NAME")
    tracing_enabled: bool = Field(default=True, alias="LANGFUSE_TRACING_ENABLED")
    register_global_provider: bool = Field(default=True, alias="LANGFUSE_REGISTER_GLOBAL_PROVIDER")
    export_timeout_seconds: float = Field(default=10.0, gt=0, alias="LANGFUSE_TIMEOUT")
    # BatchSpanProcessor rejects a batch size above its queue size (2048).
    flush_at: int = Field(default=512, ge=1, le=2048, alias="LANGFUSE_FLUSH_AT")
    flush_interval_seconds: float = Field(default=5.0, gt=0, alias="LANGFUSE_FLUSH_INTERVAL")

    log_level: str = Field(default="WARNING", alias="LANGFUSE_LOG_LEVEL")

    @property
    def has_credentials(self) -> bool:
        return bool(self.public_key and self.secret_key)

    def require_credentials(self) -> None:
        if not self.has_credentials:
            raise MissingCredentialsError("public key and secret key are required")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
