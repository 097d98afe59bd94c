from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    base_url: str = "http://localhost:8000/api"
    token: Optional[str] = None
    timeout_seconds: float = Field(default=15.0, gt=0)
    read_retry_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts for GET requests on timeouts/read errors. 1 disables retries.",
    )


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")
    use_json: bool = Field(default=False, description="Use JSON format instead of colored output")


class StateSettings(BaseModel):
    history_size: int = Field(default=50, ge=1, description="Settled operation records to keep.")


class NotificationSettings(BaseModel):
    buffer_size: int = Field(default=20, ge=1)


class ControllerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MODCTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    state: StateSettings = StateSettings()
    notifications: NotificationSettings = NotificationSettings()
