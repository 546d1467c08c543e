from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application-wide settings populated from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="JLR_",
        extra="ignore",
    )

    username: str | None = None
    password: str | None = None
    device_id: str | None = None
    vin: str | None = None
    pin: str | None = None
    wait_minutes: float = Field(default=1.0, gt=0)
    low_battery_threshold: int = Field(default=25, ge=0, le=100)
    target_temperature: float = 22.0
    wake_before_commands: bool = True
    timeout: float = 30.0
