"""Application configuration."""

import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TIME_LABEL_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def split_csv(value: str) -> list[str]:
    """Split a comma-separated setting, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Settings read from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    app_name: str = Field(default="DentWise API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Storage
    database_url: str = Field(..., alias="DATABASE_URL")

    # Session tokens
    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=30, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_days: int = Field(default=30, alias="REFRESH_TOKEN_EXPIRE_DAYS")

    # Identity provider; the raw JSON wins over the file path
    firebase_credentials_path: str | None = Field(default=None, alias="FIREBASE_CREDENTIALS_PATH")
    firebase_config_json: str | None = Field(default=None, alias="FIREBASE_CONFIG_JSON")

    # Voice assistant handed to the browser SDK
    vapi_assistant_id: str | None = Field(default=None, alias="VAPI_ASSISTANT_ID")

    # Booking
    booking_time_slots_str: str = Field(
        default="09:00,09:30,10:00,10:30,11:00,11:30,14:00,14:30,15:00,15:30,16:00,16:30",
        alias="BOOKING_TIME_SLOTS",
        description="Comma-separated HH:MM labels offered on the booking form",
    )
    default_appointment_reason: str = Field(
        default="General consultation",
        alias="DEFAULT_APPOINTMENT_REASON",
    )

    # HTTP
    cors_origins_str: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    @field_validator("booking_time_slots_str")
    @classmethod
    def validate_time_slots(cls, value: str) -> str:
        """Every offered label must be a zero-padded 24h ``HH:MM``."""
        labels = split_csv(value)
        if not labels:
            raise ValueError("BOOKING_TIME_SLOTS must list at least one time")
        bad = [label for label in labels if not TIME_LABEL_PATTERN.match(label)]
        if bad:
            raise ValueError(f"Invalid time labels: {', '.join(bad)}")
        return value

    @field_validator("vapi_assistant_id", "firebase_config_json", "firebase_credentials_path")
    @classmethod
    def blank_as_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @property
    def booking_time_slots(self) -> list[str]:
        """Offerable time labels in menu order."""
        return split_csv(self.booking_time_slots_str)

    @property
    def cors_origins(self) -> list[str]:
        return split_csv(self.cors_origins_str)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
