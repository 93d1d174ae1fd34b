"""Application configuration via environment variables."""
import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./qplan.db"
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TIMEOUT_SECONDS: float = 30.0
    ADMIN_EMAIL: str = "admin@example.com"
    DISPLAY_TIMEZONE: str = "UTC"  # IANA tz used when rendering dates for the assistant
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    @field_validator("DISPLAY_TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone: {value}")
        return value

    class Config:
        env_file = ".env"


settings = Settings()
