"""
Configuration management using Pydantic Settings

Values come from the environment (prefix DYNFORM_) or a .env file in the
working directory, e.g. DYNFORM_PORT=8080.
"""
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="DYNFORM_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "Form API"
    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=3000, ge=1, le=65535, description="API port")
    log_level: str = Field(default="INFO", description="Logging level")
    allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )
    submit_url: str = Field(
        default="http://localhost:3000/submit-form",
        description="Gateway endpoint used by the interactive form session"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
