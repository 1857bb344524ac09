"""Application configuration with validation."""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard settings, read from the environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Hackathon Scoring Dashboard"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # File storage
    DATA_DIR: Path = Field(default=Path("data"), description="Directory holding registry and dataset files")
    REGISTRY_FILE: str = "hackathons.json"
    FILE_MIRROR_ENABLED: bool = Field(
        default=True,
        description="Also write the encoded dataset to disk when Redis is the active backend",
    )

    # Redis (remote backend is active only when REDIS_URL is set)
    REDIS_URL: Optional[str] = None
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0, gt=0, le=60)

    # Admin
    ADMIN_PASSWORD: Optional[SecretStr] = None

    @field_validator("REDIS_URL")
    @classmethod
    def blank_redis_url_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has an admin password."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.ADMIN_PASSWORD is None:
                raise ValueError("ADMIN_PASSWORD is required in production")
        return self

    @property
    def use_redis(self) -> bool:
        return self.REDIS_URL is not None

    @property
    def registry_path(self) -> Path:
        return self.DATA_DIR / self.REGISTRY_FILE


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
