"""
Service configuration.

Settings are read once from the environment (and an optional ``.env`` file)
at startup and handed to every component that needs them.
"""
import secrets
import logging
from typing import List

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("authservice.config")


class ConfigError(ValueError):
    """Raised when the environment holds an unusable configuration."""


class Settings(BaseSettings):
    """Immutable process-wide configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    # environment is declared first so the secret validator can see it
    environment: str = Field("development", alias="ENVIRONMENT")
    secret_key: str = Field("", alias="JWT_SECRET_KEY", validate_default=True)
    access_token_expire_minutes: int = Field(60, gt=0, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    token_leeway_seconds: int = Field(0, ge=0, alias="TOKEN_LEEWAY_SECONDS")
    bcrypt_rounds: int = Field(12, ge=4, le=31, alias="BCRYPT_ROUNDS")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, gt=0, le=65535, alias="PORT")
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    @field_validator("secret_key")
    @classmethod
    def secret_required_in_production(cls, v, info):
        if v:
            return v
        if info.data.get("environment", "development").lower() == "production":
            raise ValueError("JWT_SECRET_KEY is required in production")
        logger.warning("JWT_SECRET_KEY not set, using a random key; tokens will not survive a restart")
        return secrets.token_urlsafe(48)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()] or ["*"]


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment and .env file.

    Args:
        overrides: Field values (or pydantic-settings options such as _env_file)
            taking precedence over the environment

    Returns:
        Settings instance

    Raises:
        ConfigError: If a value is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
