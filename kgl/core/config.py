import logging
import secrets
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("kgl.config")


class Settings(BaseSettings):
    """Process configuration, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "KGL Backend API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Signing secret for access tokens. Empty means "not configured".
    secret_key: str = Field(default="", validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"))
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    database_url: str = "sqlite:///./kgl.db"

    cors_origins: List[str] = [
        "http://localhost",
        "http://localhost:3000",
    ]

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        if not self.secret_key:
            if self.debug:
                self.secret_key = secrets.token_hex(32)
                logger.warning("JWT_SECRET not set, using a generated key. Tokens will not survive a restart.")
            else:
                raise ValueError("JWT_SECRET is required. Set it in the environment or .env, or run with DEBUG=true.")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
