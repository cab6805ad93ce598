"""Configuration management using pydantic-settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/gatehouse.db"
    auth_prefix: str = "/api/auth"
    users_prefix: str = "/api/users"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Bcrypt work factor: 11 means 2^11 rounds
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 11

    # Session Configuration
    session_backend: Literal["sqlite", "memory"] = "sqlite"
    session_cookie_name: str = "gatehouse.sid"
    session_max_age_seconds: int = 60 * 60
    # Only send the cookie over HTTPS; disable for local development
    session_cookie_secure: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GATEHOUSE_",
        case_sensitive=False
    )


settings = Settings()
