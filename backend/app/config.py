"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"
    mongo_db_name: str = "accounts_db"

    # JWT Configuration
    jwt_secret_key: str = "CHANGE_ME_IN_PRODUCTION_USE_STRONG_SECRET"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # Session cookie
    session_cookie_name: str = "token"
    environment: str = "development"

    # HTTP
    api_prefix: str = "/api/v1/users"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Admins receive the whole directory in the login payload
    login_includes_directory: bool = True

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def secure_cookies(self) -> bool:
        """Only send the session cookie over HTTPS in production."""
        return self.environment.lower() == "production"

    @property
    def token_expire_seconds(self) -> int:
        return self.jwt_access_token_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
