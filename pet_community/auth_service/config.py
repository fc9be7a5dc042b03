"""
Configuration management for the pet community auth service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Auth service configuration loaded from environment variables"""

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./pet_community.db"

    # Token Configuration
    JWT_SECRET: str = "your_jwt_secret_key"
    JWT_EXPIRES_IN: str = "7d"
    JWT_ALGORITHM: str = "HS256"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


# Global settings instance
settings = Settings()
