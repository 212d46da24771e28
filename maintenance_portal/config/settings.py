"""
Environment configuration for the campus maintenance portal.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from typing import List, Optional
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        import string
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = Field(
        default="Campus Maintenance Portal",
        validation_alias=AliasChoices("APP_NAME", "PROJECT_NAME"),
    )
    API_VERSION: str = Field(default="v1", validation_alias=AliasChoices("API_VERSION", "PROJECT_VERSION"))
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    CORS_ORIGINS: str = Field(default="*", validation_alias=AliasChoices("CORS_ORIGINS", "BACKEND_CORS_ORIGINS"))

    # Database configuration
    DATABASE_URL: str = "sqlite:///./maintenance_portal.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10

    # Identity provider (bearer tokens)
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Blob storage for complaint images
    UPLOAD_DIR: str = "uploads"
    UPLOAD_BASE_URL: str = "/uploads"
    MAX_IMAGE_SIZE: int = Field(
        default=5 * 1024 * 1024,
        validation_alias=AliasChoices("MAX_IMAGE_SIZE", "MAX_FILE_SIZE"),
    )
    MAX_IMAGES_PER_COMPLAINT: int = 10

    # Email configuration
    EMAIL_ENABLED: bool = True
    EMAIL_BACKEND: str = "logging"
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = Field(default=None, validation_alias=AliasChoices("SMTP_USER", "SMTP_USERNAME"))
    SMTP_PASSWORD: Optional[str] = None
    SMTP_TLS: bool = True
    EMAIL_FROM_NAME: str = "Campus Maintenance"
    EMAIL_FROM_ADDRESS: str = Field(
        default="no-reply@campus.edu",
        validation_alias=AliasChoices("EMAIL_FROM_ADDRESS", "FROM_EMAIL"),
    )

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @field_validator("EMAIL_BACKEND")
    @classmethod
    def validate_email_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"logging", "smtp"}:
            raise ValueError("EMAIL_BACKEND must be 'logging' or 'smtp'")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.strip().upper()

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a comma separated string"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        return self.DATABASE_URL

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
