"""Application configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "clinicdesk"

    # Application
    APP_NAME: str = "ClinicDesk"
    API_V1_PREFIX: str = "/api"
    PORT: int = 3000

    # JWT
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # CORS
    BACKEND_CORS_ORIGINS: str = '["http://localhost:8080", "http://localhost:5173", "http://localhost:5174", "http://127.0.0.1:5173"]'
    CORS_ORIGIN: Optional[str] = None

    # OAuth providers
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_CALLBACK_URL: str = "http://localhost:3000/api/auth/google/callback"
    FACEBOOK_APP_ID: str = ""
    FACEBOOK_APP_SECRET: str = ""
    FACEBOOK_CALLBACK_URL: str = "http://localhost:3000/api/auth/facebook/callback"
    FRONTEND_URL: str = "http://localhost:5173"

    # Medical record attachments
    MAX_UPLOAD_SIZE_BYTES: int = 10 * 1024 * 1024
    MAX_FILES_PER_UPLOAD: int = 5

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from JSON string (browsers send origins without a trailing slash)."""
        try:
            origins = json.loads(self.BACKEND_CORS_ORIGINS)
        except ValueError:
            origins = ["http://localhost:5173"]

        if self.CORS_ORIGIN:
            origins.append(self.CORS_ORIGIN)

        return [origin.rstrip("/") for origin in origins if origin]


settings = Settings()
