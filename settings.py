# settings.py
"""
FitTrack API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # MongoDB
    DATABASE_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )
    DATABASE_NAME: str = Field(default="fittrack")
    MONGO_TIMEOUT_MS: int = Field(default=5000, description="Server selection timeout")
    MONGO_MAX_POOL_SIZE: int = Field(default=50)
    MONGO_MIN_POOL_SIZE: int = Field(default=10)

    # JWT - REQUIRED from environment
    SECRET_KEY: str = Field(..., description="JWT signing secret (required)")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24)
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # CORS - the Vite dev server serves the front end on 5173
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"]
    )

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENV == "production"

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL.startswith("mongodb"):
            raise ValueError("DATABASE_URL must be a MongoDB connection string")
        if not self.SECRET_KEY or len(self.SECRET_KEY) < 16:
            raise ValueError("SECRET_KEY must be at least 16 characters in production")


settings = Settings()

# Validate in production
if settings.is_production:
    settings.validate_required_settings()
