"""
Core configuration for DiamondQuiz Backend
Daily quizzes, diamond rewards and leaderboards
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field
import secrets

class Settings(BaseSettings):
    """Application settings"""

    # Application Settings
    APP_NAME: str = "DiamondQuiz"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Daily quiz backend with diamond rewards and leaderboards"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "DiamondQuiz Backend"

    # Security
    SECRET_KEY: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = "HS256"

    # Database
    DATABASE_URL: Optional[str] = Field(default=None)

    # CORS
    BACKEND_CORS_ORIGINS: str = Field(
        default=(
            "http://localhost:5173,http://localhost:3000,http://localhost,"
            "https://localhost,capacitor://localhost"
        )
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = Field(default=None)
    LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    RATE_LIMIT_REQUESTS: int = Field(default=100)
    RATE_LIMIT_PERIOD: int = Field(default=60)  # seconds

    # Leaderboard
    LEADERBOARD_DEFAULT_PER_PAGE: int = Field(default=10)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def get_database_url(self) -> str:
        """Get database URL with proper formatting"""
        if self.DATABASE_URL:
            # Handle Render's postgres:// URLs
            db_url = self.DATABASE_URL
            if db_url.startswith("postgres://"):
                db_url = db_url.replace("postgres://", "postgresql://", 1)
            return db_url

        # Default for development
        return "sqlite:///./quiz.db"

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as list"""
        if self.BACKEND_CORS_ORIGINS:
            return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
        return ["http://localhost:3000", "http://localhost:5173"]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

settings = Settings()
