"""
Configuration management for the AI Studio API
Uses pydantic-settings for environment variable validation
"""

from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str = "sqlite:///./ai_studio.db"
    DATABASE_ECHO: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True
    DEBUG: bool = True

    # Security (all from environment - no defaults for secrets)
    SECRET_KEY: str = ""  # Required: set via environment variable
    API_KEY_ENCRYPTION_KEY: str = ""  # Optional: falls back to SECRET_KEY
    ACCESS_TOKEN_PREFIX: str = "sk_studio_"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Application
    APP_NAME: str = "AI Studio"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"  # development or production
    PUBLIC_APP_URL: str = "http://localhost:3000"
    APP_TITLE: str = "AI Studio Clone"

    # Provider credentials (shared fallback when a user has no key of their own)
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""
    GOOGLE_GENERATIVE_AI_API_KEY: str = ""
    XAI_API_KEY: str = ""
    OPENROUTER_API_KEY: str = ""

    # Chat relay
    CHAT_HISTORY_LIMIT: int = 50
    CHAT_REQUEST_TIMEOUT: int = 60  # Coarse ceiling for one generation, in seconds
    DEFAULT_TEMPERATURE: float = 0.7
    DEFAULT_MAX_TOKENS: int = 4096

    # GitHub import
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TOKEN: str = ""  # Optional: raises the anonymous rate limit
    GITHUB_TIMEOUT: float = 15.0
    GITHUB_IMPORT_LIMIT: int = 10

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_CHAT: str = "20/minute"

    @model_validator(mode='after')
    def check_provider_credentials(self):
        """
        Warn when no shared provider credential is configured

        The service still starts: users can store their own keys, and every
        chat request against an unconfigured provider fails with a
        structured "API key missing" error instead.
        """
        shared_keys = [
            self.OPENAI_API_KEY,
            self.ANTHROPIC_API_KEY,
            self.GOOGLE_GENERATIVE_AI_API_KEY,
            self.XAI_API_KEY,
            self.OPENROUTER_API_KEY,
        ]
        if not any(shared_keys):
            logger.warning(
                "No provider API keys configured in environment; "
                "chat will rely on user-supplied keys"
            )

        if not self.SECRET_KEY and self.ENVIRONMENT == "production":
            raise ValueError("SECRET_KEY must be set in production")

        return self

    @property
    def encryption_secret(self) -> str:
        """Secret used to derive the key that protects stored provider keys"""
        return self.API_KEY_ENCRYPTION_KEY or self.SECRET_KEY

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
