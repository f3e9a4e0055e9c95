"""
Configuration management for VidhiSahayak.

This module provides configuration management with proper environment
variable handling and validation. Every section reads its values from the
process environment (optionally populated from a ``.env`` file).
"""

import logging
from typing import Optional, List
from pydantic_settings import BaseSettings
from pydantic import field_validator, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class DatabaseConfig(BaseSettings):
    """Database configuration.

    ``DATABASE_URL`` may point at the Supabase Postgres instance or any other
    SQLAlchemy URL. When it is not set the application runs without
    persistence: chat is stateless and lawyer listings come from the bundled
    sample data.
    """

    database_url: Optional[str] = Field(default=None, description="SQLAlchemy database URL")

    # Connection pool settings (ignored for SQLite)
    db_pool_size: int = Field(default=10)
    db_max_overflow: int = Field(default=20)
    db_pool_timeout: int = Field(default=30)

    @field_validator('database_url')
    @classmethod
    def normalize_database_url(cls, v):
        """Treat blank values as unset and accept the legacy postgres:// scheme."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if v.startswith("postgres://"):
            v = "postgresql://" + v[len("postgres://"):]
        return v

    @property
    def is_configured(self) -> bool:
        return self.database_url is not None


class SecurityConfig(BaseSettings):
    """Security configuration with validation."""

    # JWT settings
    secret_key: str = Field(...)
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60)

    # Password settings
    min_password_length: int = Field(default=8)
    max_password_length: int = Field(default=128)

    @field_validator('secret_key')
    @classmethod
    def validate_secret_key(cls, v):
        """Validate secret key strength."""
        if v == 'supersecretkey' or len(v) < 32:
            raise ValueError('Secret key must be at least 32 characters and not be the default')
        return v


class ApplicationConfig(BaseSettings):
    """Main application configuration."""

    # Application settings
    app_name: str = Field(default="VidhiSahayak")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(default="Legal assistance API for Indian citizens")
    env: str = Field(default="development")
    debug: bool = Field(default=False)

    # API settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Data limits
    max_query_length: int = Field(default=4000)
    max_tts_text_length: int = Field(default=5000)

    @field_validator('env')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_envs = ['development', 'staging', 'production', 'test']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of: {valid_envs}')
        return v

    @field_validator('api_port')
    @classmethod
    def validate_api_port(cls, v):
        """Validate API port."""
        if not 1 <= v <= 65535:
            raise ValueError('API port must be between 1 and 65535')
        return v

    @property
    def environment(self) -> str:
        return self.env


class AIConfig(BaseSettings):
    """Provider keys and generation settings for the chat pipeline."""

    # Provider credentials; a provider without a key is skipped
    gemini_api_key: Optional[str] = Field(default=None)
    perplexity_api_key: Optional[str] = Field(default=None)
    openai_api_key: Optional[str] = Field(default=None)
    google_tts_api_key: Optional[str] = Field(default=None)

    # Models, tried in order for Gemini
    gemini_models: List[str] = Field(
        default_factory=lambda: [
            "gemini-1.5-flash-latest",
            "gemini-1.5-flash",
            "gemini-1.5-pro-latest",
        ]
    )
    perplexity_model: str = Field(default="sonar-small-online")
    perplexity_base_url: str = Field(default="https://api.perplexity.ai")
    openai_model: str = Field(default="gpt-4o-mini")
    tts_endpoint: str = Field(default="https://texttospeech.googleapis.com/v1/text:synthesize")

    # Generation settings
    ai_temperature: float = Field(default=0.2)
    ai_max_output_tokens: int = Field(default=400)
    chat_history_limit: int = Field(default=10)

    # Retry settings
    ai_rate_limit_attempts: int = Field(default=2)
    ai_rate_limit_sleep: float = Field(default=2.0)
    ai_request_timeout: float = Field(default=30.0)

    @field_validator('gemini_api_key', 'perplexity_api_key', 'openai_api_key', 'google_tts_api_key')
    @classmethod
    def blank_key_is_unset(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('ai_rate_limit_attempts', 'chat_history_limit')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError('Value must be at least 1')
        return v

    @field_validator('ai_rate_limit_sleep')
    @classmethod
    def validate_sleep(cls, v):
        if v < 0:
            raise ValueError('Rate limit sleep cannot be negative')
        return v


class Config:
    """Main configuration class that combines all config sections."""

    def __init__(self):
        """Initialize configuration with validation."""
        try:
            self.database = DatabaseConfig()
            self.security = SecurityConfig()
            self.application = ApplicationConfig()
            self.ai = AIConfig()

            logger.info("Configuration loaded successfully")

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise


# Global configuration instance
config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config
