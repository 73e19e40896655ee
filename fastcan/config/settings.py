"""Application configuration using Pydantic settings."""

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Extension settings with environment variable support."""

    # API Configuration
    API_TITLE: str = "FastCan Projects API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Declarative permission checks for FastAPI resources"
    API_PREFIX: str = "/api/v1"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    TESTING: bool = False

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./fastcan.db", description="Async SQLAlchemy database URL"
    )

    # Authorization
    NOT_AUTH_REDIRECT: str | None = Field(
        default=None, description="Where denied requests are redirected; plain 403 when unset"
    )
    REDIRECT_STATUS_CODE: int = 303
    RESOURCE_ID_PARAM: str = "id"

    # Monitoring
    LOG_LEVEL: str = "INFO"

    @validator("ENVIRONMENT")
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @validator("REDIRECT_STATUS_CODE")
    def validate_redirect_status(cls, v):
        """Only redirection status codes make sense for denials."""
        if v not in (301, 302, 303, 307, 308):
            raise ValueError(f"Invalid redirect status code: {v}")
        return v

    @validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        """Validate log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    class Config:
        """Pydantic config."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
