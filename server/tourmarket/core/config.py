"""Configuration settings for the FastAPI application."""

from typing import Annotated

from babel import Locale, UnknownLocaleError
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Database settings
    database_url: str | None = Field(
        default=None,
        description="Full async database URL; overrides the DB_* settings when set"
    )

    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_username: str = Field(default="postgres", description="Database user")
    db_password: str = Field(default="postgres", description="Database password")
    db_name: str = Field(default="tourmarket", description="Database name")

    db_ssl_mode: str = Field(
        default="prefer",
        description="asyncpg SSL mode (disable, allow, prefer, require, verify-ca, verify-full)"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # CORS settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    api_prefix: str = Field(
        default="/api/v1",
        description="Prefix all resource routers are mounted under"
    )

    # Presentation settings
    date_locale: str = Field(
        default="es",
        description="Locale used for human-readable booking dates"
    )

    # Tracing settings
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC endpoint for trace export"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("date_locale")
    @classmethod
    def validate_date_locale(cls, v: str) -> str:
        """Reject locales Babel has no data for."""
        try:
            Locale.parse(v)
        except (ValueError, UnknownLocaleError) as exc:
            raise ValueError(f"Unknown date locale: {v}") from exc
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def sqlalchemy_database_url(self) -> str:
        """Return the URL the async engine connects to."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = Settings()
