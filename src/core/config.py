"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="StreamShare Admin API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./streamshare.db",
        description="Database URL (postgresql+asyncpg in production, aiosqlite locally)",
    )

    # Admin session
    admin_password: str = Field(
        default="",
        description="Password for the admin panel. Empty disables admin login.",
    )
    session_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key used to sign admin session tokens",
    )
    session_algorithm: str = Field(default="HS256")
    session_max_age_days: int = Field(default=7)
    session_cookie_name: str = Field(default="admin_session")

    # Credential vault
    crypto_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description=(
            "Secret for reversible encryption of service account passwords. "
            "Changing it invalidates every stored password."
        ),
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    # Logging
    log_format: str | None = Field(
        default=None,
        description="'json' or 'console'. Defaults to json outside development.",
    )
    log_level: str = Field(default="INFO")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
