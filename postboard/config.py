"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from postboard.utils.logger import setup_logger

load_dotenv(override=True)


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
        populate_by_name=True,
    )

    # ===== Database Configuration =====
    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description="Store connection string (postgres://, postgresql://, sqlite+aiosqlite://)",
    )

    database_ssl_require: bool = Field(
        default=False,
        alias="DATABASE_SSL_REQUIRE",
        description="Connect to PostgreSQL over TLS without certificate verification",
    )

    db_pool_size: int = Field(
        default=10, alias="DB_POOL_SIZE", description="PostgreSQL pool size"
    )

    db_max_overflow: int = Field(
        default=20,
        alias="DB_MAX_OVERFLOW",
        description="PostgreSQL connections allowed beyond the pool size",
    )

    # ===== Auth Configuration =====
    jwt_secret: str | None = Field(
        default=None,
        alias="JWT_SECRET",
        description="Shared secret used to sign and verify auth tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm"
    )

    access_token_expire_minutes: int = Field(
        default=300,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Token lifetime in minutes (5 hours)",
    )

    bcrypt_rounds: int = Field(
        default=10,
        alias="BCRYPT_ROUNDS",
        description="bcrypt cost factor for password hashing",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=5001, alias="PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=False,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # ===== Logging Configuration =====
    log_level: str = Field(
        default="INFO", alias="LOG_LEVEL", description="Root log level"
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Log warnings for missing critical configuration."""

        if not self.database_url:
            logger.warning("DATABASE_URL environment variable not set.")

        if not self.jwt_secret:
            logger.warning(
                "JWT_SECRET environment variable not set. Token signing will fail."
            )

        logger.debug(f"Token lifetime: {self.access_token_expire_minutes} minutes")

        return self


# Global settings instance
settings = Settings()
