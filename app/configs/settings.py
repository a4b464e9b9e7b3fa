"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Blog API. Every value is read from the environment (or the
optional ``.env`` file) and validated when the module is imported, so a
malformed value stops the process before it starts serving.
"""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings.main import BaseSettings, SettingsConfigDict
from pythonjsonlogger.json import JsonFormatter

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_TITLE_LENGTH = 255
DEFAULT_PAGE = 1
DEFAULT_STEP = 10


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blog API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    PORT: int = Field(default=3000, gt=0, le=65535)
    PRODUCTION_FRONTEND_URL: str | None = None

    # API surface
    API_PREFIX: str = "api"
    API_VERSION: str = "v1"
    API_DOCS_PATH: str = "docs"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"

    # Database Configuration
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = Field(default=5432, gt=0, le=65535)
    DATABASE_USERNAME: str = "postgres"
    DATABASE_PASSWORD: SecretStr = SecretStr("postgres")
    DATABASE_NAME: str = "blog"
    DATABASE_URL: str = ""
    DATABASE_ECHO: bool = False
    DATABASE_SYNCHRONIZE: bool | None = None
    POOL_SIZE: int = Field(default=5, ge=1)
    MAX_OVERFLOW: int = Field(default=10, ge=0)
    POOL_TIMEOUT: int = Field(default=30, ge=1)
    POOL_RECYCLE: int = 1800

    # Redis Configuration
    REDIS_ENABLED: bool = True
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = Field(default=6379, gt=0, le=65535)
    REDIS_DB: int = Field(default=0, ge=0)
    REDIS_PASSWORD: str | None = None
    REDIS_TTL: int = Field(default=60, ge=1)  # seconds

    @model_validator(mode="after")
    def resolve_database_options(self) -> "Settings":
        """Build the database URL from its parts and pick the schema sync default."""
        if not self.DATABASE_URL:
            password = self.DATABASE_PASSWORD.get_secret_value()
            self.DATABASE_URL = (
                f"postgresql+asyncpg://{self.DATABASE_USERNAME}:{password}"
                f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
            )
        if self.DATABASE_SYNCHRONIZE is None:
            self.DATABASE_SYNCHRONIZE = self.ENVIRONMENT != "production"
        return self

    @property
    def api_root(self) -> str:
        """Versioned API root, e.g. ``/api/v1``."""
        return f"/{self.API_PREFIX.strip('/')}/{self.API_VERSION.strip('/')}"

    @property
    def docs_url(self) -> str:
        """Path serving the interactive OpenAPI documentation."""
        return f"/{self.API_DOCS_PATH.strip('/')}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()


class CacheConfig(BaseSettings):
    """Cache configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_", case_sensitive=False)

    default_ttl: int = settings.REDIS_TTL
    max_ttl: int = 86400  # 24 hours
    key_prefix: str = "blog"
    compression_enabled: bool = False
    compression_threshold: int = 1024  # bytes


pool_kwargs: dict[str, Any] = {
    "host": settings.REDIS_HOST,
    "port": settings.REDIS_PORT,
    "db": settings.REDIS_DB,
    "password": settings.REDIS_PASSWORD,
    "socket_timeout": 5.0,
    "socket_connect_timeout": 5.0,
    "socket_keepalive": True,
    "health_check_interval": 30,
    "max_connections": 50,
    "decode_responses": True,
    "encoding": "utf-8",
}


def file_logger(logger: Logger) -> Logger:
    """
    Attach the shared rotating JSON file handler to a logger.

    Does nothing unless ``LOG_TO_FILE`` is enabled. Safe to call more than
    once for the same logger.

    Args:
        logger: Logger to decorate.

    Returns:
        Logger: The same logger, for one-line module setup.
    """
    if not settings.LOG_TO_FILE:
        return logger
    if any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers):
        return logger

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
