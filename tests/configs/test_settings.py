"""Tests for environment-driven settings."""

from logging import getLogger
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from pydantic import ValidationError

from app.configs import CacheConfig, Settings, file_logger, settings


def make_settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_malformed_port_is_rejected() -> None:
    with pytest.raises(ValidationError):
        make_settings(PORT="not-a-port")


def test_out_of_range_port_is_rejected() -> None:
    with pytest.raises(ValidationError):
        make_settings(PORT=70000)


def test_database_url_is_built_from_parts() -> None:
    config = make_settings(
        DATABASE_URL="",
        DATABASE_HOST="db",
        DATABASE_PORT=5433,
        DATABASE_USERNAME="blog",
        DATABASE_PASSWORD="secret",
        DATABASE_NAME="posts",
    )

    assert config.DATABASE_URL == "postgresql+asyncpg://blog:secret@db:5433/posts"
    assert not config.is_sqlite


@pytest.mark.parametrize(
    ("environment", "expected"),
    [("development", True), ("test", True), ("production", False)],
)
def test_schema_sync_defaults_by_environment(environment: str, expected: bool) -> None:
    config = make_settings(ENVIRONMENT=environment, DATABASE_SYNCHRONIZE=None)

    assert config.DATABASE_SYNCHRONIZE is expected


def test_explicit_schema_sync_wins() -> None:
    config = make_settings(ENVIRONMENT="production", DATABASE_SYNCHRONIZE=True)

    assert config.DATABASE_SYNCHRONIZE is True


def test_api_paths() -> None:
    config = make_settings(API_PREFIX="/api/", API_VERSION="v2", API_DOCS_PATH="reference")

    assert config.api_root == "/api/v2"
    assert config.docs_url == "/reference"


def test_test_environment_uses_sqlite() -> None:
    assert settings.ENVIRONMENT == "test"
    assert settings.is_sqlite


def test_cache_config_reads_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_DEFAULT_TTL", "120")
    monkeypatch.setenv("CACHE_KEY_PREFIX", "posts-cache")

    config = CacheConfig()

    assert config.default_ttl == 120
    assert config.key_prefix == "posts-cache"


def test_cache_ttl_defaults_to_redis_ttl() -> None:
    assert CacheConfig().default_ttl == settings.REDIS_TTL == 60


def test_file_logger_is_noop_when_disabled() -> None:
    logger = getLogger("test.file_logger.disabled")

    assert file_logger(logger) is logger
    assert not logger.handlers


def test_file_logger_adds_handler_once(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setattr(settings, "LOG_TO_FILE", True)
    monkeypatch.setattr(settings, "LOG_FILE", str(tmp_path / "logs" / "app.log"))
    logger = getLogger("test.file_logger.enabled")

    file_logger(logger)
    file_logger(logger)

    handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    try:
        assert len(handlers) == 1
        assert (tmp_path / "logs").is_dir()
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
