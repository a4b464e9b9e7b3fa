from app.configs.settings import (
    DEFAULT_PAGE,
    DEFAULT_STEP,
    MAX_TITLE_LENGTH,
    CacheConfig,
    Settings,
    file_logger,
    pool_kwargs,
    settings,
)

__all__ = [
    "CacheConfig",
    "DEFAULT_PAGE",
    "DEFAULT_STEP",
    "MAX_TITLE_LENGTH",
    "Settings",
    "file_logger",
    "pool_kwargs",
    "settings",
]
