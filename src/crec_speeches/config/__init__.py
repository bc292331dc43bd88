"""Configuration helpers for the Congressional Record crawler."""
from __future__ import annotations

from .settings import (
    AppConfig,
    CrawlConfig,
    GovInfoConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)

__all__ = [
    "AppConfig",
    "CrawlConfig",
    "GovInfoConfig",
    "StorageConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
