"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: ConfigProvider, EnvConfigProvider, typed config dataclasses
Hidden: Config sources, environment parsing

Can be replaced with different config systems without affecting other modules.
"""

from .provider import (
    APIConfig,
    AuthConfig,
    ConfigProvider,
    ContentHostConfig,
    EnvConfigProvider,
    StorageConfig,
)

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ConfigProvider",
    "ContentHostConfig",
    "EnvConfigProvider",
    "StorageConfig",
]
