"""Configuration providers for BurningFury."""

from .provider import (
    APIConfig,
    Auth0Config,
    AuthConfig,
    ConfigProvider,
    EnvConfigProvider,
    FeedbackConfig,
    StorageConfig,
)

__all__ = [
    "APIConfig",
    "Auth0Config",
    "AuthConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "FeedbackConfig",
    "StorageConfig",
]
