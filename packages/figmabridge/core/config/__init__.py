"""Configuration management for figmabridge."""

from figmabridge.core.config.loader import (
    ConfigSource,
    apply_env_overrides,
    configure_logging_from_config,
    load_app_config,
    load_config,
    load_dotenv_file,
    resolve_api_key,
)
from figmabridge.core.config.models import (
    AppConfig,
    AssetsConfig,
    DebugConfig,
    ExecutionMode,
    FigmaConfig,
    LoggingConfig,
    UnmatchedPolicy,
)

__all__ = [
    "AppConfig",
    "AssetsConfig",
    "DebugConfig",
    "ExecutionMode",
    "FigmaConfig",
    "LoggingConfig",
    "UnmatchedPolicy",
    "ConfigSource",
    "apply_env_overrides",
    "configure_logging_from_config",
    "load_app_config",
    "load_config",
    "load_dotenv_file",
    "resolve_api_key",
]
