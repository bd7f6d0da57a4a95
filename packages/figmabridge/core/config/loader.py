"""Configuration loading utilities with JSON, YAML, environment and .env support."""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from figmabridge.core.config.models import AppConfig

logger = logging.getLogger(__name__)

ENV_API_KEY = "FIGMA_API_KEY"
ENV_MODE = "FIGMABRIDGE_MODE"
ENV_OUTPUT_DIR = "FIGMABRIDGE_OUTPUT_DIR"


class ConfigSource(str, Enum):
    """Where a resolved setting came from."""

    CLI = "cli"
    ENV = "env"
    CONFIG = "config"
    MISSING = "missing"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("figmabridge.json")
        'json'
        >>> detect_format("figmabridge.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config root in {path} must be a mapping, got {type(content).__name__}")
    return content


def load_dotenv_file(path: str | Path | None = None) -> bool:
    """Load a .env file (default: ``.env`` in the working directory).

    Existing environment variables win over values in the file.

    Returns:
        True if a file was found and loaded
    """
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    if not env_path.exists():
        return False
    loaded = load_dotenv(env_path, override=False)
    logger.debug(f"Loaded environment from {env_path}")
    return bool(loaded)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    The default file is optional: when it is missing every value takes its
    default. An explicitly given path must exist.
    Environment variables then fill the API key, execution mode and output
    directory.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to figmabridge.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file content is invalid
        ValidationError: If config is invalid
    """
    explicit = path is not None
    if path is None:
        path = AppConfig.default_path()

    if explicit or Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
    else:
        logger.debug(f"No config file at {path}, using defaults")
        config = AppConfig()

    return apply_env_overrides(config)


def apply_env_overrides(config: AppConfig) -> AppConfig:
    """Return a copy of ``config`` with environment variables applied.

    Environment values (``FIGMA_API_KEY``, ``FIGMABRIDGE_MODE``,
    ``FIGMABRIDGE_OUTPUT_DIR``) override the file.
    """
    updates: dict[str, Any] = {}

    api_key = os.getenv(ENV_API_KEY)
    if api_key:
        logger.debug(f"Loaded {ENV_API_KEY} from environment")
        updates["figma"] = config.figma.model_copy(update={"api_key": api_key})

    mode = os.getenv(ENV_MODE)
    if mode:
        updates["mode"] = mode

    output_dir = os.getenv(ENV_OUTPUT_DIR)
    if output_dir:
        updates["assets"] = config.assets.model_copy(update={"output_dir": output_dir})

    if not updates:
        return config
    # Re-validate so a bad FIGMABRIDGE_MODE fails loudly
    return AppConfig.model_validate({**config.model_dump(), **_dump_updates(updates)})


def _dump_updates(updates: dict[str, Any]) -> dict[str, Any]:
    """Turn nested model updates into plain data for re-validation."""
    return {k: v.model_dump() if hasattr(v, "model_dump") else v for k, v in updates.items()}


def resolve_api_key(
    cli_value: str | None, config: AppConfig
) -> tuple[str | None, ConfigSource]:
    """Pick the Figma API key and report where it came from.

    Precedence: command line, then environment, then the config file.

    Args:
        cli_value: Value of ``--figma-api-key`` (None when not given)
        config: Loaded config

    Returns:
        Tuple of (api key or None, source)
    """
    if cli_value:
        return cli_value, ConfigSource.CLI
    env_value = os.getenv(ENV_API_KEY)
    if env_value:
        return env_value, ConfigSource.ENV
    if config.figma.api_key:
        return config.figma.api_key, ConfigSource.CONFIG
    return None, ConfigSource.MISSING


def configure_logging_from_config(config: AppConfig) -> None:
    """Configure Python logging from app config."""
    from figmabridge.core.utils.logging import configure_logging

    configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        structured=config.logging.structured,
    )
