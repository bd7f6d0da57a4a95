"""Configuration models for figmabridge."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Self

import httpx
from pydantic import BaseModel, ConfigDict, Field


class ExecutionMode(str, Enum):
    """How the process is being run.

    Only ``development`` enables the YAML payload dumps.
    """

    PRODUCTION = "production"
    DEVELOPMENT = "development"
    CLI = "cli"


class UnmatchedPolicy(str, Enum):
    """What a resolver reports for a request with no remote URL."""

    EMPTY = "empty"  # keep the slot as ""
    DROP = "drop"  # leave the request out of the result


class FigmaConfig(BaseModel):
    """Figma API access."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: str | None = Field(default=None, repr=False, description="Personal access token")
    base_url: str = Field(default="https://api.figma.com/v1", description="REST API base URL")
    timeout_s: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    connect_timeout_s: float = Field(default=5.0, gt=0)
    user_agent: str = "figmabridge/0.1"

    def httpx_timeout(self) -> httpx.Timeout:
        """Timeout object for the HTTP layer."""
        return httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s)


class AssetsConfig(BaseModel):
    """Image download behaviour."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    output_dir: str = Field(default="images", description="Default download directory")
    download_timeout_s: float = Field(default=60.0, gt=0)
    unmatched_renders: UnmatchedPolicy = Field(
        default=UnmatchedPolicy.DROP,
        description="Render requests without a URL: 'drop' (default) or 'empty'",
    )


class DebugConfig(BaseModel):
    """Payload dumps written in development mode."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    dump_dir: str = Field(default="logs", description="Directory for raw/simplified YAML dumps")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    mode: ExecutionMode = ExecutionMode.PRODUCTION
    figma: FigmaConfig = FigmaConfig()
    assets: AssetsConfig = AssetsConfig()
    debug: DebugConfig = DebugConfig()
    logging: LoggingConfig = LoggingConfig()

    @property
    def dumps_enabled(self) -> bool:
        return self.mode is ExecutionMode.DEVELOPMENT

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("figmabridge.yaml")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path (or the default path), then apply the environment.

        Raises:
            ValueError: If the file content is invalid
            ValidationError: If config is invalid
        """
        from figmabridge.core.config.loader import load_app_config

        return load_app_config(path)  # type: ignore[return-value]
