"""
Configuration loading for i3 Ring Navigator.

Settings come from (lowest to highest precedence):
- built-in defaults
- config.toml under $XDG_CONFIG_HOME/i3-ring-nav/
- I3_RING_NAV_* environment variables
- command line flags (applied by the CLI)
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

ENV_PREFIX = "I3_RING_NAV_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class NavigatorConfig(BaseModel):
    """Runtime settings."""

    socket_path: Optional[str] = Field(None, description="IPC socket path (auto-detected if unset)")
    log_level: str = Field("WARNING", description="Logging level")
    dry_run: bool = Field(False, description="Log commands instead of sending them")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v} (expected one of {', '.join(LOG_LEVELS)})")
        return level

    @field_validator('socket_path')
    @classmethod
    def validate_socket_path(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty socket path as unset."""
        if v is not None and not v.strip():
            return None
        return v


def default_config_path() -> Path:
    """Path of the user configuration file."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "i3-ring-nav" / "config.toml"


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    if f"{ENV_PREFIX}SOCKET" in environ:
        overrides["socket_path"] = environ[f"{ENV_PREFIX}SOCKET"]
    if f"{ENV_PREFIX}LOG_LEVEL" in environ:
        overrides["log_level"] = environ[f"{ENV_PREFIX}LOG_LEVEL"]
    if f"{ENV_PREFIX}DRY_RUN" in environ:
        overrides["dry_run"] = environ[f"{ENV_PREFIX}DRY_RUN"].strip().lower() in ("1", "true", "yes", "on")

    return overrides


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> NavigatorConfig:
    """
    Load navigator configuration.

    Args:
        path: TOML configuration file (defaults to default_config_path())
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Merged NavigatorConfig

    Raises:
        ConfigLoadError: If the file cannot be parsed or holds invalid values
    """
    if path is None:
        path = default_config_path()
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigLoadError(str(path), str(e)) from e
        logger.debug(f"Loaded configuration from {path}")

    data.update(_env_overrides(environ))

    try:
        return NavigatorConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(str(path), str(e)) from e
