"""Settings for rbfile primitives."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from rbfile.common.constants import (
    CONFIG_DIR_NAME,
    CONFIG_ENV_VAR,
    DEFAULT_FILE_PERMISSIONS,
    DEFAULT_READ_CHUNK_SIZE,
    DEFAULT_ZERO_FILL_BLOCK_SIZE,
)

logger = logging.getLogger("rbfile.common.config")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings loaded from environment or config file."""

    # Reads
    read_chunk_size: int = Field(
        DEFAULT_READ_CHUNK_SIZE,
        gt=0,
        description="Chunk size for whole-file reads. Env: RBFILE_READ_CHUNK_SIZE (supports suffixes: 64KB, 1MB)",
    )

    # Writes
    zero_fill_gaps: bool = Field(
        True,
        description="Write zero bytes over the gap when a positional write starts past end of file, "
        "instead of relying on the filesystem to read holes back as zeros. Env: RBFILE_ZERO_FILL_GAPS",
    )
    zero_fill_block_size: int = Field(
        DEFAULT_ZERO_FILL_BLOCK_SIZE,
        gt=0,
        description="Block size for zero fill. Env: RBFILE_ZERO_FILL_BLOCK_SIZE",
    )
    file_permissions: int = Field(
        DEFAULT_FILE_PERMISSIONS,
        ge=0,
        le=0o7777,
        description="Mode for newly created files, umask applies. Env: RBFILE_FILE_PERMISSIONS (e.g. 0o644)",
    )

    # Logging
    log_level: str = Field("WARNING", description="Level of the 'rbfile' logger. Env: RBFILE_LOG_LEVEL")

    class Config:
        env_prefix = "RBFILE_"

    @field_validator("read_chunk_size", "zero_fill_block_size", mode="before")
    @classmethod
    def _parse_size_field(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_size(v)
        return v

    @field_validator("file_permissions", mode="before")
    @classmethod
    def _parse_mode_field(cls, v: Any) -> Any:
        if isinstance(v, str):
            return int(v.strip(), 0 if v.strip().lower().startswith("0o") else 8)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in _LOG_LEVELS:
                raise ValueError(f"unknown log level: {v}")
        return v


def parse_size(value: str) -> int:
    """Parse human-readable size string to bytes.

    Examples: '64KB', '1MB', '500kb', '65536'
    """
    value = value.strip().upper()
    multipliers = {
        "B": 1,
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
        "K": 1024,
        "M": 1024**2,
        "G": 1024**3,
    }
    for suffix, mult in sorted(multipliers.items(), key=lambda x: -len(x[0])):
        if value.endswith(suffix):
            num = value[: -len(suffix)].strip()
            return int(float(num) * mult)
    return int(value)


def _parse_yaml_to_settings_dict(config: dict) -> dict:
    """Convert a parsed YAML config dict into a flat settings dict.

    Layout::

        io:
          read_chunk_size: 64KB
          zero_fill_gaps: true
          zero_fill_block_size: 64KB
          file_permissions: 0o644
        logging:
          level: DEBUG
    """
    d: dict = {}

    if "io" in config:
        io_cfg = config["io"] or {}
        for key in ("read_chunk_size", "zero_fill_gaps", "zero_fill_block_size", "file_permissions"):
            if key in io_cfg:
                d[key] = io_cfg[key]
    if "logging" in config:
        log_cfg = config["logging"] or {}
        if "level" in log_cfg:
            d["log_level"] = log_cfg["level"]

    return d


# ── Config file auto-discovery ────────────────────────────────

# Paths searched in order when no explicit config is given.
_CONFIG_SEARCH_PATHS = [
    Path("./rbfile.yaml"),
    Path.home() / CONFIG_DIR_NAME / "config.yaml",
]


def discover_config_path() -> Optional[Path]:
    """Find a config file using auto-discovery.

    Search order:
      1. ``$RBFILE_CONFIG`` environment variable
      2. ``./rbfile.yaml``
      3. ``~/.rbfile/config.yaml``

    Returns:
        Path to the discovered config file, or None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        p = Path(env_path)
        if p.exists():
            return p
        logger.warning("$%s=%s does not exist", CONFIG_ENV_VAR, env_path)

    for candidate in _CONFIG_SEARCH_PATHS:
        if candidate.exists():
            return candidate
    return None


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from config file + environment variables.

    Args:
        config_path: Explicit path to config file.  When ``None``,
            auto-discovery is used (see :func:`discover_config_path`).

    Returns:
        Settings instance. Values from the config file take precedence
        over environment variables.
    """
    import yaml

    resolved_path = config_path
    if resolved_path is None:
        resolved_path = discover_config_path()

    settings_dict: dict = {}

    if resolved_path and resolved_path.exists():
        with open(resolved_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        settings_dict = _parse_yaml_to_settings_dict(config)
        logger.info("Loaded config from %s", resolved_path.resolve())
    elif config_path is not None:
        logger.warning("Config file %s does not exist, using defaults + environment variables", config_path)
    else:
        logger.debug("No config file found, using defaults + environment variables")

    return Settings(**settings_dict)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide default settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the process-wide default settings (``None`` forces a reload)."""
    global _settings
    _settings = settings


def configure_logging(settings: Settings) -> None:
    """Apply ``settings.log_level`` to the ``rbfile`` logger."""
    numeric_level = getattr(logging, settings.log_level, logging.WARNING)
    logging.getLogger("rbfile").setLevel(numeric_level)
    # Also set root handler if none configured
    if not logging.getLogger().handlers:
        logging.basicConfig(level=numeric_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
