"""
Configuration management for ytdlmeta.

Handles loading, validation, and access to application configuration.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

# Global configuration instance
_config: Optional["YtdlMetaConfig"] = None


class ServerConfig(BaseModel):
    """HTTP server configuration."""
    host: str = "127.0.0.1"
    port: int = 8420
    debug: bool = False


class MetadataConfig(BaseModel):
    """Sidecar metadata configuration."""
    sidecar_suffix: str = ".info.json"
    # Upstream extractor_key -> canonical provider key (case-insensitive)
    extractor_key_mapping: dict[str, str] = Field(
        default_factory=lambda: {"NRKTV": "NRK"}
    )
    # Canonical keys whose external id must come from playlist_id
    playlist_id_providers: list[str] = Field(default_factory=lambda: ["NRK"])


class ImagesConfig(BaseModel):
    """Local image selection configuration."""
    enabled: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: str = "logs/ytdlmeta.log"
    max_size: str = "10MB"
    backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_to_file: bool = False


class YtdlMetaConfig(BaseModel):
    """Main ytdlmeta configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> YtdlMetaConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in project root.

    Returns:
        Loaded and validated configuration.
    """
    global _config

    if config_path is None:
        # Look for config.yaml in current directory or project root
        possible_paths = [
            Path("config.yaml"),
            Path(__file__).parent.parent / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = YtdlMetaConfig(**config_data)
    return _config


def get_config() -> YtdlMetaConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> YtdlMetaConfig:
    """
    Reload configuration from disk.

    Returns:
        Freshly loaded configuration.
    """
    global _config
    _config = None
    return load_config()


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    # Map of environment variables to config paths
    env_map = {
        "YTDLMETA_HOST": ("server", "host"),
        "YTDLMETA_PORT": ("server", "port"),
        "YTDLMETA_DEBUG": ("server", "debug"),
        "YTDLMETA_LOG_LEVEL": ("logging", "level"),
        "YTDLMETA_LOG_FILE": ("logging", "file"),
        "YTDLMETA_SIDECAR_SUFFIX": ("metadata", "sidecar_suffix"),
        "YTDLMETA_IMAGES_ENABLED": ("images", "enabled"),
    }

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(overrides, path, _parse_env_value(value))

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    # Boolean
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    # Integer
    try:
        return int(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
