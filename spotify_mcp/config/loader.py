import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from spotify_mcp.config.schema import (
    AppConfig,
    LoggingConfig,
    ServerConfig,
    SpotifyConfig,
)

_SECTION_CLASSES = {
    "server": ServerConfig,
    "spotify": SpotifyConfig,
    "logging": LoggingConfig,
}

# No override for access tokens: they only arrive with each tool call.
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "SPOTIFY_API_BASE_URL": ("spotify", "base_url"),
    "SPOTIFY_TIMEOUT_SECONDS": ("spotify", "timeout_seconds"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
}

_FLOAT_KEYS = {("spotify", "timeout_seconds")}


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Override YAML values with environment variables where mapped."""
    for env_var, (section, key) in _ENV_OVERRIDES.items():
        value: Any = os.environ.get(env_var)
        if value is None:
            continue
        if (section, key) in _FLOAT_KEYS:
            value = float(value)
        data.setdefault(section, {})[key] = value


def load_config(
    config_path: Path = Path("config.yaml"),
    env_path: Path = Path(".env"),
) -> AppConfig:
    """Load YAML config, merge .env overrides, return frozen AppConfig."""
    load_dotenv(env_path)

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    _apply_env_overrides(data)

    sections: dict[str, Any] = {}
    for name, cls in _SECTION_CLASSES.items():
        section_data = data.get(name, {})
        if section_data:
            sections[name] = cls(**section_data)
        else:
            sections[name] = cls()

    return AppConfig(**sections)
