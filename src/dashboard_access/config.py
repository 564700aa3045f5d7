"""
Dashboard data-access configuration system.

Supported configuration sources (highest to lowest priority):
1. Config file (toml/json)
2. Environment variables
3. Explicit code input
4. Code defaults

Config file example (dashboard.toml):
```toml
log_level = "DEBUG"

[api]
base_url = "https://api.example.com"
timeout_seconds = 15

[retry]
max_attempts = 4
initial_delay_ms = 500

[preferences]
rollback = "revert"
```

Environment variable example:
```bash
export DASHBOARD_API_BASE_URL="https://api.example.com"
export DASHBOARD_RETRY_MAX_ATTEMPTS=5
```

Code example:
```python
from dashboard_access import DashboardConfig

config = DashboardConfig(
    api={"base_url": "https://api.example.com"},
    retry={"max_attempts": 5},
)
```
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from dashboard_access.cache.config import CacheConfig
from dashboard_access.log import setup_logging
from dashboard_access.preferences.config import PreferencesConfig
from dashboard_access.transport.config import ApiConfig, RetryConfig

logger = logging.getLogger(__name__)


# === Config file sources ===


def _find_config_file() -> Path | None:
    """Find a config file by priority."""
    search_paths = [
        Path.cwd(),  # Current directory
        Path.cwd() / "config",  # config subdir
        Path.home() / ".config" / "dashboard",  # User config directory
    ]
    extensions = [".toml", ".json"]
    names = ["dashboard", "config"]

    for path in search_paths:
        for name in names:
            for ext in extensions:
                file = path / f"{name}{ext}"
                if file.exists():
                    return file
    return None


def _load_config_file(file_path: Path) -> dict[str, Any]:
    """Load a config file by extension."""
    suffix = file_path.suffix.lower()
    content = file_path.read_text(encoding="utf-8")

    if suffix == ".toml":
        return tomllib.loads(content)

    elif suffix == ".json":
        data = json.loads(content)
        return data if isinstance(data, dict) else {}

    else:
        logger.warning("Unsupported config file format: %s", suffix)
        return {}


class FileConfigSource(PydanticBaseSettingsSource):
    """Config file source (toml/json)."""

    def __init__(self, settings_cls: type[BaseSettings], config_file: Path | None = None):
        super().__init__(settings_cls)
        self._config_file = config_file or _find_config_file()
        self._file_data: dict[str, Any] = {}
        if self._config_file and self._config_file.exists():
            try:
                self._file_data = _load_config_file(self._config_file)
            except (OSError, ValueError) as e:
                logger.warning(
                    "Failed to load config file: %s, error=%s",
                    self._config_file,
                    e,
                )

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        value = self._file_data.get(field_name)
        return value, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._file_data


# === Main config class ===


class DashboardConfig(BaseSettings):
    """
    Data-access layer configuration.

    Supported configuration sources:
    1. Config file (toml/json)
    2. Environment variables (DASHBOARD_ prefix)
    3. Code input
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        # Single underscore as nested delimiter, split only once:
        # DASHBOARD_API_BASE_URL -> api.base_url
        env_nested_delimiter="_",
        env_nested_max_split=1,
        extra="ignore",
    )

    # Optional config file path; auto-detected if not provided.
    config_file: Path | None = Field(default=None, exclude=True)

    api: ApiConfig = Field(default_factory=ApiConfig)
    """Backend API configuration."""

    retry: RetryConfig = Field(default_factory=RetryConfig)
    """Retry policy configuration."""

    cache: CacheConfig = Field(default_factory=CacheConfig)
    """Reference data cache configuration."""

    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    """Notification preference configuration."""

    verbose: bool = Field(default=False, description="Enable verbose logging")
    """Verbose logging flag."""

    log_level: str = Field(default="INFO", description="Log level")
    """Log level."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize source priority (earlier overrides later).

        Priority (high to low):
        1. Config file (FileConfigSource)
        2. Environment variables (env_settings)
        3. Code input (init_settings)
        """
        init_data = init_settings()
        config_file = init_data.get("config_file")
        return (
            FileConfigSource(
                settings_cls,
                Path(config_file) if config_file else None,
            ),
            env_settings,
            init_settings,
        )


class ConfigurationError(Exception):
    """Configuration error."""

    pass


def dashboard_configure(
    config_file: str | Path | None = None,
    **kwargs,
) -> DashboardConfig:
    """
    Build the configuration and initialize logging.

    Priority (high to low):
    1. Config file
    2. Environment variables (DASHBOARD_ prefix)
    3. Code input (**kwargs)
    4. Defaults

    Args:
        config_file: Optional config file path (toml/json)
        **kwargs: Default config values (overridden by file/env)

    Raises:
        ConfigurationError: An explicit config_file does not exist
    """
    path = Path(config_file) if config_file else None
    if path is not None and not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    config = DashboardConfig(config_file=path, **kwargs)

    if config.verbose:
        setup_logging(logging.DEBUG)
    else:
        setup_logging(config.log_level)

    logger.info(
        "Configuration loaded: base_url=%s timeout=%ss retry.max_attempts=%s rollback=%s",
        config.api.base_url,
        config.api.timeout_seconds,
        config.retry.max_attempts,
        config.preferences.rollback.value,
        extra={"event": "config.loaded"},
    )

    return config
