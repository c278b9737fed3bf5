"""
Pydantic Settings for artup configuration.

Provides settings loading from a TOML file, environment variables, and
defaults. Settings are read once at startup and passed by value into the
upload pipeline.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .models.config import ArtifactoryDetails

LogLevel = Literal["debug", "info", "warning", "error"]

HOME_DIR_ENV = "JFROG_CLI_HOME_DIR"


def default_home_dir() -> Path:
    """Return the artup home directory, honouring JFROG_CLI_HOME_DIR."""
    override = os.environ.get(HOME_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".artup"


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from a TOML config file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}
        path = self._config_path
        if path is None or not path.exists():
            return self._data

        try:
            with open(path, "rb") as f:
                self._data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            self._data = {"config_error": f"Failed to parse config file {path}: {e}"}
        except OSError as e:
            self._data = {"config_error": f"Failed to read config file {path}: {e}"}

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        return data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class ArtupSettings(BaseSettings):
    """artup settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (JFROG_CLI_<field>, JFROG_CLI_SERVER__<field>)
    3. TOML config file (<home_dir>/config.toml)
    4. Model defaults
    """

    model_config = {
        "env_prefix": "JFROG_CLI_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    home_dir: Path = Path.home() / ".artup"
    log_level: LogLevel = "info"
    log_file: bool = False
    # Raw kilobyte value; resolved and validated when an upload starts.
    min_checksum_deploy_size_kb: str | None = None
    server: ArtifactoryDetails = ArtifactoryDetails()
    config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        The config path is passed through a module-level variable since
        this hook is a classmethod.
        """
        toml_source = TomlConfigSource(settings_cls, config_path=_current_config_path)
        return (
            init_settings,
            env_settings,
            toml_source,
        )


# Module-level variable for passing to settings_customise_sources
_current_config_path: Path | None = None


def load_settings(config_path: Path | None = None) -> ArtupSettings:
    """Load artup settings from config file and environment.

    Args:
        config_path: Explicit path to config file (default:
            <home_dir>/config.toml)

    Returns:
        ArtupSettings instance with all sources merged
    """
    global _current_config_path

    home_dir = default_home_dir()
    _current_config_path = config_path or home_dir / "config.toml"
    try:
        return ArtupSettings(home_dir=home_dir)
    finally:
        _current_config_path = None
