"""
animstate configuration management using Pydantic Settings.

Configuration can be provided via:
1. animstate.yaml config file
2. ANIMSTATE_* env vars (nested sections use a double underscore,
   e.g. ANIMSTATE_LOADER__VALIDATE_TARGETS=false)
3. .env file
4. Direct instantiation

Priority (highest wins): init kwargs > animstate.yaml > env vars > .env > defaults

The animstate.yaml format accepts flat keys:
    log_level: DEBUG
    validate_targets: true
    dialect: foreign
    frame_rate: 30

or the nested sections:
    loader:
      validate_targets: false
    runner:
      frame_rate: 120
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from animstate.graph.loader import GraphLoader

logger = logging.getLogger(__name__)


class LoaderConfig(BaseModel):
    """State graph loading configuration."""

    # Reject documents whose transitions point at unknown states
    validate_targets: bool = True
    # Dialect used when none is given explicitly
    dialect: Literal["auto", "native", "foreign"] = "auto"


class RunnerConfig(BaseModel):
    """Runner pacing used when animstate drives its own update pulse."""

    frame_rate: int = Field(default=60, gt=0)

    @property
    def timestep(self) -> float:
        return 1.0 / self.frame_rate


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that reads an animstate.yaml config file.

    Discovers config at:
    1. Explicit path passed via _config_path init kwarg
    2. $ANIMSTATE_CONFIG env var
    3. ./animstate.yaml
    4. ./animstate.yml
    """

    # Flat keys and the nested section they belong to
    _SECTION_KEYS = {
        "validate_targets": "loader",
        "dialect": "loader",
        "frame_rate": "runner",
    }

    def __init__(
        self, settings_cls: Type[BaseSettings], config_path: Optional[str] = None
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._yaml_data: Optional[Dict[str, Any]] = None
        self._load()

    def _discover_config_file(self) -> Optional[Path]:
        """Find the config file to load."""
        if self._config_path:
            p = Path(self._config_path)
            return p if p.is_file() else None

        env_path = os.environ.get("ANIMSTATE_CONFIG")
        if env_path:
            p = Path(env_path)
            return p if p.is_file() else None

        for name in ("animstate.yaml", "animstate.yml"):
            p = Path(name)
            if p.is_file():
                return p

        return None

    def _load(self) -> None:
        """Load and parse the YAML config file."""
        path = self._discover_config_file()
        if path is None:
            self._yaml_data = {}
            return

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            self._yaml_data = data if isinstance(data, dict) else {}
            logger.debug(f"Loaded config from {path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            self._yaml_data = {}

    def _map_to_settings(self) -> Dict[str, Any]:
        """Map flat YAML keys onto the nested AnimStateSettings structure."""
        if not self._yaml_data:
            return {}

        result: Dict[str, Any] = {}
        for key, value in self._yaml_data.items():
            section = self._SECTION_KEYS.get(key)
            if section is not None:
                result.setdefault(section, {})[key] = value
            elif key in ("loader", "runner") and isinstance(value, dict):
                result.setdefault(key, {}).update(value)
            elif key in ("debug", "log_level"):
                result[key] = value

        return result

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        mapped = self._map_to_settings()
        value = mapped.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> Dict[str, Any]:
        return self._map_to_settings()


class AnimStateSettings(BaseSettings):
    """
    Main animstate configuration.

    Pass _config_path to override the config file location.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMSTATE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Path to animstate.yaml (set via _config_path kwarg, not a real setting field)
    _config_path: Optional[str] = None

    # General settings
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Component configurations
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)

    def __init__(self, _config_path: Optional[str] = None, **kwargs: Any):
        self.__class__._config_path = _config_path
        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Insert YAML config source before env vars.

        Priority (highest first): init > yaml > env > dotenv > file_secret
        """
        yaml_source = YamlConfigSource(settings_cls, config_path=cls._config_path)
        return (
            init_settings,
            yaml_source,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    def create_loader(self) -> GraphLoader:
        """Build a GraphLoader from the loader section."""
        return GraphLoader(
            validate_targets=self.loader.validate_targets,
            dialect=self.loader.dialect,
        )
