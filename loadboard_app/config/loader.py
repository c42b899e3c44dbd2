"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    DefaultConfig,
    GeoParams,
    LoggingParams,
    NotificationParams,
    PersistenceParams,
    StoreParams,
    get_default_config,
)

CONFIG_FILENAME = "loadboard.yaml"

_SECTION_TYPES = {
    "store": StoreParams,
    "geo": GeoParams,
    "persistence": PersistenceParams,
    "notifications": NotificationParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from loadboard.yaml, empty when the file is absent."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        if not isinstance(file_config, dict):
            return {}
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. loadboard.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge all tiers and return a typed configuration."""
        return self.from_dict(self.merge_config(overrides))

    @staticmethod
    def from_dict(config: dict[str, Any]) -> DefaultConfig:
        """Build typed configuration from a merged dictionary, ignoring unknown keys."""
        sections = {}
        for section_name, section_type in _SECTION_TYPES.items():
            values = config.get(section_name) or {}
            known = {f.name for f in fields(section_type)}
            sections[section_name] = section_type(
                **{key: value for key, value in values.items() if key in known}
            )
        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
