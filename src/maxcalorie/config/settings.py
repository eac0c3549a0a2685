"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from maxcalorie.optimizer.exhaustive import MAX_EXHAUSTIVE_ITEMS

OUTPUT_FORMATS = ("table", "json", "text")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".maxcalorie"


def default_config_path() -> Path:
    """Return the default config file path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class DatabaseConfig:
    """Food database configuration."""

    path: Optional[Path] = None
    delimiter: str = "^"
    has_header: bool = True


@dataclass
class PrefilterConfig:
    """Bounds applied to a catalog before exhaustive search."""

    min_calories: float = 0.0
    max_calories: float = 2500.0
    max_count: int = 20


@dataclass
class ExhaustiveConfig:
    """Exhaustive solver configuration."""

    max_items: int = MAX_EXHAUSTIVE_ITEMS
    time_limit: Optional[float] = None  # seconds


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "text"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    prefilter: PrefilterConfig = field(default_factory=PrefilterConfig)
    exhaustive: ExhaustiveConfig = field(default_factory=ExhaustiveConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.maxcalorie/config.yaml

        Returns:
            Settings instance

        Raises:
            ValueError: If a setting has an unusable value
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{config_path}: not valid YAML ({e})") from e

        if not isinstance(data, dict):
            raise ValueError(f"{config_path}: expected a mapping at the top level")

        settings = cls()
        try:
            settings._apply(data)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{config_path}: {e}") from e

        settings.validate()
        return settings

    def _apply(self, data: dict) -> None:
        """Copy values from parsed YAML onto these settings."""
        # Parse database config
        db_data = _section(data, "database")
        if db_data:
            if db_data.get("path"):
                self.database.path = Path(db_data["path"]).expanduser()
            if "delimiter" in db_data:
                self.database.delimiter = str(db_data["delimiter"])
            if "has_header" in db_data:
                self.database.has_header = bool(db_data["has_header"])

        # Parse pre-filter config
        pf_data = _section(data, "prefilter")
        if pf_data:
            if "min_calories" in pf_data:
                self.prefilter.min_calories = float(pf_data["min_calories"])
            if "max_calories" in pf_data:
                self.prefilter.max_calories = float(pf_data["max_calories"])
            if "max_count" in pf_data:
                self.prefilter.max_count = int(pf_data["max_count"])

        # Parse exhaustive solver config
        ex_data = _section(data, "exhaustive")
        if ex_data:
            if "max_items" in ex_data:
                self.exhaustive.max_items = int(ex_data["max_items"])
            if ex_data.get("time_limit") is not None:
                self.exhaustive.time_limit = float(ex_data["time_limit"])

        # Parse defaults
        def_data = _section(data, "defaults")
        if def_data:
            if "output_format" in def_data:
                self.defaults.output_format = def_data["output_format"]

        log_data = _section(data, "logging")
        if log_data:
            if "level" in log_data:
                self.logging.level = str(log_data["level"]).upper()

    def validate(self) -> None:
        """Check values that would otherwise fail deep inside a command."""
        if not self.database.delimiter:
            raise ValueError("database.delimiter must be non-empty")
        if not 0 <= self.exhaustive.max_items <= MAX_EXHAUSTIVE_ITEMS:
            raise ValueError(
                f"exhaustive.max_items must be between 0 and {MAX_EXHAUSTIVE_ITEMS}"
            )
        if self.defaults.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"defaults.output_format must be one of {', '.join(OUTPUT_FORMATS)}"
            )

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.maxcalorie/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Return settings as plain data, in config file layout."""
        return {
            "database": {
                "path": str(self.database.path) if self.database.path else None,
                "delimiter": self.database.delimiter,
                "has_header": self.database.has_header,
            },
            "prefilter": {
                "min_calories": self.prefilter.min_calories,
                "max_calories": self.prefilter.max_calories,
                "max_count": self.prefilter.max_count,
            },
            "exhaustive": {
                "max_items": self.exhaustive.max_items,
                "time_limit": self.exhaustive.time_limit,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }


def _section(data: dict, name: str) -> dict:
    """Return a top-level config section, empty when absent or null."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
    return section


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None
_settings_path: Optional[Path] = None


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """Get the global settings instance, loading from disk if needed.

    Passing a config_path different from the one last loaded forces a reload.
    """
    global _settings, _settings_path
    if _settings is None or (config_path is not None and config_path != _settings_path):
        _settings = Settings.load(config_path)
        _settings_path = config_path
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings, _settings_path
    _settings = Settings.load(config_path)
    _settings_path = config_path
    return _settings
