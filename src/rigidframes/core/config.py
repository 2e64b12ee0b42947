"""Settings model and I/O for frame computations.

Pydantic model for process-wide defaults (comparison tolerance, default
units, logging) with YAML/JSON I/O.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .logging import get_logger
from .units import AngleUnit, LengthUnit

logger = get_logger(__name__)

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Process-wide defaults."""

    tolerance: float = Field(
        default=1e-10, description="Absolute tolerance used by is_close comparisons"
    )
    angle_unit: AngleUnit = Field(
        default=AngleUnit.RADIAN, description="Angle unit assumed by Frame.make_rotation"
    )
    length_unit: LengthUnit = Field(
        default=LengthUnit.METER,
        description="Display unit for frames created from an orientation only",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    log_path: Path | None = Field(default=None, description="Optional JSON lines log file")

    @field_validator("tolerance")
    @classmethod
    def validate_tolerance(cls, v: float) -> float:
        """Validate tolerance is a small positive number."""
        if not 0.0 < v < 1.0:
            raise ValueError(f"Tolerance must be between 0 and 1 (exclusive), got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and upper-case the logging level name."""
        name = v.upper()
        if name not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}, got {v}")
        return name

    @property
    def logging_level(self) -> int:
        """The numeric logging level."""
        return logging.getLevelName(self.log_level)


_settings = Settings()


def get_settings() -> Settings:
    """Return the active process-wide settings."""
    return _settings


def configure(settings: Settings | None = None, **overrides) -> Settings:
    """Install process-wide settings.

    Args:
        settings: Settings to install (defaults to the active settings)
        **overrides: Field values replacing those of ``settings``

    Returns:
        The installed settings

    Raises:
        ConfigError: If an override fails validation
    """
    global _settings

    base = settings if settings is not None else _settings
    try:
        _settings = Settings(**{**base.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
    logger.debug("Settings configured", {"settings": _settings.model_dump(mode="json")})
    return _settings


def reset_settings() -> Settings:
    """Restore the default settings."""
    global _settings
    _settings = Settings()
    return _settings


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML or JSON file.

    Args:
        path: Path to settings file

    Returns:
        Validated Settings object

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file cannot be parsed or is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path) as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse settings file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings", {"path": str(path)})
    return settings


def save_settings(settings: Settings, path: str | Path) -> None:
    """Save settings to a YAML or JSON file.

    Args:
        settings: Settings to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(mode="json", exclude_unset=True)

    with open(path, "w") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)

    logger.info("Saved settings", {"path": str(path)})


def round_trip_settings(settings: Settings) -> Settings:
    """Serialize settings through YAML and back."""
    data = settings.model_dump(mode="json", exclude_unset=True)
    yaml_str = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    loaded_data = yaml.safe_load(yaml_str)
    return Settings(**(loaded_data or {}))


__all__ = [
    "Settings",
    "get_settings",
    "configure",
    "reset_settings",
    "load_settings",
    "save_settings",
    "round_trip_settings",
]
