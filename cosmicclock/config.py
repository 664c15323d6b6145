"""
COSMICCLOCK Configuration System

Unified configuration management for the clock engine using pydantic for
type-safe validation and YAML for human-readable config files.

Configuration loading priority:
1. Environment variables (COSMICCLOCK_*)
2. Config file passed to load_config()
3. ./cosmicclock.yaml (current directory)
4. ~/.cosmicclock/config.yaml (user home)
5. Built-in defaults

Usage:
    from cosmicclock.config import load_config, CosmicClockConfig

    # Load with automatic discovery
    config = load_config()

    # Load from specific file
    config = load_config("/path/to/config.yaml")

    # Access configuration
    print(config.longitudes.mars)
    print(config.ephemeris.data_source)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cosmicclock.bodies import ORBITAL_CATALOG, OrbitalBody, RotatingBody
from cosmicclock.constants import (
    BODY_DEFAULT_LONGITUDE,
    EARTH_DEFAULT_LONGITUDE,
    ENV_PREFIX,
    EPHEMERIS_DEFAULT_BASE_URL,
    EPHEMERIS_DEFAULT_ENDPOINT,
    EPHEMERIS_DEFAULT_KERNEL,
    EPHEMERIS_DEFAULT_TIMEOUT_SEC,
    MARS_DEFAULT_LONGITUDE,
    TAI_MINUS_UTC_SECONDS,
)
from cosmicclock.exceptions import ConfigurationError

__all__ = [
    "CosmicClockConfig",
    "LongitudeConfig",
    "TimeConfig",
    "EphemerisConfig",
    "LoggingConfig",
    "load_config",
    "get_config_paths",
]


# =============================================================================
# Section Models
# =============================================================================


def _longitude(default: float, body: str) -> float:
    # Any finite value is accepted; the clocks wrap via longitude/15 mod 24
    return Field(
        default=default,
        allow_inf_nan=False,
        description=f"{body} longitude in degrees (positive = East)",
    )


class LongitudeConfig(BaseModel):
    """Per-body observer longitudes."""

    earth: float = _longitude(EARTH_DEFAULT_LONGITUDE, "Earth")
    mars: float = _longitude(MARS_DEFAULT_LONGITUDE, "Mars")
    moon: float = _longitude(BODY_DEFAULT_LONGITUDE, "Moon")
    mercury: float = _longitude(BODY_DEFAULT_LONGITUDE, "Mercury")
    venus: float = _longitude(BODY_DEFAULT_LONGITUDE, "Venus")
    jupiter: float = _longitude(BODY_DEFAULT_LONGITUDE, "Jupiter")

    # Major moons, keyed by name; unlisted moons use 0°E
    moons: Dict[str, float] = Field(
        default_factory=dict,
        description="Longitude per major moon (degrees East)",
    )

    @field_validator("moons")
    @classmethod
    def validate_moons(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Normalize moon names to catalog spelling and reject unknown moons."""
        normalized = {}
        for name, lon in v.items():
            body = RotatingBody.from_name(name)
            if body is None or not body.is_major_moon:
                raise ValueError(f"Unknown moon: {name}")
            if lon != lon or lon in (float("inf"), float("-inf")):
                raise ValueError(f"Longitude for {name} must be finite")
            normalized[body.value] = float(lon)
        return normalized

    def for_body(self, body: RotatingBody) -> float:
        """Longitude configured for a rotating body."""
        planet_fields = {
            RotatingBody.MOON: self.moon,
            RotatingBody.MERCURY: self.mercury,
            RotatingBody.VENUS: self.venus,
            RotatingBody.JUPITER: self.jupiter,
        }
        if body in planet_fields:
            return planet_fields[body]
        return self.moons.get(body.value, BODY_DEFAULT_LONGITUDE)


class TimeConfig(BaseModel):
    """Time-scale parameters.

    TAI-UTC is not looked up from a leap-second table. Bump it here when the
    IERS announces a new leap second, otherwise TT and Mars time drift by one
    second per missed leap second.
    """

    tai_minus_utc_seconds: float = Field(
        default=TAI_MINUS_UTC_SECONDS,
        ge=0.0,
        le=100.0,
        description="TAI-UTC in seconds (leap-second count plus 10)",
    )


class EphemerisConfig(BaseModel):
    """Heliocentric position source configuration."""

    data_source: Literal["model", "external"] = Field(
        default="model",
        description="Active row provider: circular model or external state vectors",
    )
    provider: Literal["http", "skyfield"] = Field(
        default="http",
        description="External provider implementation",
    )

    # HTTP state-vector service
    base_url: str = Field(
        default=EPHEMERIS_DEFAULT_BASE_URL,
        description="Base URL of the state-vector service",
    )
    endpoint: str = Field(
        default=EPHEMERIS_DEFAULT_ENDPOINT,
        description="Path of the state-vector endpoint",
    )
    timeout: float = Field(
        default=EPHEMERIS_DEFAULT_TIMEOUT_SEC,
        ge=0.1,
        le=120.0,
        description="Total request timeout in seconds",
    )

    # Local Skyfield kernel
    kernel: str = Field(
        default=EPHEMERIS_DEFAULT_KERNEL,
        description="JPL SPK kernel loaded by the Skyfield provider",
    )

    bodies: List[str] = Field(
        default_factory=lambda: [config.name for config in ORBITAL_CATALOG.values()],
        description="Ordered planet list requested on every tick",
    )

    @field_validator("bodies", mode="before")
    @classmethod
    def split_bodies(cls, v):
        """Accept a comma-separated string (environment overrides)."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("bodies")
    @classmethod
    def validate_bodies(cls, v: List[str]) -> List[str]:
        """Ensure every requested body is in the orbital catalog."""
        names = []
        for name in v:
            body = OrbitalBody.from_name(name)
            if body is None:
                raise ValueError(f"Unknown orbital body: {name}")
            if body.value not in names:
                names.append(body.value)
        if not names:
            raise ValueError("At least one orbital body must be requested")
        return names

    @property
    def orbital_bodies(self) -> List[OrbitalBody]:
        return [OrbitalBody(name) for name in self.bodies]

    @property
    def url(self) -> str:
        return self.base_url.rstrip("/") + "/" + self.endpoint.lstrip("/")


class LoggingConfig(BaseModel):
    """Logging output configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Global logging level",
    )
    file: Optional[str] = Field(
        default=None,
        description="Optional rotating log file path",
    )
    correlation: bool = Field(
        default=True,
        description="Prefix lines with the tick correlation ID",
    )
    packages: Dict[str, Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        default_factory=dict,
        description="Per-package levels, e.g. {ephemeris: DEBUG}",
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


# =============================================================================
# Master Configuration
# =============================================================================


class CosmicClockConfig(BaseModel):
    """Master configuration aggregating all section configs."""

    model_config = ConfigDict(extra="ignore")

    longitudes: LongitudeConfig = Field(default_factory=LongitudeConfig)
    time: TimeConfig = Field(default_factory=TimeConfig)
    ephemeris: EphemerisConfig = Field(default_factory=EphemerisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================


def get_config_paths() -> list[Path]:
    """Config file paths to search, in priority order (first found wins)."""
    home = Path.home()
    return [
        Path("./cosmicclock.yaml"),
        Path("./cosmicclock.yml"),
        home / ".cosmicclock" / "config.yaml",
        home / ".cosmicclock" / "config.yml",
        Path("/etc/cosmicclock/config.yaml"),
    ]


def _apply_env_overrides(config_dict: dict) -> dict:
    """Apply environment variable overrides.

    Environment variables are in format: COSMICCLOCK_SECTION_KEY
    Example: COSMICCLOCK_EPHEMERIS_DATA_SOURCE=external
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        # COSMICCLOCK_TIME_TAI_MINUS_UTC_SECONDS -> time.tai_minus_utc_seconds
        parts = key[len(ENV_PREFIX):].lower().split("_")
        if len(parts) < 2:
            continue

        section = parts[0]
        setting = "_".join(parts[1:])

        if not isinstance(config_dict.get(section), dict):
            config_dict[section] = {}

        if value.lower() in ("true", "false"):
            value = value.lower() == "true"
        else:
            try:
                value = float(value)
            except ValueError:
                pass  # Keep as string

        config_dict[section][setting] = value

    return config_dict


def load_config(config_path: Optional[str | Path] = None) -> CosmicClockConfig:
    """Load configuration from file with validation.

    Args:
        config_path: Explicit config file path, or None for auto-discovery

    Returns:
        Validated CosmicClockConfig object

    Raises:
        ConfigurationError: If config file is invalid or cannot be loaded
    """
    config_dict: dict = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        config_files = [path]
    else:
        config_files = get_config_paths()

    for path in config_files:
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    config_dict = yaml.safe_load(f) or {}
                break
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError("Configuration root must be a mapping")

    config_dict = _apply_env_overrides(config_dict)

    try:
        return CosmicClockConfig(**config_dict)
    except Exception as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
