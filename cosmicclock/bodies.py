"""
COSMICCLOCK Body Catalogs

Closed enumerations of the bodies the engine knows about, each paired with an
immutable configuration record:

- OrbitalBody: the eight planets, with J2000.0 circular-orbit elements
- RotatingBody: Moon, Mercury, Venus, Jupiter and thirteen major moons,
  with the period that drives their 24-hour clock dial

Catalog records are validated when constructed, so a zero or non-finite
period can never reach the clock or orbit formulas.
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from cosmicclock.constants import J2000_TT
from cosmicclock.exceptions import CatalogError

__all__ = [
    "OrbitalBody",
    "RotatingBody",
    "OrbitalBodyConfig",
    "RotationalBodyConfig",
    "ORBITAL_CATALOG",
    "ROTATION_CATALOG",
    "PLANET_CLOCKS",
    "MAJOR_MOONS",
]


class OrbitalBody(Enum):
    """Planets available to the orbital-position model."""
    MERCURY = "Mercury"
    VENUS = "Venus"
    EARTH = "Earth"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"

    @classmethod
    def from_name(cls, name: str) -> Optional["OrbitalBody"]:
        """Case-insensitive lookup; None for names outside the catalog."""
        key = name.strip().lower()
        for body in cls:
            if body.value.lower() == key:
                return body
        return None


class RotatingBody(Enum):
    """Bodies with a generic rotational clock."""
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    JUPITER = "Jupiter"

    # Major moons (rotation-day model, illustrative)
    PHOBOS = "Phobos"
    DEIMOS = "Deimos"
    IO = "Io"
    EUROPA = "Europa"
    GANYMEDE = "Ganymede"
    CALLISTO = "Callisto"
    TITAN = "Titan"
    RHEA = "Rhea"
    IAPETUS = "Iapetus"
    ENCELADUS = "Enceladus"
    TITANIA = "Titania"
    OBERON = "Oberon"
    TRITON = "Triton"

    @classmethod
    def from_name(cls, name: str) -> Optional["RotatingBody"]:
        """Case-insensitive lookup; None for names outside the catalog."""
        key = name.strip().lower()
        for body in cls:
            if body.value.lower() == key:
                return body
        return None

    @property
    def is_major_moon(self) -> bool:
        return self not in PLANET_CLOCKS


@dataclass(frozen=True)
class OrbitalBodyConfig:
    """Circular-orbit elements of a planet."""
    name: str
    semi_major_axis_au: float
    orbital_period_days: float

    def __post_init__(self):
        for label, value in (
            ("semi_major_axis_au", self.semi_major_axis_au),
            ("orbital_period_days", self.orbital_period_days),
        ):
            if not math.isfinite(value) or value <= 0:
                raise CatalogError(self.name, f"{label} must be finite and > 0, got {value}")


@dataclass(frozen=True)
class RotationalBodyConfig:
    """
    Rotation (or synodic solar-day) period driving a 24-hour dial.

    A negative period encodes retrograde rotation (Venus): the dial runs
    backwards and the day counter decreases as time advances.
    """
    name: str
    period_hours: float
    reference_epoch_jd_tt: float = J2000_TT
    day_label: str = "Rotation count #"

    def __post_init__(self):
        if not math.isfinite(self.period_hours) or self.period_hours == 0:
            raise CatalogError(self.name, f"period_hours must be finite and non-zero, got {self.period_hours}")
        if not math.isfinite(self.reference_epoch_jd_tt):
            raise CatalogError(self.name, "reference_epoch_jd_tt must be finite")

    @property
    def period_days(self) -> float:
        return self.period_hours / 24.0

    @property
    def retrograde(self) -> bool:
        return self.period_hours < 0


ORBITAL_CATALOG: Mapping[OrbitalBody, OrbitalBodyConfig] = MappingProxyType({
    OrbitalBody.MERCURY: OrbitalBodyConfig("Mercury", 0.38709893, 87.969),
    OrbitalBody.VENUS: OrbitalBodyConfig("Venus", 0.72333199, 224.701),
    OrbitalBody.EARTH: OrbitalBodyConfig("Earth", 1.00000011, 365.256),
    OrbitalBody.MARS: OrbitalBodyConfig("Mars", 1.52366231, 686.98),
    OrbitalBody.JUPITER: OrbitalBodyConfig("Jupiter", 5.20336301, 4332.589),
    OrbitalBody.SATURN: OrbitalBodyConfig("Saturn", 9.53707032, 10759.22),
    OrbitalBody.URANUS: OrbitalBodyConfig("Uranus", 19.19126393, 30688.5),
    OrbitalBody.NEPTUNE: OrbitalBodyConfig("Neptune", 30.06896348, 60182.0),
})

# Moon uses the synodic month, Mercury and Venus their solar day, Jupiter System III
PLANET_CLOCKS: Mapping[RotatingBody, RotationalBodyConfig] = MappingProxyType({
    RotatingBody.MOON: RotationalBodyConfig("Moon", 29.530588 * 24, day_label="Lunar day #"),
    RotatingBody.MERCURY: RotationalBodyConfig("Mercury", 175.938 * 24, day_label="Solar day #"),
    RotatingBody.VENUS: RotationalBodyConfig(
        "Venus", -116.75 * 24, day_label="Solar day # (retrograde)"
    ),
    RotatingBody.JUPITER: RotationalBodyConfig("Jupiter", 9.925, day_label="Rotation # (Sys III)"),
})

MAJOR_MOONS: Mapping[RotatingBody, RotationalBodyConfig] = MappingProxyType({
    RotatingBody.PHOBOS: RotationalBodyConfig("Phobos", 7.653),
    RotatingBody.DEIMOS: RotationalBodyConfig("Deimos", 30.35),
    RotatingBody.IO: RotationalBodyConfig("Io", 42.459),
    RotatingBody.EUROPA: RotationalBodyConfig("Europa", 85.228),
    RotatingBody.GANYMEDE: RotationalBodyConfig("Ganymede", 171.709),
    RotatingBody.CALLISTO: RotationalBodyConfig("Callisto", 400.536),
    RotatingBody.TITAN: RotationalBodyConfig("Titan", 382.68),
    RotatingBody.RHEA: RotationalBodyConfig("Rhea", 108.45),
    RotatingBody.IAPETUS: RotationalBodyConfig("Iapetus", 1903.7),
    RotatingBody.ENCELADUS: RotationalBodyConfig("Enceladus", 32.89),
    RotatingBody.TITANIA: RotationalBodyConfig("Titania", 208.95),
    RotatingBody.OBERON: RotationalBodyConfig("Oberon", 323.1),
    RotatingBody.TRITON: RotationalBodyConfig("Triton", 141.0),
})

ROTATION_CATALOG: Mapping[RotatingBody, RotationalBodyConfig] = MappingProxyType({**PLANET_CLOCKS, **MAJOR_MOONS})
