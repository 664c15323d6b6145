"""
COSMICCLOCK Circular Orbital-Position Model

Heliocentric positions under the circular-orbit approximation: each planet
sits on a circle of radius a in the ecliptic x-y plane at the angle swept by
its mean motion since J2000.0 (TT). No eccentricity, no inclination, no
perturbations.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from cosmicclock.bodies import ORBITAL_CATALOG, OrbitalBody, OrbitalBodyConfig
from cosmicclock.constants import AU_KM, J2000_TT, SECONDS_PER_DAY
from cosmicclock.timebase import mod, to_radians

__all__ = [
    "OrbitalRow",
    "mean_longitude_deg",
    "orbital_speed_km_s",
    "degrees_per_day",
    "circular_row",
    "circular_rows",
]


@dataclass(frozen=True)
class OrbitalRow:
    """Heliocentric state of one planet at one instant."""
    name: str
    semi_major_axis_au: float
    angle_deg: float          # [0, 360)
    x_au: float
    y_au: float
    speed_km_s: float
    period_days: float


def mean_longitude_deg(jd_tt: float, period_days: float) -> float:
    """Mean longitude since J2000.0 for a circular orbit, degrees [0, 360)."""
    return mod(((jd_tt - J2000_TT) / period_days) * 360.0, 360.0)


def orbital_speed_km_s(semi_major_axis_au: float, period_days: float) -> float:
    """Mean circular orbital speed in km/s."""
    return (2.0 * math.pi * semi_major_axis_au * AU_KM) / period_days / SECONDS_PER_DAY


def degrees_per_day(period_days: float) -> float:
    """Mean motion in degrees per day."""
    return 360.0 / period_days


def circular_row(config: OrbitalBodyConfig, jd_tt: float) -> OrbitalRow:
    """Position of one catalog planet at a TT Julian Date."""
    theta = mean_longitude_deg(jd_tt, config.orbital_period_days)
    a = config.semi_major_axis_au
    return OrbitalRow(
        name=config.name,
        semi_major_axis_au=a,
        angle_deg=theta,
        x_au=a * math.cos(to_radians(theta)),
        y_au=a * math.sin(to_radians(theta)),
        speed_km_s=orbital_speed_km_s(a, config.orbital_period_days),
        period_days=config.orbital_period_days,
    )


def circular_rows(
    jd_tt: float,
    bodies: Optional[Iterable[OrbitalBody]] = None,
) -> Tuple[OrbitalRow, ...]:
    """Rows for the requested planets (all eight by default), in request order."""
    selected = list(ORBITAL_CATALOG) if bodies is None else list(bodies)
    return tuple(circular_row(ORBITAL_CATALOG[body], jd_tt) for body in selected)
