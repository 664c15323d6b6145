"""
COSMICCLOCK Snapshot Engine

Pull-based evaluation of every clock and the circular-model position table
for one instant. The engine holds no notion of "now": the caller's scheduler
(timer, frame loop, test) chooses the instant and the cadence.

Usage:
    from datetime import datetime, timezone
    from cosmicclock.engine import evaluate
    from cosmicclock.timebase import format_hms

    snap = evaluate(datetime.now(timezone.utc))
    print(format_hms(snap.mars.local_mean_solar_time), snap.mars.sol_number)
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from cosmicclock.bodies import ROTATION_CATALOG, RotatingBody
from cosmicclock.config import CosmicClockConfig
from cosmicclock.earth_time import (
    apparent_solar_time,
    equation_of_time_minutes,
    mean_solar_time,
)
from cosmicclock.mars_time import (
    mars_coordinated_time,
    mars_local_mean_solar_time,
    mars_sol_date,
    sol_number,
    sol_progress,
)
from cosmicclock.orbits import OrbitalRow, circular_rows
from cosmicclock.rotation import BodyClockReading, read_body
from cosmicclock.timebase import day_of_year, julian_date_utc, terrestrial_jd, to_utc

__all__ = [
    "EarthReading",
    "MarsReading",
    "Snapshot",
    "read_earth",
    "read_mars",
    "evaluate",
]


@dataclass(frozen=True)
class EarthReading:
    """Earth solar clocks at one longitude."""
    longitude: float
    mean_solar_time: float
    apparent_solar_time: float
    equation_of_time_minutes: float
    day_of_year: int


@dataclass(frozen=True)
class MarsReading:
    """Mars clocks at one longitude."""
    longitude: float
    sol_date: float
    coordinated_time: float
    local_mean_solar_time: float
    sol_number: int
    sol_progress: float


@dataclass(frozen=True)
class Snapshot:
    """All readings for one instant. Replace, never mutate."""
    instant: datetime
    jd_utc: float
    jd_tt: float
    earth: EarthReading
    mars: MarsReading
    bodies: Mapping[RotatingBody, BodyClockReading]
    orbits: Tuple[OrbitalRow, ...]


def read_earth(instant: datetime, longitude_deg: float) -> EarthReading:
    return EarthReading(
        longitude=longitude_deg,
        mean_solar_time=mean_solar_time(instant, longitude_deg),
        apparent_solar_time=apparent_solar_time(instant, longitude_deg),
        equation_of_time_minutes=equation_of_time_minutes(instant),
        day_of_year=day_of_year(instant),
    )


def read_mars(jd_utc: float, longitude_deg: float, tai_minus_utc_seconds: float) -> MarsReading:
    msd = mars_sol_date(jd_utc, tai_minus_utc_seconds)
    lmst = mars_local_mean_solar_time(msd, longitude_deg)
    return MarsReading(
        longitude=longitude_deg,
        sol_date=msd,
        coordinated_time=mars_coordinated_time(msd),
        local_mean_solar_time=lmst,
        sol_number=sol_number(msd),
        sol_progress=sol_progress(lmst),
    )


def evaluate(instant: datetime, config: Optional[CosmicClockConfig] = None) -> Snapshot:
    """Compute every clock and the model position table for an instant.

    Args:
        instant: Time of interest (naive datetimes are taken as UTC)
        config: Longitudes and time-scale settings (defaults if omitted)

    Returns:
        Immutable Snapshot
    """
    config = config or CosmicClockConfig()
    instant = to_utc(instant)
    leap = config.time.tai_minus_utc_seconds

    jd_utc = julian_date_utc(instant)
    jd_tt = terrestrial_jd(jd_utc, leap)

    bodies = {
        body: read_body(body, jd_tt, config.longitudes.for_body(body))
        for body in ROTATION_CATALOG
    }

    return Snapshot(
        instant=instant,
        jd_utc=jd_utc,
        jd_tt=jd_tt,
        earth=read_earth(instant, config.longitudes.earth),
        mars=read_mars(jd_utc, config.longitudes.mars, leap),
        bodies=MappingProxyType(bodies),
        orbits=circular_rows(jd_tt, config.ephemeris.orbital_bodies),
    )
