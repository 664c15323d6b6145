"""
COSMICCLOCK Generic Rotational Clock

One period-agnostic model serves the Moon, Mercury, Venus, Jupiter and the
major moons: the body's rotation (or solar day) is mapped onto a 24-hour
analog dial regardless of how long that day really is.

Callers pick which physical period to pass (synodic, solar day, System III);
nothing here knows about a particular body.
"""

import math
from dataclasses import dataclass

from cosmicclock.bodies import ROTATION_CATALOG, RotatingBody, RotationalBodyConfig
from cosmicclock.constants import HOURS_PER_DAY, J2000_TT
from cosmicclock.timebase import longitude_offset_hours, mod

__all__ = [
    "rotational_clock",
    "day_number",
    "local_mean_solar_time",
    "BodyClockReading",
    "RotationalClock",
    "read_body",
]


def _elapsed_days(jd_tt: float, period_hours: float, epoch_jd_tt: float) -> float:
    """Body days (rotations) elapsed since the epoch; negative period runs backwards."""
    return (jd_tt - epoch_jd_tt) / (period_hours / HOURS_PER_DAY)


def rotational_clock(jd_tt: float, period_hours: float, epoch_jd_tt: float = J2000_TT) -> float:
    """Coordinated (0° longitude) dial reading in hours [0, 24)."""
    days = _elapsed_days(jd_tt, period_hours, epoch_jd_tt)
    return mod(math.fmod(days, 1.0) * HOURS_PER_DAY, HOURS_PER_DAY)


def day_number(jd_tt: float, period_hours: float, epoch_jd_tt: float = J2000_TT) -> int:
    """Count of complete rotations or solar days since the epoch."""
    return math.floor(_elapsed_days(jd_tt, period_hours, epoch_jd_tt))


def local_mean_solar_time(
    jd_tt: float,
    period_hours: float,
    epoch_jd_tt: float = J2000_TT,
    longitude_deg: float = 0.0,
) -> float:
    """Dial reading shifted by longitude (degrees East), in hours [0, 24)."""
    return mod(
        rotational_clock(jd_tt, period_hours, epoch_jd_tt) + longitude_offset_hours(longitude_deg),
        HOURS_PER_DAY,
    )


@dataclass(frozen=True)
class BodyClockReading:
    """Clock state of one rotating body at one instant."""
    body: RotatingBody
    longitude: float
    coordinated_time: float      # Dial at 0° longitude (hours)
    local_mean_solar_time: float  # Dial at the configured longitude (hours)
    day_number: int
    day_label: str


@dataclass(frozen=True)
class RotationalClock:
    """A rotational clock bound to one catalog configuration."""
    config: RotationalBodyConfig

    def clock(self, jd_tt: float) -> float:
        return rotational_clock(jd_tt, self.config.period_hours, self.config.reference_epoch_jd_tt)

    def day_number(self, jd_tt: float) -> int:
        return day_number(jd_tt, self.config.period_hours, self.config.reference_epoch_jd_tt)

    def local_mean_solar_time(self, jd_tt: float, longitude_deg: float = 0.0) -> float:
        return local_mean_solar_time(
            jd_tt, self.config.period_hours, self.config.reference_epoch_jd_tt, longitude_deg
        )


def read_body(body: RotatingBody, jd_tt: float, longitude_deg: float = 0.0) -> BodyClockReading:
    """Evaluate the catalog clock of a body at a TT Julian Date."""
    config = ROTATION_CATALOG[body]
    dial = RotationalClock(config)
    return BodyClockReading(
        body=body,
        longitude=longitude_deg,
        coordinated_time=dial.clock(jd_tt),
        local_mean_solar_time=dial.local_mean_solar_time(jd_tt, longitude_deg),
        day_number=dial.day_number(jd_tt),
        day_label=config.day_label,
    )
