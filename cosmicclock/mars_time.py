"""
COSMICCLOCK Mars Time

Mars Sol Date, Coordinated Mars Time (MTC) and longitude-adjusted local mean
solar time, following the Mars24 / Allison & McEwen (2000) conventions.

MSD is a continuous sol count; MTC is the mean solar time on the 0°E
meridian (Airy-0); LMST adds the longitude offset, 15 degrees per Mars hour.
"""

import math

from cosmicclock.constants import (
    EARTH_DAYS_PER_SOL,
    HOURS_PER_DAY,
    MSD_EPOCH_JD_TT,
    TAI_MINUS_UTC_SECONDS,
)
from cosmicclock.timebase import longitude_offset_hours, mod, terrestrial_jd

__all__ = [
    "mars_sol_date",
    "mars_coordinated_time",
    "mars_local_mean_solar_time",
    "sol_number",
    "sol_progress",
]


def mars_sol_date(jd_utc: float, tai_minus_utc_seconds: float = TAI_MINUS_UTC_SECONDS) -> float:
    """Mars Sol Date from a UTC Julian Date."""
    jd_tt = terrestrial_jd(jd_utc, tai_minus_utc_seconds)
    return (jd_tt - MSD_EPOCH_JD_TT) / EARTH_DAYS_PER_SOL


def mars_coordinated_time(msd: float) -> float:
    """MTC in Mars hours [0, 24)."""
    return mod(math.fmod(msd, 1.0) * HOURS_PER_DAY, HOURS_PER_DAY)


def mars_local_mean_solar_time(msd: float, longitude_deg: float) -> float:
    """LMST in Mars hours [0, 24) at a longitude in degrees East."""
    return mod(mars_coordinated_time(msd) + longitude_offset_hours(longitude_deg), HOURS_PER_DAY)


def sol_number(msd: float) -> int:
    """Count of complete sols since the MSD epoch."""
    return math.floor(msd)


def sol_progress(lmst_hours: float) -> float:
    """Fraction of the local sol elapsed, in [0, 1)."""
    return mod(lmst_hours / HOURS_PER_DAY, 1.0)
