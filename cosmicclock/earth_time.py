"""
COSMICCLOCK Earth Solar Time

Mean and apparent solar time for any longitude, and the equation of time
that separates them.

The equation of time uses the truncated Fourier series in the fractional
year (Spencer 1971 as published by NOAA). It ignores the real leap-year
structure of the calendar and is good to roughly 0.5-1 minute against an
ephemeris-grade value, which is enough for an educational clock.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import List

from cosmicclock.constants import EOT_DAYS_PER_YEAR, EOT_SCALE_MINUTES, HOURS_PER_DAY
from cosmicclock.timebase import (
    day_of_year,
    longitude_offset_hours,
    mod,
    utc_hour_of_day,
)

__all__ = [
    "fractional_year_radians",
    "equation_of_time_minutes",
    "equation_of_time_series",
    "mean_solar_time",
    "apparent_solar_time",
]


def fractional_year_radians(instant: datetime) -> float:
    """Fractional-year angle gamma for the equation-of-time series."""
    n = day_of_year(instant)
    hours = utc_hour_of_day(instant, include_millis=False)
    return (2.0 * math.pi / EOT_DAYS_PER_YEAR) * (n - 1 + (hours - 12.0) / 24.0)


def equation_of_time_minutes(instant: datetime) -> float:
    """Minutes by which apparent solar time leads (+) or lags (-) mean solar time."""
    g = fractional_year_radians(instant)
    return EOT_SCALE_MINUTES * (
        0.000075
        + 0.001868 * math.cos(g)
        - 0.032077 * math.sin(g)
        - 0.014615 * math.cos(2 * g)
        - 0.040849 * math.sin(2 * g)
    )


def equation_of_time_series(year: int) -> List[float]:
    """Equation of time at 00:00 UTC for day ordinals 1..366 of a year.

    Day 366 of a common year is January 1st of the following year, so the
    series always has 366 points.
    """
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return [equation_of_time_minutes(start + timedelta(days=d)) for d in range(366)]


def mean_solar_time(instant: datetime, longitude_deg: float) -> float:
    """Local mean solar time in hours [0, 24) at a longitude (degrees East)."""
    return mod(utc_hour_of_day(instant) + longitude_offset_hours(longitude_deg), HOURS_PER_DAY)


def apparent_solar_time(instant: datetime, longitude_deg: float) -> float:
    """Local apparent (sundial) solar time in hours [0, 24)."""
    return mod(
        mean_solar_time(instant, longitude_deg) + equation_of_time_minutes(instant) / 60.0,
        HOURS_PER_DAY,
    )
