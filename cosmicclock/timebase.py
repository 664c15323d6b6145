"""
COSMICCLOCK Time Base

Instant to Julian Date conversions shared by every clock in the engine, plus
the floored modulo and HH:MM:SS decomposition used for all wrap-around.

Conventions:
    - Instants are datetimes interpreted in UTC (naive values are assumed UTC)
    - Julian Dates are plain floats in days
    - Clock readings are fractional hours in [0, 24)
"""

import math
from datetime import datetime, timezone
from typing import Tuple

from cosmicclock.constants import (
    DEGREES_PER_HOUR,
    HOURS_PER_DAY,
    JD_UNIX_EPOCH,
    MILLISECONDS_PER_DAY,
    SECONDS_PER_DAY,
    TAI_MINUS_UTC_SECONDS,
    TT_MINUS_TAI_SECONDS,
)

__all__ = [
    "mod",
    "to_radians",
    "to_degrees",
    "to_utc",
    "unix_millis",
    "julian_date_utc",
    "tt_minus_utc_days",
    "terrestrial_jd",
    "day_of_year",
    "utc_hour_of_day",
    "longitude_offset_hours",
    "split_hms",
    "format_hms",
]


def mod(n: float, m: float) -> float:
    """Floored modulo: always in [0, m) for positive m, even for negative n."""
    return ((n % m) + m) % m


def to_radians(deg: float) -> float:
    return deg * math.pi / 180.0


def to_degrees(rad: float) -> float:
    return rad * 180.0 / math.pi


def to_utc(instant: datetime) -> datetime:
    """Return the instant as an aware UTC datetime (naive input is taken as UTC)."""
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def unix_millis(instant: datetime) -> float:
    """Milliseconds since 1970-01-01T00:00:00Z, keeping sub-millisecond digits."""
    return to_utc(instant).timestamp() * 1000.0


def julian_date_utc(instant: datetime) -> float:
    """Julian Date on the UTC scale."""
    return unix_millis(instant) / MILLISECONDS_PER_DAY + JD_UNIX_EPOCH


def tt_minus_utc_days(tai_minus_utc_seconds: float = TAI_MINUS_UTC_SECONDS) -> float:
    """TT-UTC offset in days for a given leap-second count."""
    return (tai_minus_utc_seconds + TT_MINUS_TAI_SECONDS) / SECONDS_PER_DAY


def terrestrial_jd(jd_utc: float, tai_minus_utc_seconds: float = TAI_MINUS_UTC_SECONDS) -> float:
    """Terrestrial Time Julian Date from a UTC Julian Date.

    The leap-second count is a fixed parameter, not looked up from a table:
    pass the current value explicitly once a new leap second is announced.
    """
    return jd_utc + tt_minus_utc_days(tai_minus_utc_seconds)


def day_of_year(instant: datetime) -> int:
    """UTC calendar day ordinal, 1 on January 1st."""
    return to_utc(instant).timetuple().tm_yday


def utc_hour_of_day(instant: datetime, include_millis: bool = True) -> float:
    """Fractional UTC hour of day.

    Args:
        instant: Time of interest
        include_millis: Include the millisecond part; the equation-of-time
            series is evaluated at whole-second resolution.
    """
    t = to_utc(instant)
    hours = t.hour + t.minute / 60.0 + t.second / 3600.0
    if include_millis:
        hours += (t.microsecond // 1000) / 3.6e6
    return hours


def longitude_offset_hours(longitude_deg: float) -> float:
    """Local-time offset for a longitude in degrees East."""
    return longitude_deg / DEGREES_PER_HOUR


def split_hms(hours: float) -> Tuple[int, int, int]:
    """Decompose fractional hours into whole (hour, minute, second) of a 24 h dial."""
    h = int(math.floor(mod(hours, HOURS_PER_DAY)))
    m = int(math.floor(mod(hours * 60.0, 60.0)))
    s = int(math.floor(mod(hours * 3600.0, 60.0)))
    return h, m, s


def format_hms(hours: float) -> str:
    """Format fractional hours as ``HH:MM:SS``."""
    h, m, s = split_hms(hours)
    return f"{h:02d}:{m:02d}:{s:02d}"
