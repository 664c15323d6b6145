"""
COSMICCLOCK Shared Constants

Centralizes the astronomical reference values, default settings and file
locations used across the multi-body clock engine. Every epoch, scale factor
and unit conversion lives here so the time-system modules never carry
scattered literals.

Constants are organized by category:
    - Version and identity
    - Time scales (Unix epoch, J2000, leap seconds)
    - Mars Sol Date reference pair
    - Units and physical values
    - Default longitudes
    - External ephemeris defaults
    - File paths and formats
"""

from typing import Final

# =============================================================================
# Version and Identity
# =============================================================================

COSMICCLOCK_VERSION: Final[str] = "1.3.0"
COSMICCLOCK_NAME: Final[str] = "COSMICCLOCK"

# =============================================================================
# Time Scales
# =============================================================================

SECONDS_PER_DAY: Final[float] = 86400.0
MILLISECONDS_PER_DAY: Final[float] = 86400000.0

# Julian Date of 1970-01-01T00:00:00Z
JD_UNIX_EPOCH: Final[float] = 2440587.5

# J2000.0 reference epoch (2000-01-01T12:00:00 TT)
J2000_TT: Final[float] = 2451545.0

# TAI-UTC as of the last leap second (2017-01-01). Not auto-updated: a new
# leap second must be applied through TimeConfig.tai_minus_utc_seconds.
TAI_MINUS_UTC_SECONDS: Final[float] = 37.0

# TT-TAI is fixed by definition
TT_MINUS_TAI_SECONDS: Final[float] = 32.184

TT_MINUS_UTC_SECONDS: Final[float] = TAI_MINUS_UTC_SECONDS + TT_MINUS_TAI_SECONDS

# =============================================================================
# Mars Sol Date (Allison & McEwen 2000, Mars24)
# =============================================================================

MSD_EPOCH_JD_TT: Final[float] = 2405522.0028779
EARTH_DAYS_PER_SOL: Final[float] = 1.0274912517

# =============================================================================
# Units and Physical Values
# =============================================================================

AU_KM: Final[float] = 149597870.7
HOURS_PER_DAY: Final[float] = 24.0
DEGREES_PER_HOUR: Final[float] = 15.0  # Longitude to local-time offset

# Equation of time series (Spencer 1971, NOAA truncation)
EOT_SCALE_MINUTES: Final[float] = 229.18
EOT_DAYS_PER_YEAR: Final[float] = 365.0

# =============================================================================
# Default Longitudes (degrees East)
# =============================================================================

EARTH_DEFAULT_LONGITUDE: Final[float] = 77.1025  # New Delhi
MARS_DEFAULT_LONGITUDE: Final[float] = 137.4  # Gale crater
BODY_DEFAULT_LONGITUDE: Final[float] = 0.0

# =============================================================================
# External Ephemeris Defaults
# =============================================================================

EPHEMERIS_DEFAULT_BASE_URL: Final[str] = "http://localhost:8000"
EPHEMERIS_DEFAULT_ENDPOINT: Final[str] = "/api/spice/state"
EPHEMERIS_DEFAULT_TIMEOUT_SEC: Final[float] = 5.0
EPHEMERIS_DEFAULT_KERNEL: Final[str] = "de440s.bsp"

# =============================================================================
# File Paths and Formats
# =============================================================================

CONFIG_FILENAME: Final[str] = "cosmicclock.yaml"
ENV_PREFIX: Final[str] = "COSMICCLOCK_"

# Log settings
LOG_MAX_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT: Final[int] = 5
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
