"""
COSMICCLOCK Exception Hierarchy

All errors raised by the engine derive from CosmicClockError so callers can
catch the whole family in one place. Expected provider failures are NOT
raised: they travel as ProviderResult values (see services.ephemeris).
"""

__all__ = [
    "CosmicClockError",
    "ConfigurationError",
    "CatalogError",
    "EphemerisError",
]


class CosmicClockError(Exception):
    """Base class for all COSMICCLOCK errors."""


class ConfigurationError(CosmicClockError):
    """Configuration file missing, unreadable or invalid."""


class CatalogError(CosmicClockError):
    """A body catalog entry would make the rotational or orbital formulas undefined."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"{name}: {message}")


class EphemerisError(CosmicClockError):
    """An ephemeris provider could not be initialized."""
