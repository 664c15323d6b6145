"""
COSMICCLOCK Ephemeris Service

Heliocentric row tables from interchangeable sources:
- Circular-orbit model (always available)
- External SPICE state-vector service over HTTP
- Local JPL kernel through Skyfield
- EphemerisSource selecting between them with model fallback
"""

from .providers import (
    StateVectorRecord,
    ProviderErrorKind,
    ProviderResult,
    StateVectorProvider,
    parse_records,
    format_instant,
)
from .spice_client import SpiceHttpProvider
from .skyfield_service import SkyfieldStateProvider
from .source import (
    DataSource,
    SourceStatus,
    TickResponse,
    EphemerisSource,
    create_ephemeris_source,
)

__all__ = [
    # Wire format and results
    "StateVectorRecord",
    "ProviderErrorKind",
    "ProviderResult",
    "StateVectorProvider",
    "parse_records",
    "format_instant",
    # Providers
    "SpiceHttpProvider",
    "SkyfieldStateProvider",
    # Source selection
    "DataSource",
    "SourceStatus",
    "TickResponse",
    "EphemerisSource",
    "create_ephemeris_source",
]
