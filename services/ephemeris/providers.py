"""
COSMICCLOCK Ephemeris Providers - Shared Types

Wire format, result type and provider protocol shared by every state-vector
provider.

Providers report failure by returning a ProviderResult, never by raising:
the fallback decision belongs to EphemerisSource, not to exception
unwinding.

Wire format (one JSON object per body):
    {"name": "Mars", "x_km": ..., "y_km": ..., "z_km": ...,
     "vx_km_s": ..., "vy_km_s": ..., "vz_km_s": ..., "epochUTC": "..."}

z, vz and epochUTC are accepted but unused: positions and speeds are planar.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cosmicclock.bodies import ORBITAL_CATALOG, OrbitalBody
from cosmicclock.constants import AU_KM
from cosmicclock.orbits import OrbitalRow
from cosmicclock.timebase import mod, to_degrees, to_utc

__all__ = [
    "StateVectorRecord",
    "ProviderErrorKind",
    "ProviderResult",
    "StateVectorProvider",
    "parse_records",
    "format_instant",
]


class StateVectorRecord(BaseModel):
    """Heliocentric state vector of one body, in km and km/s."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    x_km: float = Field(allow_inf_nan=False)
    y_km: float = Field(allow_inf_nan=False)
    z_km: Optional[float] = None
    vx_km_s: float = Field(allow_inf_nan=False)
    vy_km_s: float = Field(allow_inf_nan=False)
    vz_km_s: Optional[float] = None
    epoch_utc: Optional[str] = Field(default=None, alias="epochUTC")

    @property
    def body(self) -> Optional[OrbitalBody]:
        return OrbitalBody.from_name(self.name)

    def to_row(self) -> OrbitalRow:
        """Convert to an OrbitalRow; catalog supplies semi-major axis and period.

        Raises:
            KeyError: If the body is not in the orbital catalog
        """
        body = self.body
        if body is None:
            raise KeyError(self.name)
        config = ORBITAL_CATALOG[body]

        x_au = self.x_km / AU_KM
        y_au = self.y_km / AU_KM
        return OrbitalRow(
            name=config.name,
            semi_major_axis_au=config.semi_major_axis_au,
            angle_deg=mod(to_degrees(math.atan2(y_au, x_au)), 360.0),
            x_au=x_au,
            y_au=y_au,
            speed_km_s=math.hypot(self.vx_km_s, self.vy_km_s),
            period_days=config.orbital_period_days,
        )


class ProviderErrorKind(Enum):
    """Failure classes of an external provider. Each maps to the same fallback."""
    NETWORK = "network"          # Connection refused, DNS, reset
    TIMEOUT = "timeout"          # No complete response within the timeout
    HTTP_STATUS = "http_status"  # Non-success status code
    MALFORMED = "malformed"      # Unparsable body or missing fields
    EMPTY = "empty"              # Valid but no usable bodies
    UNAVAILABLE = "unavailable"  # Provider could not be initialized


@dataclass(frozen=True)
class ProviderResult:
    """Success with state vectors, or failure with a reason."""
    records: List[StateVectorRecord] = field(default_factory=list)
    error: Optional[ProviderErrorKind] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, records: List[StateVectorRecord]) -> "ProviderResult":
        return cls(records=list(records))

    @classmethod
    def failure(cls, error: ProviderErrorKind, reason: str) -> "ProviderResult":
        return cls(error=error, reason=reason)


class StateVectorProvider(Protocol):
    """Protocol implemented by every external state-vector provider."""

    name: str

    async def fetch_states(self, instant: datetime, bodies: Sequence[str]) -> ProviderResult:
        """Fetch heliocentric state vectors for the named bodies at an instant."""
        ...


def parse_records(payload: Any) -> ProviderResult:
    """Validate a decoded JSON payload into state-vector records.

    A payload that is not a list, or any element failing validation, makes
    the whole response malformed. An empty list is reported as EMPTY.
    """
    if not isinstance(payload, list):
        return ProviderResult.failure(
            ProviderErrorKind.MALFORMED,
            f"Expected a JSON array, got {type(payload).__name__}",
        )
    if not payload:
        return ProviderResult.failure(ProviderErrorKind.EMPTY, "Response contained no bodies")
    try:
        records = [StateVectorRecord.model_validate(item) for item in payload]
    except ValidationError as e:
        return ProviderResult.failure(
            ProviderErrorKind.MALFORMED,
            f"Invalid state vector: {e.error_count()} validation error(s)",
        )
    return ProviderResult.success(records)


def format_instant(instant: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-03-20T12:00:00.000Z."""
    return to_utc(instant).isoformat(timespec="milliseconds").replace("+00:00", "Z")
