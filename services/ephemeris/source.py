"""
COSMICCLOCK Ephemeris Source

Chooses which provider fills the heliocentric row table on each tick: the
circular-orbit model, or an external state-vector provider with automatic
fallback to the model.

Selection policy:
- MODEL: model rows, always.
- EXTERNAL: one provider request per refresh. A failed request, or a
  response in which none of the requested bodies can be mapped, substitutes
  the model rows and reports EXTERNAL_ERROR. Otherwise only the mapped
  external rows are used. Requested bodies missing from the response are
  dropped from the table; they are never back-filled from the model.

Every refresh is numbered. A response whose generation is no longer the
latest issued is returned to its caller flagged stale and never committed,
so a slow response cannot overwrite a newer one.

Usage:
    source = create_ephemeris_source(load_config())
    response = await source.refresh(datetime.now(timezone.utc))
    for row in response.rows:
        print(row.name, row.angle_deg)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple, Union

from cosmicclock.bodies import ORBITAL_CATALOG, OrbitalBody
from cosmicclock.config import CosmicClockConfig
from cosmicclock.constants import TAI_MINUS_UTC_SECONDS
from cosmicclock.logging_config import get_logger, log_exception, log_timing, tick_context
from cosmicclock.orbits import OrbitalRow, circular_rows
from cosmicclock.timebase import julian_date_utc, terrestrial_jd, to_utc
from services.ephemeris.providers import (
    ProviderErrorKind,
    ProviderResult,
    StateVectorProvider,
)

__all__ = [
    "DataSource",
    "SourceStatus",
    "TickResponse",
    "EphemerisSource",
    "create_ephemeris_source",
]

logger = get_logger(__name__)


class DataSource(Enum):
    """Row provider selected by the caller."""
    MODEL = "model"
    EXTERNAL = "external"


class SourceStatus(Enum):
    """Control state of the ephemeris source."""
    MODEL = "model"
    EXTERNAL_LOADING = "external_loading"
    EXTERNAL_OK = "external_ok"
    EXTERNAL_ERROR = "external_error"


@dataclass(frozen=True)
class TickResponse:
    """Outcome of one refresh."""
    generation: int
    instant: datetime
    rows: Tuple[OrbitalRow, ...]
    status: SourceStatus
    error: Optional[ProviderErrorKind] = None
    reason: str = ""
    stale: bool = False


class EphemerisSource:
    """
    Row table owner for the heliocentric position view.

    Only refresh() mutates the table, and always by full replacement.
    """

    def __init__(
        self,
        provider: Optional[StateVectorProvider] = None,
        data_source: Union[DataSource, str] = DataSource.MODEL,
        bodies: Optional[Iterable[OrbitalBody]] = None,
        tai_minus_utc_seconds: float = TAI_MINUS_UTC_SECONDS,
    ):
        """
        Initialize the source.

        Args:
            provider: External state-vector provider (None disables external mode)
            data_source: Initially active row provider
            bodies: Ordered planets requested per tick (all eight by default)
            tai_minus_utc_seconds: Leap-second count for the model's TT conversion
        """
        self.provider = provider
        self.bodies: Tuple[OrbitalBody, ...] = tuple(bodies) if bodies is not None else tuple(ORBITAL_CATALOG)
        self.tai_minus_utc_seconds = tai_minus_utc_seconds

        self._data_source = DataSource(data_source)
        self._status = SourceStatus.MODEL
        self._rows: Tuple[OrbitalRow, ...] = ()
        self._generation = 0
        self._in_flight = 0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def data_source(self) -> DataSource:
        return self._data_source

    @data_source.setter
    def data_source(self, value: Union[DataSource, str]):
        new_source = DataSource(value)
        if new_source is not self._data_source:
            logger.info(f"Ephemeris data source: {self._data_source.value} -> {new_source.value}")
        self._data_source = new_source

    @property
    def status(self) -> SourceStatus:
        return self._status

    @property
    def rows(self) -> Tuple[OrbitalRow, ...]:
        """Last committed row table."""
        return self._rows

    @property
    def generation(self) -> int:
        """Generation of the most recently issued refresh."""
        return self._generation

    @property
    def is_pending(self) -> bool:
        """True while an external request is in flight."""
        return self._in_flight > 0

    # -------------------------------------------------------------------------
    # Providers
    # -------------------------------------------------------------------------

    def model_rows(self, jd_tt: float) -> Tuple[OrbitalRow, ...]:
        """Circular-model rows for the configured bodies; never fails."""
        return circular_rows(jd_tt, self.bodies)

    def _map_external(self, result: ProviderResult) -> Tuple[OrbitalRow, ...]:
        """Rows for requested bodies present in the result, in requested order."""
        by_body: Dict[OrbitalBody, OrbitalRow] = {}
        for record in result.records:
            body = record.body
            if body is None or body not in self.bodies:
                logger.debug(f"Ignoring state vector for {record.name!r}")
                continue
            by_body.setdefault(body, record.to_row())
        return tuple(by_body[body] for body in self.bodies if body in by_body)

    async def refresh(self, instant: datetime) -> TickResponse:
        """
        Produce the row table for an instant and commit it if still current.

        Args:
            instant: Time of interest

        Returns:
            TickResponse; stale=True when a newer refresh was issued meanwhile
        """
        instant = to_utc(instant)
        self._generation += 1
        generation = self._generation
        jd_tt = terrestrial_jd(julian_date_utc(instant), self.tai_minus_utc_seconds)

        with tick_context(generation):
            if self._data_source is DataSource.MODEL:
                response = TickResponse(generation, instant, self.model_rows(jd_tt), SourceStatus.MODEL)
            else:
                response = await self._refresh_external(generation, instant, jd_tt)
            return self._commit(response)

    async def _refresh_external(self, generation: int, instant: datetime, jd_tt: float) -> TickResponse:
        if self.provider is None:
            result = ProviderResult.failure(ProviderErrorKind.UNAVAILABLE, "No external provider configured")
        else:
            self._status = SourceStatus.EXTERNAL_LOADING
            self._in_flight += 1
            try:
                slow_after = getattr(self.provider, "timeout", None)
                with log_timing(logger, f"{self.provider.name} fetch", warn_threshold_sec=slow_after):
                    result = await self.provider.fetch_states(instant, [b.value for b in self.bodies])
            except Exception as e:
                # Providers report expected failures as results; anything raised is a provider bug
                log_exception(logger, f"{self.provider.name} fetch raised", e, level=logging.WARNING)
                result = ProviderResult.failure(ProviderErrorKind.UNAVAILABLE, f"{type(e).__name__}: {e}")
            finally:
                self._in_flight -= 1

        if result.ok:
            rows = self._map_external(result)
            if rows:
                dropped = len(self.bodies) - len(rows)
                if dropped:
                    logger.info(f"External response covered {len(rows)}/{len(self.bodies)} bodies, {dropped} dropped")
                return TickResponse(generation, instant, rows, SourceStatus.EXTERNAL_OK)
            result = ProviderResult.failure(ProviderErrorKind.EMPTY, "No requested bodies in response")

        logger.warning(f"External ephemeris failed ({result.error.value}): {result.reason}; using model rows")
        return TickResponse(
            generation,
            instant,
            self.model_rows(jd_tt),
            SourceStatus.EXTERNAL_ERROR,
            error=result.error,
            reason=result.reason,
        )

    def _commit(self, response: TickResponse) -> TickResponse:
        if response.generation != self._generation:
            logger.debug(f"Discarding stale response #{response.generation} (latest #{self._generation})")
            return TickResponse(
                response.generation,
                response.instant,
                response.rows,
                response.status,
                error=response.error,
                reason=response.reason,
                stale=True,
            )
        self._rows = response.rows
        self._status = response.status
        return response


# =============================================================================
# Factory
# =============================================================================


def create_ephemeris_source(config: Optional[CosmicClockConfig] = None, session=None) -> EphemerisSource:
    """
    Build an EphemerisSource from configuration.

    Args:
        config: Full configuration (defaults if omitted)
        session: Optional shared aiohttp.ClientSession for the HTTP provider

    Returns:
        Configured EphemerisSource
    """
    config = config or CosmicClockConfig()
    eph = config.ephemeris

    if eph.provider == "skyfield":
        from services.ephemeris.skyfield_service import SkyfieldStateProvider

        provider = SkyfieldStateProvider(kernel=eph.kernel)
    else:
        from services.ephemeris.spice_client import SpiceHttpProvider

        provider = SpiceHttpProvider(eph.base_url, eph.endpoint, eph.timeout, session=session)

    logger.info(f"Ephemeris source: {eph.data_source} (external provider: {provider.name})")
    return EphemerisSource(
        provider=provider,
        data_source=eph.data_source,
        bodies=eph.orbital_bodies,
        tai_minus_utc_seconds=config.time.tai_minus_utc_seconds,
    )
