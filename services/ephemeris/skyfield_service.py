"""
COSMICCLOCK Skyfield State-Vector Provider

Local alternative to the HTTP state-vector service: heliocentric positions
and velocities computed by Skyfield from a JPL SPK kernel (DE440s by
default), in the ecliptic frame so x-y matches the circular model's plane.

Records come back in the same wire shape as the HTTP service, so the
ephemeris source normalizes both identically.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from skyfield.api import Loader
from skyfield.framelib import ecliptic_frame

from cosmicclock.bodies import OrbitalBody
from cosmicclock.constants import EPHEMERIS_DEFAULT_KERNEL
from cosmicclock.exceptions import EphemerisError
from cosmicclock.logging_config import get_logger
from services.ephemeris.providers import (
    ProviderErrorKind,
    ProviderResult,
    StateVectorRecord,
    format_instant,
)

__all__ = ["SkyfieldStateProvider"]

logger = get_logger(__name__)


class SkyfieldStateProvider:
    """
    Skyfield-based state-vector provider.

    The kernel is loaded lazily on the first request (downloaded into
    data_dir if missing), so constructing the provider is cheap.
    """

    name = "skyfield"

    # Ephemeris data directory
    DATA_DIR = Path(__file__).parent / "data"

    # Body name mappings for Skyfield (DE440s holds planet barycenters)
    BODY_NAMES = {
        OrbitalBody.MERCURY: "mercury barycenter",
        OrbitalBody.VENUS: "venus barycenter",
        OrbitalBody.EARTH: "earth",
        OrbitalBody.MARS: "mars barycenter",
        OrbitalBody.JUPITER: "jupiter barycenter",
        OrbitalBody.SATURN: "saturn barycenter",
        OrbitalBody.URANUS: "uranus barycenter",
        OrbitalBody.NEPTUNE: "neptune barycenter",
    }

    def __init__(self, kernel: str = EPHEMERIS_DEFAULT_KERNEL, data_dir: Optional[Path] = None):
        """
        Initialize the provider.

        Args:
            kernel: SPK kernel file name
            data_dir: Directory holding (or receiving) the kernel
        """
        self.kernel = kernel
        self.data_dir = Path(data_dir) if data_dir else self.DATA_DIR
        self._ts = None
        self._eph = None
        self._sun = None
        self._initialized = False

    def initialize(self):
        """Load timescale and kernel (can be slow on first run).

        Raises:
            EphemerisError: If the kernel cannot be downloaded or read
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            load = Loader(str(self.data_dir))
            self._ts = load.timescale()
            self._eph = load(self.kernel)
            self._sun = self._eph["sun"]
        except (OSError, ValueError) as e:
            raise EphemerisError(f"Cannot load ephemeris kernel {self.kernel}: {e}") from e

        self._initialized = True
        logger.info(f"Loaded ephemeris kernel {self.kernel} from {self.data_dir}")

    def _ensure_initialized(self):
        if not self._initialized:
            self.initialize()

    def compute_states(self, instant: datetime, bodies: Sequence[str]) -> List[StateVectorRecord]:
        """Heliocentric ecliptic state vectors for the catalog bodies requested.

        Names outside the orbital catalog are skipped.
        """
        self._ensure_initialized()
        t = self._ts.from_datetime(instant)
        epoch = format_instant(instant)

        records = []
        for name in bodies:
            body = OrbitalBody.from_name(name)
            if body is None:
                logger.debug(f"Skipping unknown body {name!r}")
                continue

            heliocentric = (self._eph[self.BODY_NAMES[body]] - self._sun).at(t)
            position, velocity = heliocentric.frame_xyz_and_velocity(ecliptic_frame)
            x, y, z = (float(v) for v in position.km)
            vx, vy, vz = (float(v) for v in velocity.km_per_s)

            records.append(
                StateVectorRecord(
                    name=body.value,
                    x_km=x,
                    y_km=y,
                    z_km=z,
                    vx_km_s=vx,
                    vy_km_s=vy,
                    vz_km_s=vz,
                    epochUTC=epoch,
                )
            )
        return records

    async def fetch_states(self, instant: datetime, bodies: Sequence[str]) -> ProviderResult:
        """Compute state vectors off the event loop and wrap them in a ProviderResult."""
        try:
            records = await asyncio.to_thread(self.compute_states, instant, bodies)
        except EphemerisError as e:
            return ProviderResult.failure(ProviderErrorKind.UNAVAILABLE, str(e))
        except KeyError as e:
            return ProviderResult.failure(ProviderErrorKind.MALFORMED, f"Kernel lacks segment {e}")
        except ValueError as e:
            # EphemerisRangeError: instant outside the kernel's coverage
            return ProviderResult.failure(ProviderErrorKind.UNAVAILABLE, f"{self.kernel}: {e}")

        if not records:
            return ProviderResult.failure(ProviderErrorKind.EMPTY, "No catalog bodies requested")
        return ProviderResult.success(records)
