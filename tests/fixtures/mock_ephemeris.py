"""
Mock State-Vector Provider for Testing.

Simulates an external ephemeris backend for unit and integration testing.
Provides preset response scenarios, per-call blocking for overlapping-tick
tests and call recording.
"""

import asyncio
import logging
import math
from datetime import datetime
from typing import List, Optional, Sequence

from cosmicclock.bodies import ORBITAL_CATALOG, OrbitalBody
from cosmicclock.constants import AU_KM
from cosmicclock.orbits import circular_row
from cosmicclock.timebase import julian_date_utc, terrestrial_jd
from services.ephemeris.providers import (
    ProviderErrorKind,
    ProviderResult,
    StateVectorRecord,
    format_instant,
)

logger = logging.getLogger("COSMICCLOCK.fixtures.MockStateProvider")


def make_record(body: OrbitalBody, instant: datetime, angle_offset_deg: float = 0.0) -> StateVectorRecord:
    """
    State vector on the body's model circle, optionally rotated.

    Velocity is tangential with the model's mean speed, so the converted row
    differs from the model row only by the rotation.
    """
    jd_tt = terrestrial_jd(julian_date_utc(instant))
    row = circular_row(ORBITAL_CATALOG[body], jd_tt)
    theta = math.radians(row.angle_deg + angle_offset_deg)
    r_km = row.semi_major_axis_au * AU_KM
    return StateVectorRecord(
        name=body.value,
        x_km=r_km * math.cos(theta),
        y_km=r_km * math.sin(theta),
        z_km=0.0,
        vx_km_s=-row.speed_km_s * math.sin(theta),
        vy_km_s=row.speed_km_s * math.cos(theta),
        vz_km_s=0.0,
        epochUTC=format_instant(instant),
    )


class MockStateProvider:
    """
    Mock external provider for testing.

    Scenarios:
    - ok: every requested body
    - partial: only Earth, Mars and Jupiter
    - unmapped: a single record for a body outside the catalog
    - network_error / timeout / http_500 / malformed / empty: failures

    Example:
        provider = MockStateProvider("partial")
        source = EphemerisSource(provider, data_source="external")
        response = await source.refresh(now)
        assert len(response.rows) == 3
    """

    PARTIAL_BODIES = (OrbitalBody.EARTH, OrbitalBody.MARS, OrbitalBody.JUPITER)

    FAILURES = {
        "network_error": (ProviderErrorKind.NETWORK, "Mock: connection refused"),
        "timeout": (ProviderErrorKind.TIMEOUT, "Mock: no response within 5.0s"),
        "http_500": (ProviderErrorKind.HTTP_STATUS, "Mock: HTTP 500"),
        "malformed": (ProviderErrorKind.MALFORMED, "Mock: invalid JSON"),
        "empty": (ProviderErrorKind.EMPTY, "Mock: response contained no bodies"),
    }

    SUCCESSES = ("ok", "partial", "unmapped")

    def __init__(self, scenario: str = "ok", angle_offset_deg: float = 10.0):
        """
        Initialize mock provider.

        Args:
            scenario: Response scenario
            angle_offset_deg: Rotation applied to returned positions so
                external rows are distinguishable from model rows
        """
        self.name = "mock"
        self.angle_offset_deg = angle_offset_deg
        self.set_scenario(scenario)

        # Call recording
        self.call_count = 0
        self.last_instant: Optional[datetime] = None
        self.last_bodies: List[str] = []

        # One gate per blocked call, consumed in call order
        self._gates: List[asyncio.Event] = []

    def set_scenario(self, scenario: str):
        """Switch the response scenario for subsequent calls."""
        if scenario not in self.FAILURES and scenario not in self.SUCCESSES:
            raise ValueError(f"Unknown scenario '{scenario}'")
        self.scenario = scenario

    def block_next_call(self) -> asyncio.Event:
        """Hold the next fetch until the returned event is set."""
        gate = asyncio.Event()
        self._gates.append(gate)
        return gate

    async def fetch_states(self, instant: datetime, bodies: Sequence[str]) -> ProviderResult:
        self.call_count += 1
        self.last_instant = instant
        self.last_bodies = list(bodies)
        scenario = self.scenario

        if self._gates:
            gate = self._gates.pop(0)
            await gate.wait()

        if scenario in self.FAILURES:
            kind, reason = self.FAILURES[scenario]
            logger.debug(f"MockStateProvider failing with {kind.value}")
            return ProviderResult.failure(kind, reason)

        if scenario == "unmapped":
            return ProviderResult.success([
                StateVectorRecord(name="Pluto", x_km=5.9e9, y_km=0.0, vx_km_s=0.0, vy_km_s=4.7)
            ])

        requested = [OrbitalBody.from_name(name) for name in bodies]
        if scenario == "partial":
            requested = [b for b in requested if b in self.PARTIAL_BODIES]

        return ProviderResult.success([
            make_record(body, instant, self.angle_offset_deg) for body in requested if body is not None
        ])
