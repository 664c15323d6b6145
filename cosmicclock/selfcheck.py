"""
COSMICCLOCK Self-Check Harness

A fixed battery of approximate-equality assertions over the time base, the
Earth/Mars clocks, the rotational model and the circular orbit model. It is a
deterministic oracle snapshot, not a test framework: a failed check is a
``passed=False`` record and the harness always runs every check.

Tolerances are loose enough to hold at any time of day. The Earth
LAST-LMST check is the one instant-dependent entry.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from cosmicclock.bodies import ORBITAL_CATALOG, PLANET_CLOCKS, OrbitalBody, RotatingBody
from cosmicclock.constants import EARTH_DEFAULT_LONGITUDE, J2000_TT, TAI_MINUS_UTC_SECONDS
from cosmicclock.earth_time import apparent_solar_time, equation_of_time_minutes, mean_solar_time
from cosmicclock.logging_config import get_logger, log_exception
from cosmicclock.mars_time import mars_coordinated_time, mars_local_mean_solar_time, mars_sol_date
from cosmicclock.orbits import degrees_per_day, orbital_speed_km_s
from cosmicclock.rotation import RotationalClock
from cosmicclock.timebase import (
    julian_date_utc,
    mod,
    split_hms,
    terrestrial_jd,
    to_degrees,
    to_utc,
)

__all__ = ["SelfCheckResult", "run_self_checks", "summarize"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class SelfCheckResult:
    """Outcome of one self-check."""
    name: str
    passed: bool
    observed: str
    expected: str
    note: Optional[str] = None


def _approx(name: str, got: float, expected: float, tol: float, note: Optional[str] = None) -> SelfCheckResult:
    return SelfCheckResult(
        name=name,
        passed=abs(got - expected) <= tol,
        observed=f"{got:.2f}",
        expected=f"{expected:.2f}±{tol}",
        note=note,
    )


def _status_value(status) -> Optional[str]:
    return getattr(status, "value", status)


def run_self_checks(
    instant: datetime,
    earth_longitude: float = EARTH_DEFAULT_LONGITUDE,
    data_source: str = "model",
    source_status=None,
    tai_minus_utc_seconds: float = TAI_MINUS_UTC_SECONDS,
) -> List[SelfCheckResult]:
    """Run the full check battery for an instant.

    Args:
        instant: Instant for the time-dependent checks
        earth_longitude: Longitude for the Earth LAST/LMST identity
        data_source: Active ephemeris source ("model" or "external")
        source_status: Current ephemeris SourceStatus (or its string value)
        tai_minus_utc_seconds: Leap-second count used for TT and Mars time

    Returns:
        One SelfCheckResult per check, in a fixed order
    """
    instant = to_utc(instant)
    jd_utc = julian_date_utc(instant)
    jd_tt = terrestrial_jd(jd_utc, tai_minus_utc_seconds)
    msd = mars_sol_date(jd_utc, tai_minus_utc_seconds)

    earth = ORBITAL_CATALOG[OrbitalBody.EARTH]
    mercury = ORBITAL_CATALOG[OrbitalBody.MERCURY]
    neptune = ORBITAL_CATALOG[OrbitalBody.NEPTUNE]

    def earth_identity() -> SelfCheckResult:
        lmst = mean_solar_time(instant, earth_longitude)
        last = apparent_solar_time(instant, earth_longitude)
        diff = mod(last - lmst - equation_of_time_minutes(instant) / 60.0, 24.0)
        err = min(diff, 24.0 - diff)
        return SelfCheckResult("Earth: LAST-LMST≈EoT/60", err < 0.01, f"{err:.4f}", "<0.01", "~36 s")

    def atan2_wrap() -> SelfCheckResult:
        ang = mod(to_degrees(math.atan2(1, 0)), 360.0)
        return SelfCheckResult("atan2(1,0) deg = 90", abs(ang - 90) < 1e-9, f"{ang:.6f}", "90.000000")

    def data_source_check() -> SelfCheckResult:
        status = _status_value(source_status) or "model"
        ok = data_source == "model" or status != "external_error"
        return SelfCheckResult(f"Data source: {data_source}", ok, status, "model or external(ok)")

    def j2000_epoch() -> SelfCheckResult:
        jd = julian_date_utc(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))
        return SelfCheckResult("J2000.0 JD (UTC)", abs(jd - J2000_TT) < 1e-9, f"{jd:.6f}", f"{J2000_TT:.6f}")

    def wrap() -> SelfCheckResult:
        got = mod(-30.0, 24.0)
        return SelfCheckResult("mod(-30, 24) = 18", got == 18.0, f"{got:.2f}", "18.00", "floored modulo")

    def day_direction(body: RotatingBody) -> SelfCheckResult:
        dial = RotationalClock(PLANET_CLOCKS[body])
        expect_increase = not dial.config.retrograde
        later = jd_tt + abs(dial.config.period_days)
        before, after = dial.day_number(jd_tt), dial.day_number(later)
        ok = after > before if expect_increase else after < before
        direction = "prograde" if expect_increase else "retrograde"
        return SelfCheckResult(
            f"{body.value}: day counter {direction}",
            ok,
            f"{before} -> {after}",
            "increasing" if expect_increase else "decreasing",
        )

    def hms_round_trip() -> SelfCheckResult:
        lmst = mars_local_mean_solar_time(msd, 0.0)
        h, m, s = split_hms(lmst)
        err = abs(h + m / 60.0 + s / 3600.0 - lmst)
        return SelfCheckResult("HH:MM:SS round-trip", err < 1 / 3600, f"{err:.6f}", f"<{1 / 3600:.6f}", "1 s")

    checks: List[Callable[[], SelfCheckResult]] = [
        lambda: _approx("Earth speed", orbital_speed_km_s(earth.semi_major_axis_au, earth.orbital_period_days), 29.78, 0.5, "mean"),
        lambda: _approx("Mercury speed", orbital_speed_km_s(mercury.semi_major_axis_au, mercury.orbital_period_days), 47.36, 1.0, "fast"),
        lambda: _approx("Neptune speed", orbital_speed_km_s(neptune.semi_major_axis_au, neptune.orbital_period_days), 5.43, 0.2, "slow"),
        lambda: _approx("Earth deg/day", degrees_per_day(earth.orbital_period_days), 0.9856, 0.02, "sidereal year"),
        lambda: _approx(
            "Mars: |MTC-LMST@0°E|",
            abs(mars_coordinated_time(msd) - mars_local_mean_solar_time(msd, 0.0)),
            0.0,
            0.005,
            "~18 s",
        ),
        earth_identity,
        atan2_wrap,
        data_source_check,
        j2000_epoch,
        wrap,
        lambda: day_direction(RotatingBody.VENUS),
        lambda: day_direction(RotatingBody.JUPITER),
        hms_round_trip,
    ]

    results: List[SelfCheckResult] = []
    for index, check in enumerate(checks):
        try:
            results.append(check())
        except Exception as e:
            log_exception(logger, f"Self-check #{index + 1} raised", e)
            results.append(SelfCheckResult(f"check #{index + 1}", False, type(e).__name__, "no error"))

    passed, total = summarize(results)
    for result in results:
        if not result.passed:
            logger.warning(f"Self-check failed: {result.name} got {result.observed}, expected {result.expected}")
    logger.info(f"Self-checks: {passed}/{total} passed")
    return results


def summarize(results: List[SelfCheckResult]) -> Tuple[int, int]:
    """Return (passed, total)."""
    return sum(1 for r in results if r.passed), len(results)


# =============================================================================
# MAIN (for testing)
# =============================================================================

if __name__ == "__main__":
    from cosmicclock.config import load_config
    from cosmicclock.logging_config import configure_logging

    config = load_config()
    configure_logging(config.logging)
    results = run_self_checks(
        datetime.now(timezone.utc),
        earth_longitude=config.longitudes.earth,
        data_source=config.ephemeris.data_source,
        tai_minus_utc_seconds=config.time.tai_minus_utc_seconds,
    )
    for r in results:
        mark = "PASS" if r.passed else "FAIL"
        note = f" ({r.note})" if r.note else ""
        print(f"  [{mark}] {r.name}: got {r.observed}, expected {r.expected}{note}")
