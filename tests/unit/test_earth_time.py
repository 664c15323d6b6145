"""
COSMICCLOCK Unit Tests - Earth Solar Time

Tests mean and apparent solar time and the equation-of-time series.
"""

from datetime import datetime, timezone

import pytest

from cosmicclock.earth_time import (
    apparent_solar_time,
    equation_of_time_minutes,
    equation_of_time_series,
    fractional_year_radians,
    mean_solar_time,
)
from cosmicclock.timebase import mod

NOON = datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)


class TestMeanSolarTime:
    """Tests for longitude-shifted mean solar time."""

    def test_greenwich_noon(self):
        assert mean_solar_time(NOON, 0.0) == pytest.approx(12.0)

    def test_east_longitude_ahead(self):
        assert mean_solar_time(NOON, 90.0) == pytest.approx(18.0)

    def test_wraps_at_dateline(self):
        assert mean_solar_time(NOON, -180.0) == pytest.approx(0.0)
        assert mean_solar_time(NOON, 270.0) == pytest.approx(6.0)

    def test_default_longitude(self):
        assert mean_solar_time(NOON, 77.1025) == pytest.approx(12.0 + 77.1025 / 15.0)


class TestEquationOfTime:
    """Tests for the Spencer/NOAA series."""

    def test_fractional_year_at_first_noon(self):
        assert fractional_year_radians(datetime(2024, 1, 1, 12, tzinfo=timezone.utc)) == pytest.approx(0.0)

    def test_series_has_366_points(self):
        assert len(equation_of_time_series(2023)) == 366
        assert len(equation_of_time_series(2024)) == 366

    def test_series_extremes(self):
        series = equation_of_time_series(2024)
        assert 15.5 < max(series) < 17.5
        assert -15.5 < min(series) < -13.0

    def test_november_sundial_fast(self):
        assert equation_of_time_minutes(datetime(2024, 11, 3, tzinfo=timezone.utc)) > 15.0

    def test_february_sundial_slow(self):
        assert equation_of_time_minutes(datetime(2024, 2, 11, tzinfo=timezone.utc)) < -13.0

    def test_milliseconds_ignored(self):
        a = datetime(2024, 6, 1, 8, 15, 30, tzinfo=timezone.utc)
        b = a.replace(microsecond=999000)
        assert equation_of_time_minutes(a) == equation_of_time_minutes(b)


class TestApparentSolarTime:
    """Tests for the LAST = LMST + EoT/60 identity."""

    @pytest.mark.parametrize("instant", [
        datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc),
        datetime(2024, 2, 11, 23, 59, 59, tzinfo=timezone.utc),
        datetime(2024, 7, 4, 6, 30, tzinfo=timezone.utc),
        datetime(2024, 11, 3, 17, 45, 12, 345000, tzinfo=timezone.utc),
    ])
    @pytest.mark.parametrize("longitude", [-179.9, -75.0, 0.0, 77.1025, 180.0, 400.0])
    def test_identity(self, instant, longitude):
        last = apparent_solar_time(instant, longitude)
        lmst = mean_solar_time(instant, longitude)
        diff = mod(last - lmst - equation_of_time_minutes(instant) / 60.0, 24.0)
        assert min(diff, 24.0 - diff) < 0.01

    def test_range(self):
        for hour in range(24):
            t = datetime(2024, 11, 3, hour, tzinfo=timezone.utc)
            assert 0.0 <= apparent_solar_time(t, 10.0) < 24.0
