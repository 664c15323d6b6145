"""
COSMICCLOCK Test Fixtures Package.

Provides mock implementations of external ephemeris providers for testing.
These fixtures enable unit and integration testing without a running
state-vector service or a downloaded JPL kernel.

Available fixtures:
- MockStateProvider: Simulates an external state-vector provider
- make_record: Builds a state vector on a planet's model circle

Usage:
    from tests.fixtures import MockStateProvider

    async def test_fallback():
        source = EphemerisSource(MockStateProvider("network_error"), data_source="external")
        response = await source.refresh(now)
        assert response.status is SourceStatus.EXTERNAL_ERROR
"""

from tests.fixtures.mock_ephemeris import MockStateProvider, make_record

__all__ = [
    "MockStateProvider",
    "make_record",
]
