"""
COSMICCLOCK SPICE State-Vector Client

HTTP client for an external state-vector service (typically a SPICE backend):

    GET {base_url}/api/spice/state?utc=<ISO-8601>&bodies=Mercury,Venus,...

The response is a JSON array of heliocentric state vectors in km and km/s.

One attempt per call with a bounded total timeout and no retry: the next
tick re-attempts naturally. Every failure class comes back as a
ProviderResult failure.

Usage:
    client = SpiceHttpProvider("http://localhost:8000", timeout=5.0)
    result = await client.fetch_states(now, ["Earth", "Mars"])
    if result.ok:
        rows = [r.to_row() for r in result.records]
"""

import asyncio
from datetime import datetime
from typing import Optional, Sequence

import aiohttp

from cosmicclock.constants import EPHEMERIS_DEFAULT_ENDPOINT, EPHEMERIS_DEFAULT_TIMEOUT_SEC
from cosmicclock.logging_config import get_logger
from services.ephemeris.providers import (
    ProviderErrorKind,
    ProviderResult,
    format_instant,
    parse_records,
)

__all__ = ["SpiceHttpProvider"]

logger = get_logger(__name__)


class SpiceHttpProvider:
    """
    aiohttp client for the external state-vector endpoint.

    A shared ClientSession can be injected; otherwise a short-lived session
    is opened per request.
    """

    name = "spice-http"

    def __init__(
        self,
        base_url: str,
        endpoint: str = EPHEMERIS_DEFAULT_ENDPOINT,
        timeout: float = EPHEMERIS_DEFAULT_TIMEOUT_SEC,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service base URL, e.g. http://localhost:8000
            endpoint: Path of the state-vector endpoint
            timeout: Total request timeout in seconds
            session: Optional shared aiohttp session (caller owns it)
        """
        self.url = base_url.rstrip("/") + "/" + endpoint.lstrip("/")
        self.timeout = timeout
        self._session = session

    def build_params(self, instant: datetime, bodies: Sequence[str]) -> dict:
        """Query parameters for one request."""
        return {"utc": format_instant(instant), "bodies": ",".join(bodies)}

    async def fetch_states(self, instant: datetime, bodies: Sequence[str]) -> ProviderResult:
        """
        Request state vectors for the named bodies.

        Args:
            instant: Epoch of the requested state vectors
            bodies: Body names, joined with commas in the query

        Returns:
            ProviderResult with the parsed records or the failure class
        """
        params = self.build_params(instant, bodies)
        logger.debug(f"GET {self.url} utc={params['utc']} bodies={params['bodies']}")

        try:
            if self._session is not None:
                return await self._request(self._session, params)
            async with aiohttp.ClientSession() as session:
                return await self._request(session, params)
        except asyncio.TimeoutError:
            return ProviderResult.failure(
                ProviderErrorKind.TIMEOUT,
                f"No response from {self.url} within {self.timeout}s",
            )
        except aiohttp.ClientError as e:
            return ProviderResult.failure(ProviderErrorKind.NETWORK, f"{type(e).__name__}: {e}")

    async def _request(self, session: aiohttp.ClientSession, params: dict) -> ProviderResult:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with session.get(self.url, params=params, timeout=timeout) as resp:
            if not 200 <= resp.status < 300:
                return ProviderResult.failure(
                    ProviderErrorKind.HTTP_STATUS,
                    f"HTTP {resp.status} from {self.url}",
                )
            try:
                payload = await resp.json(content_type=None)
            except ValueError as e:
                return ProviderResult.failure(ProviderErrorKind.MALFORMED, f"Invalid JSON: {e}")
        return parse_records(payload)
