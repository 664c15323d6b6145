"""
COSMICCLOCK - Multi-body clock and heliocentric position engine.

Clocks: Earth mean/apparent solar time, Mars Sol Date / MTC / LMST, and a
generic 24-hour rotational dial for the Moon, Mercury, Venus, Jupiter and
thirteen major moons. Positions: a circular-orbit model with optional
external state vectors (see services.ephemeris).
"""

from cosmicclock.constants import COSMICCLOCK_VERSION

__version__ = COSMICCLOCK_VERSION
