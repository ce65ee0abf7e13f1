"""IAU 2000B nutation via ERFA."""

from __future__ import annotations

from functools import lru_cache
from typing import NamedTuple

import erfa

from ephemeris_engine.constants import MJD_OFFSET


class Nutation(NamedTuple):
    """Nutation in longitude and obliquity, radians."""

    delta_psi: float
    delta_epsilon: float


@lru_cache(maxsize=1)
def compute(jde: float) -> Nutation:
    """Nutation (Δψ, Δε) for a Julian Ephemeris Day; the latest JDE is memoized."""
    dpsi, deps = erfa.nut00b(MJD_OFFSET, jde - MJD_OFFSET)
    return Nutation(float(dpsi), float(deps))
