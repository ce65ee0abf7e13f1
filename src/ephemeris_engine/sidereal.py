"""Greenwich mean and apparent sidereal time."""

from __future__ import annotations

import math

from ephemeris_engine import nutation
from ephemeris_engine.constants import DAYS_PER_CENTURY, J2000, SECONDS_PER_DAY
from ephemeris_engine.precession import compute_vondrak_epsilon
from ephemeris_engine.units import Angle


def compute_mean(jd: float, jde: float) -> Angle:
    """Mean sidereal time at Greenwich, in [0°, 360°).

    Meeus, Astronomical Algorithms, 2nd ed., eq. 12.1 and 12.4, with the
    TT-UT1 split of the polynomial argument.

    Parameters:
        jd: Julian Day (UT1).
        jde: Julian Ephemeris Day (TT).

    Returns:
        Greenwich mean sidereal angle.
    """
    ut1 = (jd - math.floor(jd) + 0.5) * SECONDS_PER_DAY
    t = (jde - J2000) / DAYS_PER_CENTURY
    tu = (jd - J2000) / DAYS_PER_CENTURY

    seconds = (
        (((-0.000000002454 * t - 0.00000199708) * t - 0.0000002926) * t + 0.092772110) * t * t
    )
    seconds += (t - tu) * 307.4771013
    seconds += 8640184.79447825 * tu + 24110.5493771
    seconds += ut1

    return Angle.from_degrees((seconds / 240.0) % 360.0)


def compute_apparent(jd: float, jde: float) -> Angle:
    """Apparent sidereal time at Greenwich (mean plus the equation of the equinoxes).

    Not wrapped; a value just past 360° stays there.
    """
    nut = nutation.compute(jde)
    correction = nut.delta_psi * math.cos(compute_vondrak_epsilon(jde) + nut.delta_epsilon)
    return Angle(compute_mean(jd, jde).radians + correction)
