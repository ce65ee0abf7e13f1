"""Coefficient-series position providers.

Each provider maps a Julian Ephemeris Day to (position AU, velocity AU/day)
in the VSOP87 frame (J2000 ecliptic), relative to the body's parent:
heliocentric for planets, geocentric for the Moon.

Planets, Earth and Moon come from ERFA (plan94, epv00, moon98), whose
output is on the J2000 mean equator and is rotated into VSOP87 here.
Pluto uses the periodic series of Meeus, Astronomical Algorithms ch. 37.
"""

from __future__ import annotations

import math

import erfa
import numpy as np

from ephemeris_engine.constants import (
    DAYS_PER_CENTURY,
    J2000,
    MJD_OFFSET,
    ROT_J2000_TO_VSOP87,
)
from ephemeris_engine.geometry import spherical_to_rectangular
from ephemeris_engine.vec_math import Vector3

# plan94 planet numbers
PLAN94_MERCURY = 1
PLAN94_VENUS = 2
PLAN94_MARS = 4
PLAN94_JUPITER = 5
PLAN94_SATURN = 6
PLAN94_URANUS = 7
PLAN94_NEPTUNE = 8


def _to_vsop87(pv: np.ndarray) -> tuple[Vector3, Vector3]:
    p = np.asarray(pv['p'], dtype=float).reshape(3)
    v = np.asarray(pv['v'], dtype=float).reshape(3)
    return Vector3.from_array(ROT_J2000_TO_VSOP87 @ p), Vector3.from_array(ROT_J2000_TO_VSOP87 @ v)


def planet_position(jde: float, planet_number: int) -> tuple[Vector3, Vector3]:
    """Heliocentric position and velocity of a major planet (ERFA plan94).

    Parameters:
        jde: Julian Ephemeris Day.
        planet_number: 1 Mercury, 2 Venus, 4 Mars ... 8 Neptune.

    Returns:
        (position AU, velocity AU/day) in VSOP87.
    """
    pv = erfa.plan94(MJD_OFFSET, jde - MJD_OFFSET, planet_number)
    return _to_vsop87(pv)


def earth_position(jde: float) -> tuple[Vector3, Vector3]:
    """Heliocentric position and velocity of the Earth (ERFA epv00)."""
    pvh, _ = erfa.epv00(MJD_OFFSET, jde - MJD_OFFSET)
    return _to_vsop87(pvh)


def moon_position(jde: float) -> tuple[Vector3, Vector3]:
    """Geocentric position and velocity of the Moon (ERFA moon98)."""
    pv = erfa.moon98(MJD_OFFSET, jde - MJD_OFFSET)
    return _to_vsop87(pv)


# Meeus table 37.A: multiples of the mean longitudes of Jupiter, Saturn and Pluto
_PLUTO_ARGUMENT = np.array(
    [
        (0, 0, 1), (0, 0, 2), (0, 0, 3), (0, 0, 4), (0, 0, 5), (0, 0, 6),
        (0, 1, -1), (0, 1, 0), (0, 1, 1), (0, 1, 2), (0, 1, 3),
        (0, 2, -2), (0, 2, -1), (0, 2, 0),
        (1, -1, 0), (1, -1, 1),
        (1, 0, -3), (1, 0, -2), (1, 0, -1), (1, 0, 0), (1, 0, 1), (1, 0, 2), (1, 0, 3), (1, 0, 4),
        (1, 1, -3), (1, 1, -2), (1, 1, -1), (1, 1, 0), (1, 1, 1), (1, 1, 3),
        (2, 0, -6), (2, 0, -5), (2, 0, -4), (2, 0, -3), (2, 0, -2), (2, 0, -1),
        (2, 0, 0), (2, 0, 1), (2, 0, 2), (2, 0, 3),
        (3, 0, -2), (3, 0, -1), (3, 0, 0),
    ],
    dtype=float,
)

# (sine, cosine) coefficients; longitude and latitude in 1e-6 degrees
_PLUTO_LONGITUDE = np.array(
    [
        (-19799805, 19850055), (897144, -4954829), (611149, 1211027), (-341243, -189585),
        (129287, -34992), (-38164, 30893), (20442, -9987), (-4063, -5071), (-6016, -3336),
        (-3956, 3039), (-667, 3572), (1276, 501), (1152, -917), (630, -1277), (2571, -459),
        (899, -1449), (-1016, 1043), (-2343, -1012), (7042, 788), (1199, -338), (418, -67),
        (120, -274), (-60, -159), (-82, -29), (-36, -20), (-40, 7), (-14, 22), (4, 13),
        (5, 2), (-1, 0), (2, 0), (-4, 5), (4, -7), (14, 24), (-49, -34), (163, -48),
        (9, 24), (-4, 1), (-3, 1), (1, 3), (-3, -1), (5, -3), (0, 0),
    ],
    dtype=float,
)

_PLUTO_LATITUDE = np.array(
    [
        (-5452852, -14974862), (3527812, 1672790), (-1050748, 327647), (178690, -292153),
        (18650, 100340), (-30697, -25823), (4878, 11248), (226, -64), (2030, -836),
        (69, -604), (-247, -567), (-57, 1), (-122, 175), (-49, -164), (-197, 199),
        (-25, 217), (589, -248), (-269, 711), (185, 193), (315, 807), (-130, -43), (5, 3),
        (2, 17), (2, 5), (2, 3), (3, 1), (2, -1), (1, -1), (0, -1), (0, 0), (0, -2),
        (2, 2), (-7, 0), (10, -8), (-3, 20), (6, 5), (14, 17), (-2, 0), (0, 0), (0, 0),
        (0, 1), (0, 0), (1, 0),
    ],
    dtype=float,
)

# Radius in 1e-7 AU
_PLUTO_RADIUS = np.array(
    [
        (66865439, 68951812), (-11827535, -332538), (1593179, -1438890), (-18444, 483220),
        (-65977, -85431), (31174, -6032), (-5794, 22161), (4601, 4032), (-1729, 234),
        (-415, 702), (239, 723), (67, -67), (1034, -451), (-129, 504), (480, -231),
        (2, -441), (-3359, 265), (7856, -7832), (36, 45763), (8663, 8547), (-809, -769),
        (263, -144), (-126, 32), (-35, -16), (-19, -4), (-15, 8), (-4, 12), (5, 6),
        (3, 1), (6, -2), (2, 2), (-2, -2), (14, 13), (-63, 13), (136, -236), (273, 1065),
        (251, 149), (-25, -9), (9, -2), (-8, 7), (2, -10), (19, 35), (10, 2),
    ],
    dtype=float,
)


def pluto_position(jde: float) -> tuple[Vector3, Vector3]:
    """Heliocentric position of Pluto (Meeus eq. 37.1); velocity is zero.

    Valid for 1885-2099, to 0.07" in longitude and 6e-6 AU in radius.
    """
    t = (jde - J2000) / DAYS_PER_CENTURY
    means = np.array(
        [34.35 + 3034.9057 * t, 50.08 + 1222.1138 * t, 238.96 + 144.9600 * t]
    )
    a = np.radians(_PLUTO_ARGUMENT @ means)
    sin_a = np.sin(a)
    cos_a = np.cos(a)

    longitude = float(_PLUTO_LONGITUDE[:, 0] @ sin_a + _PLUTO_LONGITUDE[:, 1] @ cos_a)
    latitude = float(_PLUTO_LATITUDE[:, 0] @ sin_a + _PLUTO_LATITUDE[:, 1] @ cos_a)
    radius = float(_PLUTO_RADIUS[:, 0] @ sin_a + _PLUTO_RADIUS[:, 1] @ cos_a)

    lon = math.radians(238.958116 + 144.96 * t + longitude * 1e-6)
    lat = math.radians(-3.908239 + latitude * 1e-6)
    r = 40.7241346 + radius * 1e-7

    return spherical_to_rectangular(lon, lat) * r, Vector3()
