"""Fixed constants: astronomical units, epochs, body IDs and frame rotation matrices.

Angles are radians unless the name says otherwise.
"""

from __future__ import annotations

import math

import numpy as np

from ephemeris_engine.vec_math import Matrix4

# Body IDs (NAIF)
SUN_ID = 10
MERCURY_ID = 199
VENUS_ID = 299
EARTH_ID = 399
MOON_ID = 301
MARS_ID = 499
JUPITER_ID = 599
SATURN_ID = 699
URANUS_ID = 799
NEPTUNE_ID = 899
PLUTO_ID = 999

# First ID handed out to bodies added without an explicit ID (minor planets, comets)
FIRST_USER_BODY_ID = 1000000

MOON_NAME = 'Moon'

# Distance
AU_KM = 149597870.6996262
AU_M = AU_KM * 1000.0
PARSEC_KM = 30.857e12
LIGHT_YEAR_M = 9460730472580800.0
AU_PER_LIGHT_YEAR = 63241.07708442430066362006
SPEED_OF_LIGHT_KM_S = 299792.458

# Time
J2000 = 2451545.0
MJD_OFFSET = 2400000.5
UNIX_EPOCH_JD = 2440587.5
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_CENTURY = 36525.0
SYNODIC_MONTH_DAYS = 29.530588853

# Angle
TWO_PI = 2.0 * math.pi
DEGREES_PER_CIRCLE = 360.0
DEGREES_PER_HOUR = 15.0  # right ascension: 360 / 24 h
ARCSEC_TO_RAD = TWO_PI / (360.0 * 3600.0)

# Orbits
GAUSS_GRAV_K = 0.01720209895
GAUSS_GRAV_K_SQ = GAUSS_GRAV_K * GAUSS_GRAV_K
EPSILON = 1e-12  # Kepler solver convergence

# J2000 mean obliquity of the ecliptic (degrees)
EPS_0_DEG = 23.4392803055555555556
EPS_0 = math.radians(EPS_0_DEG)

# Earth shape used by eclipse geometry
EARTH_RADIUS_KM = 6378.1366
EARTH_FLATTENING = 1.0 / 298.25642


def _xrot3(angle: float) -> np.ndarray:
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def _zrot3(angle: float) -> np.ndarray:
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


# J2000 equatorial -> VSOP87 (J2000 ecliptic); 3x3 row-major
ROT_J2000_TO_VSOP87: np.ndarray = _xrot3(-EPS_0) @ _zrot3(math.radians(0.0000275))
ROT_VSOP87_TO_J2000: np.ndarray = ROT_J2000_TO_VSOP87.T

# J2000 equatorial -> galactic (Liu, Zhu & Zhang 2011); listed as matrix columns
ROT_J2000_TO_GALACTIC: np.ndarray = np.array(
    [
        [-0.054875539726, 0.494109453312, -0.867666135858],
        [-0.873437108010, -0.444829589425, -0.198076386122],
        [-0.483834985808, 0.746982251810, 0.455983795705],
    ]
).T

# J2000 equatorial -> supergalactic; listed as matrix columns
ROT_J2000_TO_SUPERGALACTIC: np.ndarray = np.array(
    [
        [0.37501548, -0.89832046, 0.22887497],
        [0.34135896, -0.09572714, -0.93504565],
        [0.86188018, 0.42878511, 0.27075058],
    ]
).T

# Pole of the J2000 equator expressed in the VSOP87 frame
J2000_POLE: np.ndarray = ROT_J2000_TO_VSOP87 @ np.array([0.0, 0.0, 1.0])

MAT_J2000_TO_VSOP87 = Matrix4.from_rotation(ROT_J2000_TO_VSOP87)
MAT_VSOP87_TO_J2000 = Matrix4.from_rotation(ROT_VSOP87_TO_J2000)
MAT_J2000_TO_GALACTIC = Matrix4.from_rotation(ROT_J2000_TO_GALACTIC)
MAT_J2000_TO_SUPERGALACTIC = Matrix4.from_rotation(ROT_J2000_TO_SUPERGALACTIC)
