"""Long-term precession angles (Vondrák, Capitaine & Wallace 2011)."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import NamedTuple

import numpy as np

from ephemeris_engine.constants import ARCSEC_TO_RAD, DAYS_PER_CENTURY, J2000, TWO_PI

# Columns: 1/period (cy^-1), cos psi, cos omega, cos chi, sin psi, sin omega, sin chi (arcsec)
_PQ_TERMS = np.array(
    [
        [1 / 402.90, -22206.325946, 1267.727824, -13765.924050, -3243.236469, -8571.476251, -2206.967126],
        [1 / 256.75, 12236.649447, 1702.324248, 13511.858383, -3969.723769, 5309.796459, -4186.752711],
        [1 / 292.00, -1589.008343, -2970.553839, -1455.229106, 7099.207893, -610.393953, 6737.949677],
        [1 / 537.22, 2482.103195, 693.790312, 1054.394467, -1903.696711, 923.201931, -856.922846],
        [1 / 241.45, 150.322920, -14.724451, 0.0, 146.435014, 3.759055, 0.0],
        [1 / 375.22, -13.632066, -516.649401, -112.300144, 1300.630106, -40.691114, 957.149088],
        [1 / 157.87, 389.437420, -356.794454, 202.769908, 1727.498039, 80.437484, 1709.440735],
        [1 / 274.20, 2031.433792, -129.552058, 1936.050095, 299.854055, 807.300668, 154.425505],
        [1 / 203.00, 363.748303, 256.129314, 0.0, -1217.125982, 83.712326, 0.0],
        [1 / 440.00, -896.747562, 190.266114, -655.484214, -471.367487, -368.654854, -243.520976],
        [1 / 170.72, -926.995700, 95.103991, -891.898637, -441.682145, -191.881064, -406.539008],
        [1 / 713.37, 37.070667, -332.907067, 0.0, -86.169171, -4.263770, 0.0],
        [1 / 313.00, -597.682468, 131.337633, 0.0, -308.320429, -270.353691, 0.0],
        [1 / 128.38, 66.282812, 82.731919, -333.322021, -422.815629, 11.602861, -446.656435],
        [1 / 202.00, 0.0, 0.0, 327.517465, 0.0, 0.0, -1049.071786],
        [1 / 315.00, 0.0, 0.0, -494.780332, 0.0, 0.0, -301.504189],
        [1 / 136.32, 0.0, 0.0, 585.492621, 0.0, 0.0, 41.348740],
        [1 / 490.00, 0.0, 0.0, 110.512834, 0.0, 0.0, 142.525186],
    ]
)

# Columns: 1/period (cy^-1), cos pA, cos epsilon, sin pA, sin epsilon (arcsec)
_EPS_TERMS = np.array(
    [
        [1 / 409.90, -6908.287473, 753.872780, -2845.175469, -1704.720302],
        [1 / 396.15, -3198.706291, -247.805823, 449.844989, -862.308358],
        [1 / 537.22, 1453.674527, 379.471484, -1255.915323, 447.832178],
        [1 / 402.90, -857.748557, -53.880558, 886.736783, -889.571909],
        [1 / 417.15, 1173.231614, -90.109153, 418.887514, 190.402846],
        [1 / 288.92, -156.981465, -353.600190, 997.912441, -56.564991],
        [1 / 4043.00, 371.836550, -63.115353, -240.979710, -296.222622],
        [1 / 306.00, -216.619040, -28.248187, 76.541307, -75.859952],
        [1 / 277.00, 193.691479, 17.703387, -36.788069, 67.473503],
        [1 / 203.00, 11.891524, 38.911307, -170.964086, 3.014055],
    ]
)


class Precession(NamedTuple):
    """Vondrák precession angles in radians."""

    psi: float
    omega: float
    chi: float
    epsilon: float


@lru_cache(maxsize=1)
def compute_vondrak(jde: float) -> Precession:
    """Precession angles (ψ, ω, χ, ε) for a Julian Ephemeris Day.

    The result for the most recent JDE is memoized.

    Parameters:
        jde: Julian Ephemeris Day (TT).

    Returns:
        Precession in radians.
    """
    t = (jde - J2000) / DAYS_PER_CENTURY

    phase = TWO_PI * t * _PQ_TERMS[:, 0]
    cos_p = np.cos(phase)
    sin_p = np.sin(phase)
    psi = float(np.sum(_PQ_TERMS[:, 1] * cos_p + _PQ_TERMS[:, 4] * sin_p))
    omega = float(np.sum(_PQ_TERMS[:, 2] * cos_p + _PQ_TERMS[:, 5] * sin_p))
    chi = float(np.sum(_PQ_TERMS[:, 3] * cos_p + _PQ_TERMS[:, 6] * sin_p))

    phase = TWO_PI * t * _EPS_TERMS[:, 0]
    epsilon = float(
        np.sum(_EPS_TERMS[:, 2] * np.cos(phase) + _EPS_TERMS[:, 4] * np.sin(phase))
    )

    psi += ((289e-9 * t - 0.00740913) * t + 5042.7980307) * t + 8473.343527
    omega += ((151e-9 * t + 0.00000146) * t - 0.4436568) * t + 84283.175915
    chi += ((-61e-9 * t + 0.00001472) * t + 0.0790159) * t - 19.657270
    epsilon += ((-110e-9 * t - 0.00004039) * t + 0.3624445) * t + 84028.206305

    return Precession(
        psi * ARCSEC_TO_RAD,
        omega * ARCSEC_TO_RAD,
        chi * ARCSEC_TO_RAD,
        epsilon * ARCSEC_TO_RAD,
    )


def compute_vondrak_epsilon(jde: float) -> float:
    """Mean obliquity of the ecliptic (radians) from the Vondrák series."""
    return compute_vondrak(jde).epsilon


def mean_obliquity_degrees(jde: float) -> float:
    """Mean obliquity in degrees."""
    return math.degrees(compute_vondrak_epsilon(jde))
