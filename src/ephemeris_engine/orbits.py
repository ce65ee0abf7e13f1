"""Orbit capability and the classical-elements Kepler solver.

Positions are in AU and velocities in AU/day, in the parent body's frame
rotated to VSOP87 orientation (J2000 ecliptic).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Protocol

import numpy as np

from ephemeris_engine.constants import EPSILON, GAUSS_GRAV_K, GAUSS_GRAV_K_SQ, J2000_POLE, TWO_PI
from ephemeris_engine.vec_math import Vector3

logger = logging.getLogger(__name__)


class Orbit(Protocol):
    """Anything that yields position and velocity at a Julian Ephemeris Day."""

    e: float

    def position_and_velocity(self, jde: float) -> tuple[Vector3, Vector3]: ...

    @property
    def semi_major_axis(self) -> float: ...

    @property
    def sidereal_period(self) -> float: ...


def _sign(x: float) -> float:
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


def compute_sidereal_period(semi_major_axis: float, central_mass: float = 1.0) -> float:
    """Orbital period in days for a semi-major axis in AU; 0 for a <= 0.

    Parameters:
        semi_major_axis: a in AU.
        central_mass: Mass of the primary in solar masses.

    Returns:
        Period in days.
    """
    a = semi_major_axis
    if a <= 0.0:
        return 0.0
    return TWO_PI / GAUSS_GRAV_K * math.sqrt(a * a * a / central_mass)


def compute_mean_motion(e: float, q: float) -> float:
    """Mean motion in radians/day from eccentricity and pericenter distance (AU).

    For parabolic orbits this is Heafner's W/dt factor.
    """
    if e == 1.0:
        return GAUSS_GRAV_K * (1.5 / q) * math.sqrt(0.5 / q)
    a = q / (1.0 - e)
    return GAUSS_GRAV_K / (abs(a) * math.sqrt(abs(a)))


def compute_rot_j2000_longitude(obliquity: float, ascending_node: float) -> float:
    """Longitude of the J2000 node on a parent's equator, radians.

    Parameters:
        obliquity: Parent equator obliquity to VSOP87, radians.
        ascending_node: Parent equator ascending node on VSOP87, radians.

    Returns:
        Angle from the parent's node to the J2000 equator intersection.
    """
    cobl = math.cos(obliquity)
    sobl = math.sin(obliquity)
    cnod = math.cos(ascending_node)
    snod = math.sin(ascending_node)

    orbit_axis0 = np.array([cnod, snod, 0.0])
    orbit_axis1 = np.array([-snod * cobl, cnod * cobl, sobl])
    orbit_pole = np.array([snod * sobl, -cnod * sobl, cobl])
    origin = np.cross(J2000_POLE, orbit_pole)
    norm = np.linalg.norm(origin)
    if norm > 0.0:
        origin = origin / norm
    return math.atan2(float(origin @ orbit_axis1), float(origin @ orbit_axis0))


def parent_rotation(obliquity: float, ascending_node: float, j2000_longitude: float) -> np.ndarray:
    """3x3 rotation from a parent's equatorial frame to VSOP87 orientation."""
    cobl = math.cos(obliquity)
    sobl = math.sin(obliquity)
    cnod = math.cos(ascending_node)
    snod = math.sin(ascending_node)
    cj = math.cos(j2000_longitude)
    sj = math.sin(j2000_longitude)
    return np.array(
        [
            [cnod * cj - snod * cobl * sj, -cnod * sj - snod * cobl * cj, snod * sobl],
            [snod * cj + cnod * cobl * sj, -snod * sj + cnod * cobl * cj, -cnod * sobl],
            [sobl * sj, sobl * cj, cobl],
        ]
    )


def _elliptical(e: float, q: float, n: float, dt: float) -> tuple[float, float]:
    """(r cos ν, r sin ν) by Laguerre-Conway iteration, capped at 10 steps."""
    a = q / (1.0 - e)
    m = (n * dt) % TWO_PI
    ecc = m + 0.85 * e * _sign(math.sin(m))

    steps = 0
    while steps < 10:
        steps += 1
        previous = ecc
        f2 = e * math.sin(ecc)
        f = ecc - f2 - m
        f1 = 1.0 - e * math.cos(ecc)
        ecc += (-5.0 * f) / (f1 + _sign(f1) * math.sqrt(abs(16.0 * f1 * f1 - 20.0 * f * f2)))
        if abs(ecc - previous) < EPSILON:
            break
    else:
        logger.debug('Elliptical Kepler solver stopped after %d steps (e=%s)', steps, e)

    h1 = q * math.sqrt((1.0 + e) / (1.0 - e))
    return a * (math.cos(ecc) - e), h1 * math.sin(ecc)


def _hyperbolic(e: float, q: float, n: float, dt: float) -> tuple[float, float]:
    """(r cos ν, r sin ν) by Laguerre-Conway iteration on the hyperbolic anomaly (Heafner 5.4)."""
    a = q / (e - 1.0)
    m = n * dt
    ecc = _sign(m) * math.log(2.0 * abs(m) / e + 1.85)

    steps = 0
    while True:
        steps += 1
        previous = ecc
        f2 = e * math.sinh(ecc)
        f = f2 - ecc - m
        f1 = e * math.cosh(ecc) - 1.0
        ecc += (-5.0 * f) / (f1 + _sign(f1) * math.sqrt(abs(16.0 * f1 * f1 - 20.0 * f * f2)))
        if abs(ecc - previous) < EPSILON:
            break
    logger.debug('Hyperbolic Kepler solver converged in %d steps (e=%s)', steps, e)

    return a * (e - math.cosh(ecc)), a * math.sqrt(e * e - 1.0) * math.sinh(ecc)


def _parabolic(e: float, q: float, n: float, dt: float) -> tuple[float, float]:
    """(r cos ν, r sin ν) from Barker's equation."""
    w = dt * n
    y = np.cbrt(w + math.sqrt(w * w + 1.0))
    # Heafner (5.5.8) misprints this as (Y - 1) / Y.
    tan_nu2 = float(y - 1.0 / y)
    return q * (1.0 - tan_nu2 * tan_nu2), 2.0 * q * tan_nu2


@dataclass(frozen=True)
class KeplerOrbit:
    """Classical orbital elements around a primary.

    Attributes:
        q: Pericenter distance, AU.
        e: Eccentricity; e < 1, e == 1 and e > 1 pick the solver once.
        i: Inclination, radians.
        omega: Longitude of the ascending node, radians.
        w: Argument of pericenter, radians.
        t0: Time of pericenter passage, JDE.
        n: Mean motion, radians/day.
        parent_rot_obliquity: Obliquity of the reference plane, radians.
        parent_rot_ascending_node: Ascending node of the reference plane, radians.
        parent_rot_j2000_longitude: Defaults to compute_rot_j2000_longitude().
        central_mass: Primary mass in solar masses.
    """

    q: float
    e: float
    i: float
    omega: float
    w: float
    t0: float
    n: float
    parent_rot_obliquity: float = 0.0
    parent_rot_ascending_node: float = 0.0
    parent_rot_j2000_longitude: float | None = None
    central_mass: float = 1.0
    _rotate_to_vsop87: np.ndarray = field(init=False, repr=False, compare=False)
    _solver: Callable[[float, float, float, float], tuple[float, float]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        values = (self.q, self.e, self.i, self.omega, self.w, self.t0, self.n, self.central_mass)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f'Orbital elements must be finite: {values!r}')
        if self.e < 0.0:
            raise ValueError(f'Eccentricity must be non-negative, got {self.e}')
        if self.q <= 0.0:
            raise ValueError(f'Pericenter distance must be positive, got {self.q}')
        if self.central_mass <= 0.0:
            raise ValueError(f'Central mass must be positive, got {self.central_mass}')

        j2000_longitude = self.parent_rot_j2000_longitude
        if j2000_longitude is None:
            j2000_longitude = compute_rot_j2000_longitude(
                self.parent_rot_obliquity, self.parent_rot_ascending_node
            )
            object.__setattr__(self, 'parent_rot_j2000_longitude', j2000_longitude)
        object.__setattr__(
            self,
            '_rotate_to_vsop87',
            parent_rotation(
                self.parent_rot_obliquity, self.parent_rot_ascending_node, j2000_longitude
            ),
        )
        if self.e < 1.0:
            solver = _elliptical
        elif self.e > 1.0:
            solver = _hyperbolic
        else:
            solver = _parabolic
        object.__setattr__(self, '_solver', solver)

    @property
    def semi_major_axis(self) -> float:
        """a in AU; 0 for a parabola, negative for a hyperbola."""
        if self.e == 1.0:
            return 0.0
        return self.q / (1.0 - self.e)

    @property
    def sidereal_period(self) -> float:
        """Period in days; 0 for open orbits."""
        return compute_sidereal_period(self.semi_major_axis, self.central_mass)

    def position_and_velocity(self, jde: float) -> tuple[Vector3, Vector3]:
        """Position (AU) and velocity (AU/day) at ``jde`` in VSOP87 orientation."""
        r_cos_nu, r_sin_nu = self._solver(self.e, self.q, self.n, jde - self.t0)

        cw = math.cos(self.w)
        sw = math.sin(self.w)
        c_om = math.cos(self.omega)
        s_om = math.sin(self.omega)
        ci = math.cos(self.i)
        si = math.sin(self.i)

        # Heafner 5.3.1-5.3.6
        p_vec = np.array([-sw * s_om * ci + cw * c_om, sw * c_om * ci + cw * s_om, sw * si])
        q_vec = np.array([-cw * s_om * ci - sw * c_om, cw * c_om * ci - sw * s_om, cw * si])
        position = p_vec * r_cos_nu + q_vec * r_sin_nu

        r = math.hypot(r_cos_nu, r_sin_nu)
        sin_nu = r_sin_nu / r
        cos_nu = r_cos_nu / r
        semilatus = self.q * (1.0 + self.e)
        sqrt_mu_p = math.sqrt(GAUSS_GRAV_K_SQ * self.central_mass / semilatus)
        velocity = sqrt_mu_p * ((self.e + cos_nu) * q_vec - sin_nu * p_vec)

        rot = self._rotate_to_vsop87
        return Vector3.from_array(rot @ position), Vector3.from_array(rot @ velocity)
