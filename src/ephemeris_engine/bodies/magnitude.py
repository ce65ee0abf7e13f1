"""Apparent magnitude models for solar-system bodies.

Empirical planet formulas come in four flavours selected by
MagnitudeAlgorithm; bodies without one use the albedo (Lambert sphere)
model, minor planets the IAU H-G system and comets the total magnitude law.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from ephemeris_engine.constants import AU_KM, DAYS_PER_CENTURY, J2000, PARSEC_KM
from ephemeris_engine.vec_math import Vector3

if TYPE_CHECKING:
    from ephemeris_engine.bodies.base import Body

SUN_APPARENT_MAGNITUDE = -26.73
SUN_ABSOLUTE_MAGNITUDE = 4.83

# Slopes below this disable the H-G and comet laws
SLOPE_UNSET_THRESHOLD = -9.99


class MagnitudeAlgorithm(Enum):
    """Planet magnitude formula sets."""

    MUELLER_1893 = 'mueller_1893'
    ASTRONOMICAL_ALMANAC_1984 = 'astronomical_almanac_1984'
    EXPLANATORY_SUPPLEMENT_1992 = 'explanatory_supplement_1992'
    EXPLANATORY_SUPPLEMENT_2013 = 'explanatory_supplement_2013'
    GENERIC = 'generic'


@dataclass(frozen=True)
class PhaseGeometry:
    """Observer-Sun-body geometry for one magnitude evaluation.

    Attributes:
        phase_angle: Sun-body-observer angle, radians.
        cos_chi: Cosine of the phase angle.
        observer_rq: Squared observer-Sun distance, AU².
        planet_rq: Squared body-Sun distance, AU².
        observer_planet_rq: Squared observer-body distance, AU².
        shadow_factor: Fraction of sunlight not blocked by the parent body.
        jde: Julian Ephemeris Day of the evaluation.
        saturn_observer: Saturn minus observer heliocentric position, used by
            the ring term; zero for other bodies.
    """

    phase_angle: float
    cos_chi: float
    observer_rq: float
    planet_rq: float
    observer_planet_rq: float
    shadow_factor: float
    jde: float
    saturn_observer: Vector3 = field(default_factory=Vector3)

    @property
    def distance_term(self) -> float:
        """5 log10(r Δ)."""
        return 5.0 * math.log10(math.sqrt(self.observer_planet_rq * self.planet_rq))

    @property
    def phase_degrees(self) -> float:
        return math.degrees(self.phase_angle)


MagnitudeFormula = Callable[['Body', MagnitudeAlgorithm, PhaseGeometry], Optional[float]]

_ES2013 = MagnitudeAlgorithm.EXPLANATORY_SUPPLEMENT_2013
_ES1992 = MagnitudeAlgorithm.EXPLANATORY_SUPPLEMENT_1992
_AA1984 = MagnitudeAlgorithm.ASTRONOMICAL_ALMANAC_1984
_MUELLER = MagnitudeAlgorithm.MUELLER_1893


def albedo_magnitude(body: Body, geometry: PhaseGeometry) -> float:
    """Lambert-sphere magnitude from the geometric albedo."""
    cos_chi = geometry.cos_chi
    p = (1.0 - geometry.phase_angle / math.pi) * cos_chi + math.sqrt(
        max(0.0, 1.0 - cos_chi * cos_chi)
    ) / math.pi
    flux = (
        2.0
        * body.albedo
        * body.radius_au
        * body.radius_au
        * p
        / (3.0 * geometry.observer_planet_rq * geometry.planet_rq)
        * geometry.shadow_factor
    )
    return SUN_APPARENT_MAGNITUDE - 2.5 * math.log10(flux)


def default_magnitude(
    body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry
) -> float:
    """Absolute magnitude plus distance term under ES2013, else the albedo model."""
    if (
        algorithm is _ES2013
        and body.name != 'Moon'
        and body.absolute_magnitude != -99.0
    ):
        return body.absolute_magnitude + geometry.distance_term
    return albedo_magnitude(body, geometry)


def mercury(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    p = geometry.phase_degrees
    d = geometry.distance_term
    if algorithm is _ES2013:
        return -0.6 + d + ((3.02e-6 * p - 0.000488) * p + 0.0498) * p
    if algorithm is _ES1992:
        f1 = 1.5 if p > 150.0 else p / 100.0
        return -0.36 + d + 3.8 * f1 - 2.73 * f1 * f1 + 2.0 * f1 * f1 * f1
    if algorithm is _MUELLER:
        ph50 = p - 50.0
        return 1.16 + d + 0.02838 * ph50 + 0.0001023 * ph50 * ph50
    if algorithm is _AA1984:
        return -0.42 + d + 0.038 * p - 0.000273 * p * p + 0.000002 * p * p * p
    return None


def venus(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    p = geometry.phase_degrees
    d = geometry.distance_term
    if algorithm is _ES2013:
        if p < 163.6:
            return -4.47 + d + ((0.13e-6 * p + 0.000057) * p + 0.0103) * p
        return 236.05828 + d - 2.81914 * p + 8.39034e-3 * p * p
    if algorithm is _ES1992:
        f1 = p / 100.0
        return -4.29 + d + 0.09 * f1 + 2.39 * f1 * f1 - 0.65 * f1 * f1 * f1
    if algorithm is _MUELLER:
        return -4.00 + d + 0.01322 * p + 0.0000004247 * p * p * p
    if algorithm is _AA1984:
        return -4.40 + d + 0.0009 * p + 0.000239 * p * p - 0.00000065 * p * p * p
    return None


def earth(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    if algorithm is _ES2013:
        p = geometry.phase_degrees
        return -3.87 + geometry.distance_term + ((0.48e-6 * p + 0.000019) * p + 0.0130) * p
    return None


def mars(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    p = geometry.phase_degrees
    d = geometry.distance_term
    if algorithm in (_ES2013, _ES1992, _AA1984):
        return -1.52 + d + 0.016 * p
    if algorithm is _MUELLER:
        return -1.30 + d + 0.01486 * p
    return None


def jupiter(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    p = geometry.phase_degrees
    d = geometry.distance_term
    if algorithm in (_ES2013, _AA1984):
        return -9.40 + d + 0.005 * p
    if algorithm is _ES1992:
        return -9.25 + d + 0.005 * p
    if algorithm is _MUELLER:
        return -8.93 + d
    return None


def saturn_rings_illumination(jde: float, saturn_observer: Vector3) -> float:
    """Magnitude contribution of the rings (Meeus ch. 45 ring plane)."""
    t = (jde - J2000) / DAYS_PER_CENTURY
    incl = math.radians((0.000004 * t - 0.012998) * t + 28.075216)
    node = math.radians((0.000412 * t + 1.394681) * t + 169.508470)
    lam = saturn_observer.longitude()
    beta = math.atan2(saturn_observer.z, math.hypot(saturn_observer.x, saturn_observer.y))
    sinx = (
        math.sin(incl) * math.cos(beta) * math.sin(lam - node)
        - math.cos(incl) * math.sin(beta)
    )
    return -2.6 * abs(sinx) + 1.25 * sinx * sinx


def saturn(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    if algorithm is MagnitudeAlgorithm.GENERIC:
        return None
    p = geometry.phase_degrees
    d = geometry.distance_term
    rings = saturn_rings_illumination(geometry.jde, geometry.saturn_observer)
    if algorithm is _MUELLER:
        return -8.68 + d + 0.044 * p + rings
    return -8.88 + d + 0.044 * p + rings


def uranus(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    p = geometry.phase_degrees
    d = geometry.distance_term
    if algorithm is _ES2013:
        return -7.19 + d + 0.002 * p
    if algorithm is _ES1992:
        return -7.19 + d + 0.0028 * p
    if algorithm is _MUELLER:
        return -6.85 + d
    if algorithm is _AA1984:
        return -7.19 + d
    return None


def neptune(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    d = geometry.distance_term
    if algorithm in (_ES2013, _ES1992, _AA1984):
        return -6.87 + d
    if algorithm is _MUELLER:
        return -7.05 + d
    return None


def pluto(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    d = geometry.distance_term
    if algorithm in (_ES2013, _MUELLER):
        return -1.01 + d
    if algorithm is _ES1992:
        return -1.01 + d + 0.041 * geometry.phase_degrees
    if algorithm is _AA1984:
        return -1.00 + d
    return None


def hg_magnitude(body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry) -> float | None:
    """IAU H-G magnitude (Bowell et al. 1989) for minor planets with a slope."""
    if body.slope < SLOPE_UNSET_THRESHOLD:
        return None
    g = body.slope
    t = math.tan(geometry.phase_angle * 0.5)
    phi1 = math.exp(-3.33 * t ** 0.63)
    phi2 = math.exp(-1.87 * t ** 1.22)
    return (
        body.absolute_magnitude
        - 2.5 * math.log10((1.0 - g) * phi1 + g * phi2)
        + 5.0 * math.log10(math.sqrt(geometry.planet_rq * geometry.observer_planet_rq))
    )


def comet_magnitude(
    body: Body, algorithm: MagnitudeAlgorithm, geometry: PhaseGeometry
) -> float | None:
    """Total comet magnitude H + 5 log10 Δ + 2.5 n log10 r."""
    if body.slope < SLOPE_UNSET_THRESHOLD:
        return None
    return (
        body.absolute_magnitude
        + 5.0 * math.log10(math.sqrt(geometry.observer_planet_rq))
        + 2.5 * body.slope * math.log10(math.sqrt(geometry.planet_rq))
    )


def sun_magnitude(distance_au: float, shadow_factor: float) -> float:
    """Apparent magnitude of the Sun from its absolute magnitude.

    Parameters:
        distance_au: Observer-Sun distance in AU.
        shadow_factor: Unobscured fraction of the solar disk; clamped so a
            total eclipse still yields the corona's brightness.
    """
    distance_pc = distance_au * AU_KM / PARSEC_KM
    shadow = max(0.000128, shadow_factor)
    return SUN_ABSOLUTE_MAGNITUDE + 5.0 * (math.log10(distance_pc) - 1.0) - 2.5 * math.log10(shadow)


def shadow_factor(
    planet_helio: Vector3,
    parent_helio: Vector3,
    parent_radius_au: float,
    sun_radius_au: float,
    body_radius_au: float,
    is_moon: bool,
) -> float:
    """Fraction of sunlight reaching a satellite past its parent's shadow."""
    parent_rq = parent_helio.length_squared()
    pos_times_parent = planet_helio.dot(parent_helio)
    if pos_times_parent <= parent_rq:
        return 1.0

    smp = sun_radius_au - parent_radius_au
    quot = pos_times_parent / parent_rq
    ds = (
        sun_radius_au
        - smp * quot
        - math.sqrt(
            max(
                0.0,
                (1.0 - smp / math.sqrt(parent_rq))
                * (planet_helio.length_squared() - pos_times_parent * quot),
            )
        )
    )
    if ds >= body_radius_au:
        return 2.718e-5 if is_moon else 1e-9
    if ds > -body_radius_au:
        ds /= body_radius_au
        return 0.5 - (math.asin(ds) + ds * math.sqrt(1.0 - ds * ds)) / math.pi
    return 1.0
