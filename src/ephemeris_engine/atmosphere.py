"""Atmospheric refraction and extinction on alt-az direction vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ephemeris_engine.config import (
    get_extinction_coefficient,
    get_pressure_mbar,
    get_temperature_c,
)
from ephemeris_engine.vec_math import Vector3

# Below these altitudes (degrees) the formulas are blended out linearly
MIN_GEO_ALTITUDE_DEG = -3.54
MIN_APP_ALTITUDE_DEG = -3.21783
TRANSITION_WIDTH_GEO_DEG = 1.46
TRANSITION_WIDTH_APP_DEG = 1.78217


def _saemundsson(ptc: float, alt: float) -> float:
    return ptc * (1.02 / math.tan(math.radians(alt + 10.3 / (alt + 5.11))) + 0.0019279)


def _bennett(ptc: float, alt: float) -> float:
    return ptc * (1.0 / math.tan(math.radians(alt + 7.31 / (alt + 4.4))) + 0.0013515)


def _backward_polynomial(alt: float) -> float:
    # Fit against Saemundsson over [-5, -0.3] degrees
    return (
        (((((0.0444 * alt + 0.7662) * alt + 4.9746) * alt + 13.599) * alt + 8.052) * alt - 11.308)
        * alt
        + 34.341
    )


def _rescale(pos: Vector3, sin_from: float, sin_to: float, length: float) -> Vector3:
    if abs(sin_from) >= 1.0:
        s = 1.0
    else:
        s = math.sqrt((1.0 - sin_to * sin_to) / (1.0 - sin_from * sin_from))
    return Vector3(pos.x * s, pos.y * s, sin_to * length)


@dataclass(frozen=True)
class Refraction:
    """Refraction for a given pressure (mbar) and temperature (Celsius)."""

    pressure: float = field(default_factory=get_pressure_mbar)
    temperature: float = field(default_factory=get_temperature_c)

    @property
    def ptc(self) -> float:
        """Pressure/temperature correction, degrees per unit formula value."""
        return self.pressure / 1010.0 * 283.0 / (273.0 + self.temperature) / 60.0

    def forward(self, pos: Vector3) -> Vector3:
        """Geometric to apparent (refracted) alt-az direction.

        Saemundsson above -3.54°, linear blend over the 1.46° below, no-op
        further down.
        """
        length = pos.length()
        if length == 0.0:
            return pos
        sin_geo = pos.z / length
        alt = math.degrees(math.asin(max(-1.0, min(1.0, sin_geo))))
        ptc = self.ptc

        if alt > MIN_GEO_ALTITUDE_DEG:
            alt = min(90.0, alt + _saemundsson(ptc, alt))
        elif alt > MIN_GEO_ALTITUDE_DEG - TRANSITION_WIDTH_GEO_DEG:
            rm5 = _saemundsson(ptc, MIN_GEO_ALTITUDE_DEG)
            alt += (
                rm5
                * (alt - (MIN_GEO_ALTITUDE_DEG - TRANSITION_WIDTH_GEO_DEG))
                / TRANSITION_WIDTH_GEO_DEG
            )
        else:
            return pos

        return _rescale(pos, sin_geo, math.sin(math.radians(alt)), length)

    def backward(self, pos: Vector3) -> Vector3:
        """Apparent to geometric alt-az direction.

        Bennett above 0.22879°, polynomial fit down to -3.21783°, linear blend
        over the 1.78217° below, no-op further down.
        """
        length = pos.length()
        if length == 0.0:
            return pos
        sin_obs = pos.z / length
        alt = math.degrees(math.asin(max(-1.0, min(1.0, sin_obs))))
        ptc = self.ptc

        if alt > 0.22879:
            alt -= _bennett(ptc, alt)
        elif alt > MIN_APP_ALTITUDE_DEG:
            alt -= ptc * _backward_polynomial(alt)
        elif alt > MIN_APP_ALTITUDE_DEG - TRANSITION_WIDTH_APP_DEG:
            r_min = _backward_polynomial(MIN_APP_ALTITUDE_DEG)
            alt -= (
                r_min
                * ptc
                * (alt - (MIN_APP_ALTITUDE_DEG - TRANSITION_WIDTH_APP_DEG))
                / TRANSITION_WIDTH_APP_DEG
            )
        else:
            return pos

        return _rescale(pos, sin_obs, math.sin(math.radians(alt)), length)


def airmass(cos_z: float, apparent_z: bool = True) -> float:
    """Airmass for the cosine of a zenith angle.

    Parameters:
        cos_z: Cosine of the zenith angle; below about -2° altitude the value
            is reflected to keep the result bounded.
        apparent_z: Rozenberg (1966) for apparent zenith angles, otherwise
            Young (1994) for geometric ones.

    Returns:
        Airmass, 1 at the zenith.
    """
    cz = cos_z
    if cos_z < -0.035:
        cz = min(1.0, -0.035 - (cos_z + 0.035))
    if apparent_z:
        return 1.0 / (cz + 0.025 * math.exp(-11.0 * cz))
    nom = (1.002432 * cz + 0.148386) * cz + 0.0096467
    denom = ((cz + 0.149864) * cz + 0.0102963) * cz + 0.000303978
    return nom / denom


@dataclass(frozen=True)
class Extinction:
    """Atmospheric extinction with coefficient k (magnitudes per airmass)."""

    coefficient: float = field(default_factory=get_extinction_coefficient)

    def airmass(self, cos_z: float, apparent_z: bool = True) -> float:
        return airmass(cos_z, apparent_z)

    def forward(self, altaz: Vector3, mag: float) -> float:
        """Dim ``mag`` by the extinction along the (unit) alt-az direction."""
        return mag + airmass(altaz.z, False) * self.coefficient

    def backward(self, altaz: Vector3, mag: float) -> float:
        """Remove extinction from an observed magnitude."""
        return mag - airmass(altaz.z, False) * self.coefficient
