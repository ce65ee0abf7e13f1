"""CelestialObject capability and spherical coordinate results.

Every variant supplies three primitives (J2000 equatorial position,
visual magnitude, angular size) plus rise/transit/set; every other
coordinate system is derived here from those and an Observer.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

from ephemeris_engine import atmosphere, constellations
from ephemeris_engine.constants import (
    J2000,
    MAT_J2000_TO_GALACTIC,
    MAT_J2000_TO_SUPERGALACTIC,
    TWO_PI,
)
from ephemeris_engine.geometry import equatorial_to_ecliptic, normalize_radians
from ephemeris_engine.rts import RiseTransitSet, compute_rts
from ephemeris_engine.units import Angle, Distance
from ephemeris_engine.vec_math import Matrix4, Vector3

if TYPE_CHECKING:
    from ephemeris_engine.observer import Observer


class Equatorial(NamedTuple):
    """Right ascension and declination."""

    ra: Angle
    dec: Angle


class Horizontal(NamedTuple):
    """Azimuth (from north, or from south) and altitude."""

    az: Angle
    alt: Angle


class HourAngle(NamedTuple):
    """Hour angle in hours [0, 24) and declination."""

    ha: float
    dec: Angle


class Ecliptic(NamedTuple):
    lon: Angle
    lat: Angle


class Galactic(NamedTuple):
    lon: Angle
    lat: Angle


class Supergalactic(NamedTuple):
    lon: Angle
    lat: Angle


def _spherical(v: Vector3) -> tuple[float, float]:
    return v.longitude(), v.latitude()


class CelestialObject:
    """Anything with a position on the sky of an Observer."""

    name: str = ''

    # Primitives

    def j2000_position(self, o: Observer) -> Vector3:
        """Observer-centred J2000 equatorial position (AU for solar-system bodies)."""
        raise NotImplementedError

    def visual_magnitude(self, o: Observer) -> float:
        raise NotImplementedError

    def angular_size(self, o: Observer) -> Angle:
        """Angular radius of a circle containing the object."""
        raise NotImplementedError

    def distance(self, o: Observer) -> Distance:
        raise NotImplementedError

    def rts(self, o: Observer, has_atmosphere: bool = True) -> RiseTransitSet:
        """Rise, transit and set times in local decimal hours."""
        return compute_rts(self, o, self.horizon_altitude(o, has_atmosphere))

    def horizon_altitude(self, o: Observer, has_atmosphere: bool = True) -> float:
        """Altitude of the object's centre at rise and set, radians."""
        hz = 0.0
        if has_atmosphere:
            hz += math.asin(o.refraction.backward(Vector3(1.0, 0.0, 0.0)).z)
        return hz

    # Rectangular positions

    def equinox_equatorial_position(self, o: Observer) -> Vector3:
        """Position on the equator and equinox of date; z along the home rotation axis."""
        return o.j2000_to_equinox_equatorial(self.j2000_position(o), False)

    def equinox_equatorial_position_apparent(self, o: Observer) -> Vector3:
        return o.j2000_to_equinox_equatorial(self.j2000_position(o), True)

    def altaz_position_geometric(self, o: Observer) -> Vector3:
        """Alt-az position without refraction; z at the zenith."""
        return o.j2000_to_altaz(self.j2000_position(o), False)

    def altaz_position_apparent(self, o: Observer) -> Vector3:
        """Alt-az position including refraction."""
        return o.j2000_to_altaz(self.j2000_position(o), True)

    def sidereal_position_geometric(self, o: Observer) -> Vector3:
        """Hour angle and declination frame, without refraction."""
        return Matrix4.zrotation(-o.sidereal_time_rad) @ self.equinox_equatorial_position(o)

    def sidereal_position_apparent(self, o: Observer) -> Vector3:
        v = o.altaz_to_equinox_equatorial(self.altaz_position_apparent(o), False)
        return Matrix4.zrotation(-o.sidereal_time_rad) @ v

    def galactic_position(self, o: Observer) -> Vector3:
        return MAT_J2000_TO_GALACTIC.multiply_without_translation(self.j2000_position(o))

    def supergalactic_position(self, o: Observer) -> Vector3:
        return MAT_J2000_TO_SUPERGALACTIC.multiply_without_translation(self.j2000_position(o))

    # Derived quantities

    def parallactic_angle(self, o: Observer) -> Angle:
        """Angle between the directions to the zenith and to the north pole."""
        phi = o.location.latitude.radians
        ha, delta = _spherical(self.sidereal_position_apparent(o))
        ha = -ha
        if ha == 0.0 and delta - phi == 0.0:
            return Angle(0.0)
        return Angle(
            math.atan2(
                math.sin(ha), math.tan(phi) * math.cos(delta) - math.sin(delta) * math.cos(ha)
            )
        )

    def constellation(self, o: Observer) -> constellations.Constellation:
        """IAU constellation containing the object's position of date."""
        return constellations.find(o, self.equinox_equatorial_position(o))

    def is_above_horizon(self, o: Observer) -> bool:
        """True if the geometric altitude is not negative."""
        return self.altaz_position_geometric(o).latitude() >= 0.0

    def airmass(self, o: Observer) -> float:
        """Airmass along the apparent direction; 0 below about -2° altitude."""
        alt = self.altaz_position_apparent(o).latitude()
        if alt > math.radians(-2.0):
            return atmosphere.airmass(math.cos(math.pi / 2.0 - alt), True)
        return 0.0

    def visual_magnitude_with_extinction(self, o: Observer) -> float:
        mag = self.visual_magnitude(o)
        if self.is_above_horizon(o):
            return o.extinction.forward(self.altaz_position_geometric(o).normalized(), mag)
        return mag

    # Spherical coordinates

    def equatorial_j2000(self, o: Observer) -> Equatorial:
        a, b = _spherical(self.j2000_position(o))
        return Equatorial(Angle(normalize_radians(a)), Angle(b))

    def equatorial(self, o: Observer) -> Equatorial:
        """Right ascension and declination of date."""
        a, b = _spherical(self.equinox_equatorial_position(o))
        return Equatorial(Angle(normalize_radians(a)), Angle(b))

    def hour_angle(self, o: Observer, apparent: bool = True) -> HourAngle:
        if apparent:
            pos = self.sidereal_position_apparent(o)
        else:
            pos = self.sidereal_position_geometric(o)
        a, b = _spherical(pos)
        return HourAngle(Angle(normalize_radians(TWO_PI - a)).hours, Angle(b))

    def horizontal(self, o: Observer, south_azimuth: bool = False, apparent: bool = True) -> Horizontal:
        """Azimuth (north = 0, east = 90°, or from south) and altitude."""
        if apparent:
            pos = self.altaz_position_apparent(o)
        else:
            pos = self.altaz_position_geometric(o)
        a, b = _spherical(pos)
        az = (TWO_PI if south_azimuth else 3.0 * math.pi) - a
        if az > TWO_PI:
            az -= TWO_PI
        return Horizontal(Angle(az), Angle(b))

    def galactic(self, o: Observer) -> Galactic:
        a, b = _spherical(self.galactic_position(o))
        return Galactic(Angle(a), Angle(b))

    def supergalactic(self, o: Observer) -> Supergalactic:
        a, b = _spherical(self.supergalactic_position(o))
        return Supergalactic(Angle(a), Angle(b))

    def ecliptic_j2000(self, o: Observer) -> Ecliptic:
        """Ecliptic longitude and latitude referred to the J2000 ecliptic of the home body."""
        ra, dec = _spherical(self.j2000_position(o))
        lam, beta = equatorial_to_ecliptic(ra, dec, o.home_body.obliquity_at(J2000))
        return Ecliptic(Angle(lam), Angle(beta))

    def ecliptic(self, o: Observer) -> Ecliptic:
        """Ecliptic longitude and latitude of date."""
        ra, dec = _spherical(self.equinox_equatorial_position(o))
        lam, beta = equatorial_to_ecliptic(ra, dec, o.ecliptic_obliquity())
        return Ecliptic(Angle(lam), Angle(beta))
