"""Lunar and solar eclipse circumstances and the lunar phase.

Both eclipses use Besselian elements (Explanatory Supplement to the
Astronomical Ephemeris, 1961) computed from geocentric positions of date.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ephemeris_engine import geometry, sidereal
from ephemeris_engine.bodies.planet import Planet
from ephemeris_engine.constants import (
    AU_KM,
    EARTH_RADIUS_KM,
    MOON_NAME,
    SYNODIC_MONTH_DAYS,
    TWO_PI,
)
from ephemeris_engine.units import Angle
from ephemeris_engine.vec_math import Pair, Vector3

if TYPE_CHECKING:
    from ephemeris_engine.observer import Observer

logger = logging.getLogger(__name__)

# Moon radius in Earth radii, for the penumbral and umbral cones
MOON_EARTH_RADIUS_RATIO = 0.272488
MOON_EARTH_RADIUS_RATIO_UMBRA = 0.272281

# Sun radius in Earth radii (696000 / 6378.1366)
SUN_EARTH_RADIUS_RATIO = 109.12278046851489508707

# AU in Earth radii
_AU_EARTH_RADII = 23454.7925

# Earth eccentricity squared (f = 1/298.25642)
_E2 = 0.00669398

# Magnitudes at or below this mean no eclipse
_MAGNITUDE_EPSILON = 1e-6

# Right ascension window (degrees) around conjunction or opposition
_RA_WINDOW = 3.0


class EclipseType(Enum):
    NONE = 'none'
    PARTIAL = 'partial'
    ANNULAR = 'annular'
    ANNULAR_TOTAL = 'annular_total'
    PENUMBRAL = 'penumbral'
    UMBRAL = 'umbral'
    TOTAL = 'total'


class LunarPhase(Enum):
    NEW_MOON = 'new_moon'
    WAXING_CRESCENT = 'waxing_crescent'
    FIRST_QUARTER = 'first_quarter'
    WAXING_GIBBOUS = 'waxing_gibbous'
    FULL_MOON = 'full_moon'
    WANING_GIBBOUS = 'waning_gibbous'
    THIRD_QUARTER = 'third_quarter'
    WANING_CRESCENT = 'waning_crescent'


@dataclass(frozen=True)
class LunarEclipse:
    """Penumbral and umbral magnitudes; both 0 when there is no eclipse."""

    penumbral_magnitude: float = 0.0
    umbral_magnitude: float = 0.0

    @property
    def is_eclipsing(self) -> bool:
        return (
            self.penumbral_magnitude > _MAGNITUDE_EPSILON
            or self.umbral_magnitude > _MAGNITUDE_EPSILON
        )

    @property
    def eclipse_type(self) -> EclipseType:
        if self.umbral_magnitude >= 1.0:
            return EclipseType.TOTAL
        if self.umbral_magnitude > _MAGNITUDE_EPSILON:
            return EclipseType.UMBRAL
        if self.penumbral_magnitude > _MAGNITUDE_EPSILON:
            return EclipseType.PENUMBRAL
        return EclipseType.NONE


@dataclass(frozen=True)
class SolarEclipse:
    """Where the shadow axis meets the Earth.

    Attributes:
        position: (east longitude, geodetic latitude) of the center line,
            radians.
        magnitude: L1 / (L1 + L2); below 1 the eclipse is annular.
        distance_km: Distance from the observer's site to the center line.
        azimuth: Direction from the site to the center line.
    """

    position: Pair
    magnitude: float
    distance_km: float
    azimuth: Angle

    @property
    def eclipse_type(self) -> EclipseType:
        """Central eclipse type on the center line."""
        if self.magnitude >= 1.0:
            return EclipseType.TOTAL
        return EclipseType.ANNULAR


NO_LUNAR_ECLIPSE = LunarEclipse()


def _geocentric_sun_and_moon(o: Observer, moon: int | str) -> tuple[Observer, Vector3, Vector3]:
    """Observer without topocentric offset, and Sun and Moon positions of date."""
    op = o.with_config(use_topocentric_coordinates=False)
    moon_planet = Planet(op.system, moon)
    sun_planet = Planet(op.system, op.system.ancestors(moon_planet.index)[-1])
    return (
        op,
        sun_planet.equinox_equatorial_position(op),
        moon_planet.equinox_equatorial_position(op),
    )


def lunar_eclipse(o: Observer, moon: int | str = MOON_NAME) -> LunarEclipse:
    """Penumbral and umbral magnitudes of a lunar eclipse at the observer's instant.

    Shadow radii use Danjon's enlargement. Outside a ±3° right-ascension
    window around opposition the result is NO_LUNAR_ECLIPSE.

    Parameters:
        o: Observer; only its instant and configuration matter.
        moon: The eclipsed moon.

    Returns:
        LunarEclipse.
    """
    _, sun_pos, moon_pos = _geocentric_sun_and_moon(o, moon)
    ra_sun = sun_pos.longitude()
    dec_sun = sun_pos.latitude()
    ra_moon = moon_pos.longitude()
    dec_moon = moon_pos.latitude()

    ra_shadow = ra_sun + math.pi
    if ra_shadow < 0.0:
        ra_shadow += TWO_PI
    dec_shadow = -dec_sun
    if ra_moon < 0.0:
        ra_moon += TWO_PI

    ra_diff = math.degrees(geometry.normalize_radians(ra_moon - ra_shadow))
    if _RA_WINDOW <= ra_diff <= 360.0 - _RA_WINDOW:
        return NO_LUNAR_ECLIPSE

    sun_distance = sun_pos.length()
    moon_distance_er = moon_pos.length() * AU_KM / EARTH_RADIUS_KM

    sun_hp = 3600.0 * math.degrees(math.asin(EARTH_RADIUS_KM / (AU_KM * sun_distance)))
    sun_sd = 959.64 / sun_distance
    moon_hp = 3600.0 * math.degrees(math.asin(1.0 / moon_distance_er))
    moon_sd = 3600.0 * math.degrees(math.asin(MOON_EARTH_RADIUS_RATIO / moon_distance_er))

    p1 = (1.0 + 1.0 / 85.0 - 1.0 / 594.0) * moon_hp
    f1 = p1 + sun_sd + sun_hp
    f2 = p1 - sun_sd + sun_hp

    x = 3600.0 * math.degrees(math.asin(math.cos(dec_moon) * math.sin(ra_moon - ra_shadow)))
    y = 3600.0 * math.degrees(
        math.asin(
            math.cos(dec_shadow) * math.sin(dec_moon)
            - math.sin(dec_shadow) * math.cos(dec_moon) * math.cos(ra_moon - ra_shadow)
        )
    )
    l1 = f1 + moon_sd
    l2 = f2 + moon_sd
    m = math.hypot(x, y)
    penumbral = (l1 - m) / (2.0 * moon_sd)
    umbral = (l2 - m) / (2.0 * moon_sd)

    if penumbral > _MAGNITUDE_EPSILON or umbral > _MAGNITUDE_EPSILON:
        return LunarEclipse(penumbral, umbral)
    return NO_LUNAR_ECLIPSE


def solar_eclipse(
    o: Observer, moon: int | str = MOON_NAME, south_azimuth: bool = False
) -> SolarEclipse | None:
    """Center line of a solar eclipse at the observer's instant.

    Parameters:
        o: Observer; its site is the origin of distance and azimuth.
        moon: The occulting moon.
        south_azimuth: Measure the azimuth from south.

    Returns:
        SolarEclipse, or None outside a ±3° right-ascension window around
        conjunction or when the shadow axis misses the Earth.
    """
    op, sun_pos, moon_pos = _geocentric_sun_and_moon(o, moon)
    ra_sun = sun_pos.longitude()
    dec_sun = sun_pos.latitude()
    ra_moon = moon_pos.longitude()
    dec_moon = moon_pos.latitude()

    ra_diff = math.degrees(geometry.normalize_radians(ra_moon - ra_sun))
    if _RA_WINDOW <= ra_diff <= 360.0 - _RA_WINDOW:
        return None

    moon_distance_er = moon_pos.length() * AU_KM / EARTH_RADIUS_KM
    gast = sidereal.compute_apparent(op.jd, op.jde).degrees

    if ra_sun < 0.0:
        ra_sun += TWO_PI
    if ra_moon < 0.0:
        ra_moon += TWO_PI

    rss = sun_pos.length() * _AU_EARTH_RADII
    b = moon_distance_er / rss
    a = ra_sun - b * math.cos(dec_moon) * (ra_moon - ra_sun) / ((1.0 - b) * math.cos(dec_sun))
    d = dec_sun - b * (dec_moon - dec_sun) / (1.0 - b)

    x = math.cos(dec_moon) * math.sin(ra_moon - a) * moon_distance_er
    y = (
        math.cos(d) * math.sin(dec_moon)
        - math.cos(dec_moon) * math.sin(d) * math.cos(ra_moon - a)
    ) * moon_distance_er
    z = (
        math.sin(dec_moon) * math.sin(d)
        + math.cos(dec_moon) * math.cos(d) * math.cos(ra_moon - a)
    ) * moon_distance_er

    f1 = math.asin((SUN_EARTH_RADIUS_RATIO + MOON_EARTH_RADIUS_RATIO) / (rss * (1.0 - b)))
    f2 = math.asin((SUN_EARTH_RADIUS_RATIO - MOON_EARTH_RADIUS_RATIO_UMBRA) / (rss * (1.0 - b)))
    tf1 = math.tan(f1)
    tf2 = math.tan(f2)
    l1 = z * tf1 + MOON_EARTH_RADIUS_RATIO / math.cos(f1)
    l2 = z * tf2 - MOON_EARTH_RADIUS_RATIO_UMBRA / math.cos(f2)
    mu = gast - math.degrees(a)

    # Reduce to the oblate Earth
    cd = math.cos(d)
    sd = math.sin(d)
    rho1 = math.sqrt(1.0 - _E2 * cd * cd)
    y1 = y / rho1
    sd1 = sd / rho1
    cd1 = math.sqrt(1.0 - _E2) * cd / rho1
    rho2 = math.sqrt(1.0 - _E2 * sd * sd)
    sd1d2 = _E2 * sd * cd / (rho1 * rho2)
    cd1d2 = math.sqrt(1.0 - sd1d2 * sd1d2)

    w = 1.0 - x * x - y1 * y1
    if w <= 0.0:
        logger.debug('Shadow axis misses the Earth at JD %s', op.jd)
        return None

    zeta1 = math.sqrt(w)
    zeta = rho2 * (zeta1 * cd1d2 - y1 * sd1d2)
    l2 -= zeta * tf2
    l1 -= zeta * tf1
    b = -y * sd + zeta * cd
    theta = math.degrees(math.atan2(x, b))
    if theta < 0.0:
        theta += 360.0
    if mu > 360.0:
        mu -= 360.0
    lon = mu - theta
    if lon < -180.0:
        lon += 360.0
    if lon > 180.0:
        lon -= 360.0
    lon = -lon

    sfn1 = y1 * cd1 + zeta1 * sd1
    cfn1 = math.sqrt(1.0 - sfn1 * sfn1)
    lat = math.degrees(math.atan(1.0033641 * sfn1 / cfn1))
    magnitude = l1 / (l1 + l2)

    lon_rad = math.radians(lon)
    lat_rad = math.radians(lat)
    home = op.home_body
    site_lon = op.location.longitude.radians
    site_lat = op.location.latitude.radians
    distance = geometry.distance_km(
        home.radius_km, home.oblateness, site_lon, site_lat, lon_rad, lat_rad
    )
    azimuth = geometry.azimuth(site_lon, site_lat, lon_rad, lat_rad, south_azimuth)
    return SolarEclipse(Pair(lon_rad, lat_rad), magnitude, distance, Angle(azimuth))


def _elongation_of_date(o: Observer, moon: int | str) -> float:
    """Ecliptic longitude of the moon minus that of the Sun, in [0, 2π)."""
    op, sun_pos, moon_pos = _geocentric_sun_and_moon(o, moon)
    moon_body = op.system.get(moon)
    obliquity = op.system[moon_body.parent].obliquity_at(o.jde)
    lam_moon = geometry.equatorial_to_ecliptic(moon_pos.longitude(), moon_pos.latitude(), obliquity).x
    lam_sun = geometry.equatorial_to_ecliptic(sun_pos.longitude(), sun_pos.latitude(), obliquity).x
    return (lam_moon - lam_sun) % TWO_PI


def lunar_phase(o: Observer, moon: int | str = MOON_NAME) -> LunarPhase:
    """Named phase from the Sun-Moon elongation in ecliptic longitude."""
    delta = math.degrees(_elongation_of_date(o, moon))
    if delta < 0.5 or delta > 359.5:
        return LunarPhase.NEW_MOON
    if delta < 89.5:
        return LunarPhase.WAXING_CRESCENT
    if delta < 90.5:
        return LunarPhase.FIRST_QUARTER
    if delta < 179.5:
        return LunarPhase.WAXING_GIBBOUS
    if delta < 180.5:
        return LunarPhase.FULL_MOON
    if delta < 269.5:
        return LunarPhase.WANING_GIBBOUS
    if delta < 270.5:
        return LunarPhase.THIRD_QUARTER
    return LunarPhase.WANING_CRESCENT


def moon_age(o: Observer, moon: int | str = MOON_NAME) -> float:
    """Days since new moon, from the elongation scaled by the synodic month."""
    return _elongation_of_date(o, moon) * SYNODIC_MONTH_DAYS / TWO_PI
