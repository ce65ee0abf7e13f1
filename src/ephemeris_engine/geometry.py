"""Spherical geometry helpers shared by bodies, observers and eclipses."""

from __future__ import annotations

import math

from ephemeris_engine.constants import TWO_PI
from ephemeris_engine.vec_math import Pair, Vector3


def spherical_to_rectangular(longitude: float, latitude: float) -> Vector3:
    """Unit vector for a (longitude, latitude) direction in radians."""
    cos_lat = math.cos(latitude)
    return Vector3(
        math.cos(longitude) * cos_lat, math.sin(longitude) * cos_lat, math.sin(latitude)
    )


def rectangular_to_spherical(v: Vector3) -> Pair:
    """(longitude, latitude) of ``v`` in radians; longitude in (-π, π]."""
    return Pair(v.longitude(), v.latitude())


def normalize_radians(angle: float) -> float:
    """Wrap to [0, 2π)."""
    r = math.fmod(angle, TWO_PI)
    if r < 0.0:
        r += TWO_PI
    if r >= TWO_PI:
        r = 0.0
    return r


def equatorial_to_ecliptic(ra: float, dec: float, obliquity: float) -> Pair:
    """Convert equatorial (α, δ) to ecliptic (λ, β), all radians.

    Meeus, Astronomical Algorithms eq. 13.1 and 13.2. λ is in [0, 2π).
    """
    sin_eps = math.sin(obliquity)
    cos_eps = math.cos(obliquity)
    lam = math.atan2(
        math.sin(ra) * cos_eps + math.tan(dec) * sin_eps,
        math.cos(ra),
    )
    beta = math.asin(math.sin(dec) * cos_eps - math.cos(dec) * sin_eps * math.sin(ra))
    if lam < 0.0:
        lam += TWO_PI
    return Pair(lam, beta)


def distance_km(
    radius_km: float,
    flattening: float,
    lon1: float,
    lat1: float,
    lon2: float,
    lat2: float,
) -> float:
    """Geodesic distance between two sites on an oblate body (Andoyer's method).

    Parameters:
        radius_km: Equatorial radius of the body.
        flattening: Body oblateness f.
        lon1: Longitude of the first site, radians.
        lat1: Latitude of the first site, radians.
        lon2: Longitude of the second site, radians.
        lat2: Latitude of the second site, radians.

    Returns:
        Distance in km; 0 for coincident sites.
    """
    f = (lat1 + lat2) * 0.5
    g = (lat1 - lat2) * 0.5
    lam = (lon1 - lon2) * 0.5

    sin_g = math.sin(g)
    cos_g = math.cos(g)
    sin_f = math.sin(f)
    cos_f = math.cos(f)
    sin_l = math.sin(lam)
    cos_l = math.cos(lam)

    s = sin_g * sin_g * cos_l * cos_l + cos_f * cos_f * sin_l * sin_l
    c = cos_g * cos_g * cos_l * cos_l + sin_f * sin_f * sin_l * sin_l
    if s == 0.0:
        return 0.0
    if c == 0.0:
        # Antipodal points
        return math.pi * radius_km
    om = math.atan(math.sqrt(s / c))
    r = 3.0 * math.sqrt(s * c) / om
    d = 2.0 * om * radius_km
    h1 = (r - 1.0) / (2.0 * c)
    h2 = (r + 1.0) / (2.0 * s)

    return d * (
        1.0
        + flattening * (h1 * sin_f * sin_f * cos_g * cos_g - h2 * cos_f * cos_f * sin_g * sin_g)
    )


def azimuth(
    lon1: float,
    lat1: float,
    lon2: float,
    lat2: float,
    south_azimuth: bool = False,
) -> float:
    """Initial bearing from site 1 to site 2 in radians, in [0, 2π).

    Parameters:
        lon1: Longitude of the origin, radians.
        lat1: Latitude of the origin, radians.
        lon2: Longitude of the target, radians.
        lat2: Latitude of the target, radians.
        south_azimuth: Measure from south instead of north.

    Returns:
        Azimuth in radians.
    """
    az = math.atan2(
        math.sin(lon2 - lon1),
        math.cos(lat1) * math.tan(lat2) - math.sin(lat1) * math.cos(lon2 - lon1),
    )
    if south_azimuth:
        az += math.pi
    return normalize_radians(az)
