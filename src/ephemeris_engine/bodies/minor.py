"""Minor planets, comets and Kepler-orbit satellites, plus MPC element parsing."""

from __future__ import annotations

import logging
import math
import re

from ephemeris_engine.bodies.base import Body, BodyModel, BodyType, SolarSystem
from ephemeris_engine.bodies.magnitude import comet_magnitude, hg_magnitude
from ephemeris_engine.bodies.solar_system import SUN_INDEX
from ephemeris_engine.constants import J2000
from ephemeris_engine.orbits import KeplerOrbit, compute_mean_motion, compute_sidereal_period
from ephemeris_engine.time_utils import jd_from_calendar

logger = logging.getLogger(__name__)

DEFAULT_ALBEDO = 0.15
DEFAULT_RADIUS_KM = 1.0

# Eccentricities at or above this have no meaningful orbital period
MAX_PERIODIC_ECCENTRICITY = 0.9

_PACKED_EPOCH = re.compile(r'^([IJK])(\d\d)([1-9A-C])([1-9A-V])$')
_PACKED_CENTURY = {'I': 1800, 'J': 1900, 'K': 2000}

MPC_MIN_LINE_LENGTH = 152
MPC_MAX_LINE_LENGTH = 202


def minor_planet(
    name: str,
    q: float,
    e: float,
    i: float,
    omega: float,
    w: float,
    t0: float,
    n: float | None = None,
    albedo: float = DEFAULT_ALBEDO,
    absolute_magnitude: float = -99.0,
    slope: float = -10.0,
    radius_km: float = DEFAULT_RADIUS_KM,
    body_id: int | None = None,
) -> Body:
    """Build a heliocentric minor planet.

    Parameters:
        name: Designation or name.
        q: Perihelion distance, AU.
        e: Eccentricity.
        i: Inclination, radians.
        omega: Longitude of the ascending node, radians.
        w: Argument of perihelion, radians.
        t0: Time of perihelion passage, JDE.
        n: Mean motion in radians/day; derived from q and e when None.
        albedo: Geometric albedo.
        absolute_magnitude: H.
        slope: G; below -9.99 the albedo model is used instead of H-G.
        radius_km: Radius.
        body_id: NAIF-style id; assigned by the arena when None.

    Returns:
        Body with a KeplerOrbit around the Sun.

    Raises:
        ValueError: If the orbital elements are invalid.
    """
    if n is None:
        n = compute_mean_motion(e, q)
    orbit = KeplerOrbit(q=q, e=e, i=i, omega=omega, w=w, t0=t0, n=n, parent_rot_j2000_longitude=0.0)
    a = orbit.semi_major_axis
    period = orbit.sidereal_period if a > 0.0 and e < MAX_PERIODIC_ECCENTRICITY else 0.0
    return Body(
        id=body_id,
        name=name,
        type=BodyType.MINOR_PLANET,
        radius_km=radius_km,
        albedo=albedo,
        parent=SUN_INDEX,
        orbit=orbit,
        sidereal_day=period,
        sidereal_period=period,
        absolute_magnitude=absolute_magnitude,
        slope=slope,
        model=BodyModel(magnitude=hg_magnitude),
    )


def comet(
    name: str,
    q: float,
    e: float,
    i: float,
    omega: float,
    w: float,
    t0: float,
    n: float | None = None,
    albedo: float = DEFAULT_ALBEDO,
    absolute_magnitude: float = -99.0,
    slope: float = -10.0,
    radius_km: float = DEFAULT_RADIUS_KM,
    body_id: int | None = None,
) -> Body:
    """Build a comet; ``slope`` is the activity parameter n of the total magnitude law.

    Same parameters as minor_planet(). Open orbits get a sidereal period of 0.
    """
    if n is None:
        n = compute_mean_motion(e, q)
    orbit = KeplerOrbit(q=q, e=e, i=i, omega=omega, w=w, t0=t0, n=n, parent_rot_j2000_longitude=0.0)
    a = orbit.semi_major_axis
    period = compute_sidereal_period(a, 1.0) if a > 0.0 else 0.0
    return Body(
        id=body_id,
        name=name,
        type=BodyType.COMET,
        radius_km=radius_km,
        albedo=albedo,
        parent=SUN_INDEX,
        orbit=orbit,
        sidereal_day=period,
        sidereal_period=period,
        absolute_magnitude=absolute_magnitude,
        slope=slope,
        model=BodyModel(magnitude=comet_magnitude),
    )


def satellite(
    system: SolarSystem,
    parent: int | str,
    name: str,
    radius_km: float,
    q: float,
    e: float,
    i: float,
    omega: float,
    w: float,
    t0: float,
    albedo: float,
    n: float | None = None,
    absolute_magnitude: float = -99.0,
    rot_obliquity: float = 0.0,
    rot_ascending_node: float = 0.0,
    body_id: int | None = None,
) -> Body:
    """Build a moon on a Kepler orbit referred to its parent's equator.

    Parameters:
        system: Arena holding the parent.
        parent: Parent name or NAIF id.
        name: Satellite name.
        radius_km: Radius.
        q: Pericenter distance, AU.
        e: Eccentricity.
        i: Inclination to the parent's equator, radians.
        omega: Ascending node on the parent's equator, radians.
        w: Argument of pericenter, radians.
        t0: Time of pericenter passage, JDE.
        albedo: Geometric albedo.
        n: Mean motion in radians/day; derived when None.
        absolute_magnitude: V(1,0), or -99 when unknown.
        rot_obliquity: Constant obliquity of the satellite's axis, radians.
        rot_ascending_node: Ascending node of the satellite's axis, radians.
        body_id: NAIF-style id; assigned by the arena when None.

    Returns:
        Body of type MOON; append it with SolarSystem.with_body().
    """
    parent_index = system.index_of(parent)
    host = system[parent_index]
    if n is None:
        n = compute_mean_motion(e, q)
    orbit = KeplerOrbit(
        q=q,
        e=e,
        i=i,
        omega=omega,
        w=w,
        t0=t0,
        n=n,
        parent_rot_obliquity=host.obliquity_at(J2000),
        parent_rot_ascending_node=host.rot_ascending_node,
        central_mass=host.mass,
    )
    period = orbit.sidereal_period
    return Body(
        id=body_id,
        name=name,
        type=BodyType.MOON,
        radius_km=radius_km,
        albedo=albedo,
        parent=parent_index,
        orbit=orbit,
        sidereal_day=period,
        sidereal_period=period,
        absolute_magnitude=absolute_magnitude,
        rot_obliquity=rot_obliquity,
        rot_ascending_node=rot_ascending_node,
    )


def _unpack_day_or_month(char: str) -> int:
    if char.isdigit():
        return int(char)
    return 10 + ord(char) - ord('A')


def unpack_epoch(packed: str) -> float:
    """Julian Day of a packed MPC epoch such as ``K2135``.

    Raises:
        ValueError: If the string is not a packed epoch.
    """
    match = _PACKED_EPOCH.match(packed)
    if match is None:
        raise ValueError(f'Invalid packed epoch: {packed!r}')
    century, year, month, day = match.groups()
    return jd_from_calendar(
        _PACKED_CENTURY[century] + int(year),
        _unpack_day_or_month(month),
        _unpack_day_or_month(day),
    )


def parse_mpc_one_line(line: str) -> Body:
    """Minor planet from one line of the MPCORB export format.

    The perihelion time is derived from the mean anomaly at the epoch, and
    the radius from H assuming an albedo of 0.15.

    Parameters:
        line: Fixed-column MPCORB record.

    Returns:
        Minor planet Body (id assigned when added to an arena).

    Raises:
        ValueError: If the line length, epoch or a numeric field is invalid.
    """
    if not MPC_MIN_LINE_LENGTH <= len(line) <= MPC_MAX_LINE_LENGTH:
        raise ValueError(f'Invalid MPC line length {len(line)}: {line!r}')

    absolute_magnitude = float(line[8:13])
    slope = float(line[14:19])
    epoch = unpack_epoch(line[20:25].strip())
    mean_anomaly = float(line[26:35])
    arg_perihelion = float(line[37:46])
    node = float(line[48:57])
    inclination = float(line[59:68])
    eccentricity = float(line[70:79])
    daily_motion = float(line[80:91])
    semi_major_axis = float(line[92:103])
    name = line[166:194].strip()
    if not name:
        name = line[0:7].strip()

    q = (1.0 - eccentricity) * semi_major_axis
    radius_km = math.ceil(0.5 * (1329.0 / math.sqrt(DEFAULT_ALBEDO)) * 10.0 ** (-0.2 * absolute_magnitude))
    t0 = epoch - mean_anomaly / daily_motion if daily_motion else epoch
    logger.debug('Parsed MPC record %r: a=%s e=%s H=%s', name, semi_major_axis, eccentricity,
                 absolute_magnitude)

    return minor_planet(
        name,
        q,
        eccentricity,
        math.radians(inclination),
        math.radians(node),
        math.radians(arg_perihelion),
        t0,
        n=math.radians(daily_motion),
        albedo=DEFAULT_ALBEDO,
        absolute_magnitude=absolute_magnitude,
        slope=slope,
        radius_km=float(radius_km),
    )


def coma_diameter_and_tail_length(body: Body, sun_distance_au: float) -> tuple[float, float]:
    """Estimated coma diameter and tail length of a comet, in km.

    Parameters:
        body: Comet with H and slope set.
        sun_distance_au: Heliocentric distance r.

    Returns:
        (coma diameter, tail length) in km.
    """
    r = sun_distance_au
    mhelio = body.absolute_magnitude + body.slope * math.log10(r)
    common = 1.0 - 10.0 ** (-2.0 * r)
    diameter = 10.0 ** ((-0.0033 * mhelio - 0.07) * mhelio + 3.25) * common * (1.0 - 10.0 ** -r) * 1000.0
    length = 10.0 ** ((-0.0075 * mhelio - 0.19) * mhelio + 2.1) * (1.0 - 10.0 ** (-4.0 * r)) * common * 1e6
    return diameter, length
