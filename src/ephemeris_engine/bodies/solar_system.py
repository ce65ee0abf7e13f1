"""Built-in Sun, planets, Moon and Pluto."""

from __future__ import annotations

from functools import partial

from ephemeris_engine import nutation, series, sidereal
from ephemeris_engine.bodies import magnitude
from ephemeris_engine.bodies.base import Body, BodyModel, BodyType, Ring, SolarSystem
from ephemeris_engine.constants import (
    EARTH_ID,
    JUPITER_ID,
    MARS_ID,
    MERCURY_ID,
    MOON_ID,
    MOON_NAME,
    NEPTUNE_ID,
    PLUTO_ID,
    SATURN_ID,
    SUN_ID,
    URANUS_ID,
    VENUS_ID,
)
from ephemeris_engine.orbits import KeplerOrbit
from ephemeris_engine.precession import compute_vondrak, compute_vondrak_epsilon
from ephemeris_engine.vec_math import Matrix4

SUN_INDEX = 0
EARTH_INDEX = 3
MOON_INDEX = 4

EARTH_SIDEREAL_PERIOD = 365.256363004


def earth_local_rotation(jd: float, jde: float, use_nutation: bool) -> Matrix4:
    """Earth equator of date to VSOP87: Vondrák precession, optionally IAU 2000B nutation."""
    prec = compute_vondrak(jde)
    rot = (
        Matrix4.zrotation(-prec.psi)
        @ Matrix4.xrotation(-prec.omega)
        @ Matrix4.zrotation(prec.chi)
    )
    if use_nutation:
        nut = nutation.compute(jde)
        rot = (
            rot
            @ Matrix4.xrotation(prec.epsilon)
            @ Matrix4.zrotation(-nut.delta_psi)
            @ Matrix4.xrotation(-prec.epsilon - nut.delta_epsilon)
        )
    return rot


def earth_sidereal_time(jd: float, jde: float, use_nutation: bool) -> float:
    """Greenwich sidereal time in degrees; apparent when nutation is on."""
    if use_nutation:
        return sidereal.compute_apparent(jd, jde).degrees
    return sidereal.compute_mean(jd, jde).degrees


def _sun() -> Body:
    return Body(
        id=SUN_ID,
        name='Sun',
        type=BodyType.STAR,
        radius_km=695700.0,
        albedo=-1.0,
        sidereal_day=360.0 / 14.1844,
        absolute_magnitude=4.83,
        mean_opposition_magnitude=100.0,
        mean_solar_day=1.0,
        mass=1.0,
        rot_obliquity=0.12653637076958889433,
        rot_ascending_node=1.3223623836794924,
    )


def _planets() -> list[Body]:
    return [
        Body(
            id=MERCURY_ID,
            name='Mercury',
            type=BodyType.PLANET,
            radius_km=2440.53,
            oblateness=0.0009301258,
            albedo=0.06,
            parent=SUN_INDEX,
            sidereal_day=58.64614590235794649087,
            sidereal_period=87.97,
            absolute_magnitude=-0.60,
            mass=1.0 / 6023682.155592,
            rot_obliquity=0.1228178112752234,
            rot_ascending_node=0.8418651386288667,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_MERCURY),
                magnitude=magnitude.mercury,
            ),
        ),
        Body(
            id=VENUS_ID,
            name='Venus',
            type=BodyType.PLANET,
            radius_km=6051.8,
            albedo=0.77,
            parent=SUN_INDEX,
            sidereal_day=-243.01848398589196694301,
            sidereal_period=224.70,
            absolute_magnitude=-5.18,
            mass=1.0 / 408523.719,
            rot_obliquity=0.021624851729521666,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_VENUS),
                magnitude=magnitude.venus,
            ),
        ),
        Body(
            id=EARTH_ID,
            name='Earth',
            type=BodyType.PLANET,
            radius_km=6378.1366,
            oblateness=0.003352810664747481,
            albedo=0.3,
            parent=SUN_INDEX,
            sidereal_day=0.99726963226279286992,
            sidereal_period=EARTH_SIDEREAL_PERIOD,
            absolute_magnitude=-3.86,
            mass=1.0 / 332946.050895,
            model=BodyModel(
                position=series.earth_position,
                magnitude=magnitude.earth,
                local_rotation=earth_local_rotation,
                sidereal_time=earth_sidereal_time,
                rot_obliquity=compute_vondrak_epsilon,
            ),
        ),
        Body(
            id=MOON_ID,
            name=MOON_NAME,
            type=BodyType.MOON,
            radius_km=1737.4,
            albedo=0.12,
            parent=EARTH_INDEX,
            sidereal_day=27.32166171424233789516,
            sidereal_period=27.32166171424233789516,
            absolute_magnitude=0.21,
            mean_opposition_magnitude=-12.74,
            mass=1.0 / 27068700.387534,
            rot_obliquity=3.7723828609181886e-4,
            model=BodyModel(position=series.moon_position),
        ),
        Body(
            id=MARS_ID,
            name='Mars',
            type=BodyType.PLANET,
            radius_km=3396.19,
            oblateness=0.005886,
            albedo=0.150,
            parent=SUN_INDEX,
            sidereal_day=1.02595675596028993319,
            sidereal_period=686.971,
            absolute_magnitude=-1.52,
            mean_opposition_magnitude=-2.01,
            mass=1.0 / 3098703.59,
            rot_obliquity=0.44338065731385523,
            rot_ascending_node=1.4808002454424123,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_MARS),
                magnitude=magnitude.mars,
            ),
        ),
        Body(
            id=JUPITER_ID,
            name='Jupiter',
            type=BodyType.PLANET,
            radius_km=71492.0,
            oblateness=0.064874,
            albedo=0.51,
            parent=SUN_INDEX,
            sidereal_day=360.0 / 870.270,
            sidereal_period=4331.87,
            absolute_magnitude=-9.40,
            mean_opposition_magnitude=-2.7,
            mass=1.0 / 1047.348625,
            rot_obliquity=0.03868532751568998,
            rot_ascending_node=-0.3871470026094814,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_JUPITER),
                magnitude=magnitude.jupiter,
            ),
        ),
        Body(
            id=SATURN_ID,
            name='Saturn',
            type=BodyType.PLANET,
            radius_km=60268.0,
            oblateness=0.09796243446,
            albedo=0.50,
            parent=SUN_INDEX,
            ring=Ring(74510.0, 140390.0),
            sidereal_day=0.44400925923884945092,
            sidereal_period=10760.0,
            absolute_magnitude=-8.88,
            mean_opposition_magnitude=0.67,
            mass=1.0 / 3497.901768,
            rot_obliquity=0.4896026430986047,
            rot_ascending_node=2.9588132951645223,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_SATURN),
                magnitude=magnitude.saturn,
            ),
        ),
        Body(
            id=URANUS_ID,
            name='Uranus',
            type=BodyType.PLANET,
            radius_km=25559.0,
            oblateness=0.0229273446,
            albedo=0.66,
            parent=SUN_INDEX,
            ring=Ring(26840.0, 97700.0),
            sidereal_day=-0.71833333334397530864,
            sidereal_period=30685.0,
            absolute_magnitude=-7.19,
            mean_opposition_magnitude=5.52,
            mass=1.0 / 22902.98,
            rot_obliquity=1.4360256624251349,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_URANUS),
                magnitude=magnitude.uranus,
            ),
        ),
        Body(
            id=NEPTUNE_ID,
            name='Neptune',
            type=BodyType.PLANET,
            radius_km=24764.0,
            oblateness=0.01708124697,
            albedo=0.62,
            parent=SUN_INDEX,
            ring=Ring(40900.0, 62932.0),
            sidereal_day=0.671249999952453125,
            sidereal_period=60189.0,
            absolute_magnitude=-6.87,
            mean_opposition_magnitude=7.84,
            mass=1.0 / 19412.26,
            rot_obliquity=0.489152978736078,
            rot_ascending_node=0.8593144058841349,
            model=BodyModel(
                position=partial(series.planet_position, planet_number=series.PLAN94_NEPTUNE),
                magnitude=magnitude.neptune,
            ),
        ),
        Body(
            id=PLUTO_ID,
            name='Pluto',
            type=BodyType.MINOR_PLANET,
            radius_km=1188.3,
            albedo=0.55,
            parent=SUN_INDEX,
            orbit=KeplerOrbit(
                q=29.5739917738007,
                e=0.250248713478499,
                i=0.29825933192269555762,
                omega=1.92644133465723380742,
                w=1.96519085060668286585,
                t0=2447654.529313563835,
                n=0.00006943722388998144,
            ),
            sidereal_day=6.38722299911257520456,
            sidereal_period=90797.0,
            absolute_magnitude=-0.4,
            mean_opposition_magnitude=15.12,
            mass=1.0 / 135836683.768617,
            rot_obliquity=1.9690025972455527,
            rot_ascending_node=3.96802141178535,
            model=BodyModel(position=series.pluto_position, magnitude=magnitude.pluto),
        ),
    ]


def build_solar_system() -> SolarSystem:
    """Sun, the eight planets, the Moon and Pluto.

    Indices: Sun 0, Mercury 1, Venus 2, Earth 3, Moon 4, Mars 5, Jupiter 6,
    Saturn 7, Uranus 8, Neptune 9, Pluto 10.
    """
    return SolarSystem([_sun(), *_planets()])
