"""Observer: frame-transform matrices for one home body, site and instant.

Matrix attributes are named ``mat_<from>_to_<to>``. Frames:

- altaz: local horizontal (x south, y east, z zenith).
- equinox_equ: equatorial of date on the home body.
- j2000: J2000 equatorial.
- heliocentric_ecliptic: VSOP87 (J2000 ecliptic), origin at the Sun.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field

import cspyce

from ephemeris_engine import nutation
from ephemeris_engine.atmosphere import Extinction, Refraction
from ephemeris_engine.bodies.base import Body, SolarSystem
from ephemeris_engine.config import ObserverConfig
from ephemeris_engine.constants import (
    AU_KM,
    MAT_J2000_TO_VSOP87,
    MAT_VSOP87_TO_J2000,
    MOON_NAME,
    SECONDS_PER_DAY,
    SPEED_OF_LIGHT_KM_S,
)
from ephemeris_engine.time_utils import JulianDay
from ephemeris_engine.units import Angle, Distance
from ephemeris_engine.vec_math import Matrix4, Vector3

logger = logging.getLogger(__name__)

# Entries kept per body before the cache is cleared wholesale
CACHE_LIMIT = 100

LIGHT_TIME_DAYS_PER_AU = AU_KM / (SPEED_OF_LIGHT_KM_S * SECONDS_PER_DAY)


@dataclass(frozen=True)
class Location:
    """Observing site on the home body."""

    latitude: Angle
    longitude: Angle
    altitude: Distance = field(default_factory=lambda: Distance(0.0))
    name: str = ''

    @classmethod
    def from_degrees(
        cls, latitude: float, longitude: float, altitude_m: float = 0.0, name: str = ''
    ) -> Location:
        """Build from geodetic latitude and east longitude in degrees, altitude in meters."""
        return cls(Angle.from_degrees(latitude), Angle.from_degrees(longitude), Distance(altitude_m), name)


class ObserverState:
    """Side table of per-instant body state, keyed by body id.

    Holds the bounded position cache and memoized local-to-parent rotations.
    Bodies stay immutable; one ObserverState may be shared by many Observers
    (and threads) built on the same SolarSystem.
    """

    def __init__(self, system: SolarSystem, cache_limit: int = CACHE_LIMIT) -> None:
        self.system = system
        self._cache_limit = cache_limit
        self._positions: dict[int, dict[float, tuple[Vector3, Vector3]]] = {}
        self._rotations: dict[tuple[int, float, float, bool], tuple[Matrix4, float]] = {}
        self._lock = threading.Lock()

    def _store(self, table: dict, key: object, value: object) -> None:
        if len(table) >= self._cache_limit:
            logger.debug('Clearing %d cached entries', len(table))
            table.clear()
        table[key] = value

    def position(self, index: int, jde: float) -> tuple[Vector3, Vector3]:
        """Position and velocity relative to the parent at exactly ``jde``."""
        body = self.system[index]
        with self._lock:
            entries = self._positions.setdefault(body.id, {})
            cached = entries.get(jde)
        if cached is not None:
            return cached
        value = body.position(jde)
        with self._lock:
            self._store(self._positions.setdefault(body.id, {}), jde, value)
        return value

    def cached_count(self, index: int) -> int:
        """Number of cached positions for a body."""
        with self._lock:
            return len(self._positions.get(self.system[index].id, {}))

    def clear(self) -> None:
        with self._lock:
            self._positions.clear()
            self._rotations.clear()

    def heliocentric_position(self, index: int, jde: float) -> Vector3:
        """Heliocentric VSOP87 position (no light-time correction), AU."""
        pos = self.position(index, jde)[0]
        for ancestor in self.system.ancestors(index):
            pos = pos + self.position(ancestor, jde)[0]
        return pos

    def _rotation_state(
        self, index: int, jd: float, jde: float, use_nutation: bool
    ) -> tuple[Matrix4, float]:
        body = self.system[index]
        key = (body.id, jd, jde, use_nutation)
        with self._lock:
            cached = self._rotations.get(key)
        if cached is not None:
            return cached
        value = (
            body.local_rotation(jd, jde, use_nutation),
            body.sidereal_time(jd, jde, use_nutation),
        )
        with self._lock:
            self._store(self._rotations, key, value)
        return value

    def local_rotation(self, index: int, jd: float, jde: float, use_nutation: bool) -> Matrix4:
        """Rotation from the body's equatorial frame to its parent's frame."""
        return self._rotation_state(index, jd, jde, use_nutation)[0]

    def axis_rotation(self, index: int, jd: float, jde: float, use_nutation: bool) -> float:
        """Prime meridian angle of the body in degrees."""
        return self._rotation_state(index, jd, jde, use_nutation)[1]

    def equatorial_to_vsop87(self, index: int, jd: float, jde: float, use_nutation: bool) -> Matrix4:
        """Body equatorial frame to VSOP87, composed up the chain skipping stars."""
        m = self.local_rotation(index, jd, jde, use_nutation)
        for ancestor in self.system.ancestors(index):
            if not self.system[ancestor].is_star:
                m = self.local_rotation(ancestor, jd, jde, use_nutation) @ m
        return m

    def shadow_matrix(self, index: int, jd: float, jde: float, use_nutation: bool) -> Matrix4:
        """Body-fixed frame to heliocentric VSOP87, used for shadow geometry."""
        res = Matrix4.translation(self.position(index, jde)[0]) @ self.local_rotation(
            index, jd, jde, use_nutation
        )
        parent = self.system[index].parent
        while parent is not None and self.system[parent].parent is not None:
            res = (
                Matrix4.translation(self.position(parent, jde)[0])
                @ res
                @ self.local_rotation(parent, jd, jde, use_nutation)
            )
            parent = self.system[parent].parent
        axis = self.axis_rotation(index, jd, jde, use_nutation)
        return res @ Matrix4.zrotation(math.radians(axis + 90.0))


class Observer:
    """Immutable snapshot of a site on a home body at one instant.

    All frame matrices are derived in the constructor, in order: home body
    rotations, alt-az to equatorial of date, equatorial of date to J2000,
    alt-az to J2000, the (optionally topocentric) alt-az to heliocentric
    transforms and the light-time corrected Sun position.
    """

    def __init__(
        self,
        system: SolarSystem,
        location: Location,
        jd: JulianDay | float,
        home: int | str = 'Earth',
        utc_offset: float = 0.0,
        config: ObserverConfig | None = None,
        state: ObserverState | None = None,
    ) -> None:
        self.system = system
        self.location = location
        self.jd = float(jd)
        self.home = system.index_of(home)
        self.utc_offset = utc_offset
        self.config = config if config is not None else ObserverConfig()
        if state is None:
            state = ObserverState(system)
        elif state.system is not system:
            raise ValueError('ObserverState belongs to a different SolarSystem')
        self.state = state

        self.refraction = Refraction(self.config.pressure, self.config.temperature)
        self.extinction = Extinction(self.config.extinction_coefficient)

        self.delta_t = self.compute_delta_t(self.jd)
        self.jde = self.jd + self.delta_t / SECONDS_PER_DAY

        use_nutation = self.config.use_nutation
        self.rot_equatorial_to_vsop87 = state.equatorial_to_vsop87(
            self.home, self.jd, self.jde, use_nutation
        )

        self.mat_altaz_to_equinox_equ = Matrix4.zrotation(self.sidereal_time_rad) @ Matrix4.yrotation(
            math.pi / 2.0 - location.latitude.radians
        )
        self.mat_equinox_equ_to_altaz = self.mat_altaz_to_equinox_equ.transpose()

        self.mat_equinox_equ_date_to_j2000 = MAT_VSOP87_TO_J2000 @ self.rot_equatorial_to_vsop87
        self.mat_j2000_to_equinox_equ = self.mat_equinox_equ_date_to_j2000.transpose()
        self.mat_j2000_to_altaz = self.mat_equinox_equ_to_altaz @ self.mat_j2000_to_equinox_equ
        self.mat_altaz_to_j2000 = self.mat_j2000_to_altaz.transpose()

        self.center = state.heliocentric_position(self.home, self.jde)
        self.mat_heliocentric_ecliptic_to_equinox_equ = (
            self.mat_j2000_to_equinox_equ
            @ MAT_VSOP87_TO_J2000
            @ Matrix4.translation(-self.center)
        )

        self.mat_altaz_to_vsop87 = (
            MAT_J2000_TO_VSOP87 @ self.mat_equinox_equ_date_to_j2000 @ self.mat_altaz_to_equinox_equ
        )
        if self.config.use_topocentric_coordinates:
            offset = self.topographic_offset_from_center()
            sigma = location.latitude.radians - offset[2]
            rho = offset[3]
            site = Vector3(rho * math.sin(sigma), 0.0, rho * math.cos(sigma))
            self.mat_altaz_to_heliocentric_ecliptic = (
                Matrix4.translation(self.center) @ self.mat_altaz_to_vsop87 @ Matrix4.translation(site)
            )
            self.mat_heliocentric_ecliptic_to_altaz = (
                Matrix4.translation(-site)
                @ self.mat_altaz_to_vsop87.transpose()
                @ Matrix4.translation(-self.center)
            )
        else:
            self.mat_altaz_to_heliocentric_ecliptic = (
                Matrix4.translation(self.center) @ self.mat_altaz_to_vsop87
            )
            self.mat_heliocentric_ecliptic_to_altaz = (
                self.mat_altaz_to_vsop87.transpose() @ Matrix4.translation(-self.center)
            )

        if self.config.use_light_travel_time:
            self.light_time_sun_position = self._compute_light_time_sun_position()
        else:
            self.light_time_sun_position = Vector3()

    def __repr__(self) -> str:
        return (
            f'Observer(home={self.home_body.name!r}, location={self.location!r}, '
            f'jd={self.jd!r}, utc_offset={self.utc_offset!r})'
        )

    @property
    def home_body(self) -> Body:
        return self.system[self.home]

    def with_config(self, **changes: object) -> Observer:
        """Same site and instant with some configuration fields replaced."""
        return Observer(
            self.system,
            self.location,
            self.jd,
            self.home_body.id,
            self.utc_offset,
            self.config.with_changes(**changes),
            self.state,
        )

    def at(self, jd: JulianDay | float) -> Observer:
        """Same site and configuration at another instant."""
        return Observer(
            self.system, self.location, jd, self.home_body.id, self.utc_offset, self.config, self.state
        )

    def compute_delta_t(self, jd: float) -> float:
        """ΔT in seconds for the configured model."""
        return self.config.time_correction.delta_t(jd)

    @property
    def julian_day(self) -> JulianDay:
        return JulianDay(self.jd)

    @property
    def heliocentric_position(self) -> Vector3:
        """Observer position in the heliocentric VSOP87 frame, AU."""
        return self.mat_altaz_to_heliocentric_ecliptic.translation_vector()

    def topographic_offset_from_center(self) -> tuple[float, float, float, float]:
        """Site offset from the home body's centre.

        Returns:
            (ρ cos φ′, ρ sin φ′) in AU, geocentric latitude φ′ in radians and
            ρ in AU.
        """
        body = self.home_body
        latitude = self.location.latitude.radians
        if body.radius_km <= 0.0:
            return 0.0, 0.0, latitude, self.location.altitude.au

        rect = cspyce.georec(
            0.0, latitude, self.location.altitude.kilometers, body.radius_km, body.oblateness
        )
        rho_cos_phi = float(rect[0]) / AU_KM
        rho_sin_phi = float(rect[2]) / AU_KM
        rho = math.hypot(rho_cos_phi, rho_sin_phi)
        return rho_cos_phi, rho_sin_phi, math.atan2(rho_sin_phi, rho_cos_phi), rho

    def distance_from_center(self) -> float:
        """Distance between the site and the home body's centre, AU."""
        return self.topographic_offset_from_center()[3]

    def distance_from_center_m(self) -> float:
        return self.distance_from_center() * AU_KM * 1000.0

    @property
    def sidereal_time_deg(self) -> float:
        """Home prime meridian angle plus site longitude, degrees."""
        axis = self.state.axis_rotation(self.home, self.jd, self.jde, self.config.use_nutation)
        return axis + self.location.longitude.degrees

    @property
    def sidereal_time_rad(self) -> float:
        return math.radians(self.sidereal_time_deg)

    def _local_sidereal_hours(self, use_nutation: bool) -> float:
        axis = self.home_body.sidereal_time(self.jd, self.jde, use_nutation)
        return ((axis + self.location.longitude.degrees) / 15.0) % 24.0

    def mean_sidereal_time(self) -> float:
        """Local mean sidereal time, hours in [0, 24)."""
        return self._local_sidereal_hours(False)

    def apparent_sidereal_time(self) -> float:
        """Local apparent sidereal time, hours in [0, 24)."""
        return self._local_sidereal_hours(True)

    def ecliptic_obliquity(self) -> float:
        """Obliquity of the home body's ecliptic of date, radians."""
        obliquity = self.home_body.obliquity_at(self.jde)
        if self.config.use_nutation:
            obliquity += nutation.compute(self.jde).delta_epsilon
        return obliquity

    def j2000_to_equinox_equatorial(self, v: Vector3, refract: bool = False) -> Vector3:
        if refract:
            altaz = self.refraction.forward(self.mat_j2000_to_altaz @ v)
            return self.mat_altaz_to_equinox_equ @ altaz
        return self.mat_j2000_to_equinox_equ @ v

    def equinox_equatorial_to_j2000(self, v: Vector3, refract: bool = False) -> Vector3:
        if refract:
            altaz = self.refraction.backward(self.mat_equinox_equ_to_altaz @ v)
            return self.mat_equinox_equ_date_to_j2000 @ (self.mat_altaz_to_equinox_equ @ altaz)
        return self.mat_equinox_equ_date_to_j2000 @ v

    def j2000_to_altaz(self, v: Vector3, refract: bool = False) -> Vector3:
        altaz = self.mat_j2000_to_altaz @ v
        if refract:
            return self.refraction.forward(altaz)
        return altaz

    def altaz_to_equinox_equatorial(self, v: Vector3, refract: bool = False) -> Vector3:
        if refract:
            v = self.refraction.backward(v)
        return self.mat_altaz_to_equinox_equ @ v

    def _compute_light_time_sun_position(self) -> Vector3:
        position = self.state.heliocentric_position(self.home, self.jde)
        earlier = self.state.heliocentric_position(
            self.home, self.jde - position.length() * LIGHT_TIME_DAYS_PER_AU
        )
        return position - earlier

    def eclipse_factor(self, moon: int | str = MOON_NAME) -> float:
        """Unobscured fraction of the Sun's disc, 0 (total) to 1 (no eclipse).

        Parameters:
            moon: Occulting body, by name or NAIF id.
        """
        moon_index = self.system.index_of(moon)
        sun = self.system[self.system.ancestors(self.home)[-1]]
        lp = self.light_time_sun_position
        p3 = self.heliocentric_position

        trans = self.state.shadow_matrix(moon_index, self.jd, self.jde, self.config.use_nutation)
        c = trans @ Vector3()

        v1 = lp - p3
        v2 = c - p3
        big_l = v1.length()
        small_l = v2.length()
        v1 = v1 / big_l
        v2 = v2 / small_l

        big_r = sun.radius_au / big_l
        small_r = self.system[moon_index].radius_au / small_l
        d = (v1 - v2).length()

        if d >= big_r + small_r:
            return 1.0
        if d <= small_r - big_r:
            return 0.0
        if d <= big_r - small_r:
            return 1.0 - small_r * small_r / (big_r * big_r)

        x = (big_r * big_r + d * d - small_r * small_r) / (2.0 * d)
        alpha = math.acos(x / big_r)
        beta = math.acos((d - x) / small_r)
        area_sun = big_r * big_r * (alpha - 0.5 * math.sin(2.0 * alpha))
        area_moon = small_r * small_r * (beta - 0.5 * math.sin(2.0 * beta))
        return 1.0 - (area_sun + area_moon) / (math.pi * big_r * big_r)

    def eclipse_obscuration(self, moon: int | str = MOON_NAME) -> float:
        """Percentage of the Sun's disc covered by ``moon``."""
        return 100.0 * (1.0 - self.eclipse_factor(moon))


