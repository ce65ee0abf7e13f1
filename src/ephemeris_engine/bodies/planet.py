"""Planet: a solar-system body seen by an Observer."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ephemeris_engine.bodies import magnitude
from ephemeris_engine.bodies.base import Body, BodyType, SolarSystem
from ephemeris_engine.bodies.minor import coma_diameter_and_tail_length
from ephemeris_engine.celestial import CelestialObject
from ephemeris_engine.constants import AU_KM, MAT_VSOP87_TO_J2000, MOON_ID, SECONDS_PER_DAY
from ephemeris_engine.observer import LIGHT_TIME_DAYS_PER_AU
from ephemeris_engine.units import Angle, Distance
from ephemeris_engine.vec_math import Matrix4, Vector3

if TYPE_CHECKING:
    from ephemeris_engine.observer import Observer

# Extra depression of the Moon's centre at rise and set: mean semi-diameter
# (0.7275 of the horizontal parallax) scaled for the mean parallax.
_MOON_HORIZON_PARALLAX = math.radians(0.7275 * 0.95)


class Planet(CelestialObject):
    """Handle on one body of a SolarSystem arena.

    Planet holds no per-instant state; every quantity is computed for the
    Observer passed in, whose ObserverState caches the underlying positions.

    Parameters:
        system: Arena holding the body.
        key: Body name, NAIF id or Body.

    Raises:
        ValueError: If the body is not in the arena.
    """

    def __init__(self, system: SolarSystem, key: int | str | Body) -> None:
        self.system = system
        self.index = system.index_of(key)

    def __repr__(self) -> str:
        return f'Planet({self.name!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Planet):
            return NotImplemented
        return self.system is other.system and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.system), self.index))

    @property
    def body(self) -> Body:
        return self.system[self.index]

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.body.name

    @property
    def parent(self) -> Planet | None:
        if self.body.parent is None:
            return None
        return Planet(self.system, self.system[self.body.parent])

    def _check(self, o: Observer) -> None:
        if o.system is not self.system:
            raise ValueError(f'Observer is not built on the arena holding {self.name!r}')

    # Positions in the heliocentric VSOP87 frame

    def _parent_relative(self, index: int, o: Observer, which: int) -> Vector3:
        state = o.state
        jde = o.jde
        if o.config.use_light_travel_time:
            distance = (
                state.heliocentric_position(index, jde) - state.heliocentric_position(o.home, jde)
            ).length()
            jde -= distance * LIGHT_TIME_DAYS_PER_AU
        return state.position(index, jde)[which]

    def ecliptic_position(self, o: Observer) -> Vector3:
        """Position relative to the parent, light-time corrected when configured, AU."""
        self._check(o)
        return self._parent_relative(self.index, o, 0)

    def ecliptic_velocity(self, o: Observer) -> Vector3:
        """Velocity relative to the parent, AU/day."""
        self._check(o)
        return self._parent_relative(self.index, o, 1)

    def heliocentric_position(self, o: Observer) -> Vector3:
        """Heliocentric VSOP87 position, AU."""
        self._check(o)
        pos = self._parent_relative(self.index, o, 0)
        for ancestor in self.system.ancestors(self.index):
            pos = pos + self._parent_relative(ancestor, o, 0)
        return pos

    def heliocentric_velocity(self, o: Observer) -> Vector3:
        self._check(o)
        vel = self._parent_relative(self.index, o, 1)
        for ancestor in self.system.ancestors(self.index):
            vel = vel + self._parent_relative(ancestor, o, 1)
        return vel

    def shadow_matrix(self, o: Observer) -> Matrix4:
        """Body-fixed frame to heliocentric VSOP87 at the observer's instant."""
        self._check(o)
        return o.state.shadow_matrix(self.index, o.jd, o.jde, o.config.use_nutation)

    # CelestialObject primitives

    def j2000_position(self, o: Observer) -> Vector3:
        if self.body.parent is None:
            rel = o.light_time_sun_position - o.heliocentric_position
        else:
            rel = self.heliocentric_position(o) - o.heliocentric_position
        return MAT_VSOP87_TO_J2000.multiply_without_translation(rel)

    def angular_size(self, o: Observer) -> Angle:
        """Angular radius including rings."""
        return Angle(math.atan2(self.body.outer_radius_au, self.j2000_position(o).length()))

    def spheroid_angular_size(self, o: Observer) -> Angle:
        """Angular radius of the body itself."""
        return Angle(math.atan2(self.body.radius_au, self.j2000_position(o).length()))

    def distance(self, o: Observer) -> Distance:
        """Observer-body distance."""
        return Distance.from_au((o.heliocentric_position - self.heliocentric_position(o)).length())

    def distance_from_sun(self, o: Observer) -> Distance:
        return Distance.from_au(self.heliocentric_position(o).length())

    def _distances_squared(self, o: Observer) -> tuple[float, float, float]:
        observer_rq = o.heliocentric_position.length_squared()
        planet_rq = self.heliocentric_position(o).length_squared()
        observer_planet_rq = self.j2000_position(o).length_squared()
        return observer_rq, planet_rq, observer_planet_rq

    def _cos_chi(self, o: Observer) -> float:
        observer_rq, planet_rq, observer_planet_rq = self._distances_squared(o)
        return (observer_planet_rq + planet_rq - observer_rq) / (
            2.0 * math.sqrt(observer_planet_rq * planet_rq)
        )

    def phase_angle(self, o: Observer) -> Angle:
        """Sun-body-observer angle."""
        return Angle(math.acos(max(-1.0, min(1.0, self._cos_chi(o)))))

    def elongation(self, o: Observer) -> Angle:
        """Sun-observer-body angle."""
        observer_rq, planet_rq, observer_planet_rq = self._distances_squared(o)
        cos_e = (observer_planet_rq + observer_rq - planet_rq) / (
            2.0 * math.sqrt(observer_planet_rq * observer_rq)
        )
        return Angle(math.acos(max(-1.0, min(1.0, cos_e))))

    def illumination(self, o: Observer) -> float:
        """Illuminated fraction of the disc, 0 to 1."""
        return 0.5 * abs(1.0 + self._cos_chi(o))

    def synodic_period(self, o: Observer) -> float:
        """Synodic period seen from the home body, days; 0 when undefined."""
        home = o.home_body
        body = self.body
        if home.sidereal_period <= 0.0 or body.sidereal_period <= 0.0:
            return 0.0
        if body.type is not BodyType.PLANET and body.parent != o.home:
            return 0.0
        return abs(1.0 / (1.0 / home.sidereal_period - 1.0 / body.sidereal_period))

    def orbital_velocity(self, o: Observer) -> float:
        """Speed relative to the parent, km/s."""
        return self.ecliptic_velocity(o).length() * AU_KM / SECONDS_PER_DAY

    def heliocentric_velocity_km_s(self, o: Observer) -> float:
        return self.heliocentric_velocity(o).length() * AU_KM / SECONDS_PER_DAY

    def mean_solar_day(self) -> float:
        return self.system.mean_solar_day(self.index)

    def mean_opposition_magnitude(self) -> float:
        return self.system.mean_opposition_magnitude(self.index)

    def visual_magnitude(self, o: Observer, moon: int | str | None = None) -> float:
        """Apparent visual magnitude.

        Parameters:
            o: Observer.
            moon: For the Sun, the body whose eclipse dims it.

        Returns:
            Magnitude using the observer's configured algorithm, the body's
            own law (H-G, comet) or the albedo model.
        """
        body = self.body
        if body.parent is None:
            factor = o.eclipse_factor(moon) if moon is not None else 1.0
            return magnitude.sun_magnitude(o.heliocentric_position.length(), factor)

        helio = self.heliocentric_position(o)
        observer_rq, planet_rq, observer_planet_rq = self._distances_squared(o)
        cos_chi = (observer_planet_rq + planet_rq - observer_rq) / (
            2.0 * math.sqrt(observer_planet_rq * planet_rq)
        )
        phase = math.acos(max(-1.0, min(1.0, cos_chi)))

        shadow = 1.0
        parent = self.system.parent_of(self.index)
        if parent is not None and parent.parent is not None:
            shadow = magnitude.shadow_factor(
                helio,
                Planet(self.system, parent).heliocentric_position(o),
                parent.radius_au,
                self.system[parent.parent].radius_au,
                body.radius_au,
                body.type is BodyType.MOON,
            )

        geometry = magnitude.PhaseGeometry(
            phase_angle=phase,
            cos_chi=cos_chi,
            observer_rq=observer_rq,
            planet_rq=planet_rq,
            observer_planet_rq=observer_planet_rq,
            shadow_factor=shadow,
            jde=o.jde,
            saturn_observer=helio - o.heliocentric_position,
        )
        algorithm = o.config.apparent_magnitude_algorithm
        if body.model.magnitude is not None:
            mag = body.model.magnitude(body, algorithm, geometry)
            if mag is not None:
                return mag
        return magnitude.default_magnitude(body, algorithm, geometry)

    def coma_diameter_and_tail_length(self, o: Observer) -> tuple[float, float]:
        """Estimated coma diameter and tail length in km, for comets.

        Raises:
            ValueError: If the body is not a comet.
        """
        if self.body.type is not BodyType.COMET:
            raise ValueError(f'{self.name!r} is not a comet')
        return coma_diameter_and_tail_length(self.body, self.heliocentric_position(o).length())

    def horizon_altitude(self, o: Observer, has_atmosphere: bool = True) -> float:
        hz = super().horizon_altitude(o, has_atmosphere)
        if self.body.parent is None:
            hz -= self.angular_size(o).radians
        elif self.body.id == MOON_ID:
            hz += _MOON_HORIZON_PARALLAX
        return hz
