"""Body records, per-body model hooks and the solar-system arena."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from ephemeris_engine.constants import AU_KM, FIRST_USER_BODY_ID
from ephemeris_engine.orbits import Orbit
from ephemeris_engine.vec_math import IDENTITY, Matrix4, Vector3

if TYPE_CHECKING:
    from ephemeris_engine.bodies.magnitude import MagnitudeAlgorithm, PhaseGeometry

PositionFunction = Callable[[float], 'tuple[Vector3, Vector3]']
RotationFunction = Callable[[float, float, bool], Matrix4]
SiderealFunction = Callable[[float, float, bool], float]
ObliquityFunction = Callable[[float], float]
MagnitudeFunction = Callable[
    ['Body', 'MagnitudeAlgorithm', 'PhaseGeometry'], Optional[float]
]

# Semi-major axes (AU) of the planets whose own positions come from series,
# used for the mean opposition magnitude of their satellites.
_PARENT_SEMI_MAJOR_AXIS = {
    'Mars': 1.52371034,
    'Jupiter': 5.202887,
    'Saturn': 9.53667594,
    'Uranus': 19.18916464,
    'Neptune': 30.06992276,
    'Pluto': 39.48211675,
}


class BodyType(Enum):
    """Closed set of body kinds."""

    STAR = 'star'
    PLANET = 'planet'
    MOON = 'moon'
    MINOR_PLANET = 'minor_planet'
    COMET = 'comet'
    DSO = 'dso'


@dataclass(frozen=True)
class Ring:
    """Planetary ring system extent in km."""

    inner_km: float
    outer_km: float

    @property
    def size_km(self) -> float:
        """Outer radius, used for the angular size of a ringed body."""
        return self.outer_km


@dataclass(frozen=True)
class BodyModel:
    """Per-body behavior hooks.

    Attributes:
        position: JDE -> (position AU, velocity AU/day) relative to the parent,
            in VSOP87 orientation. Falls back to the body's orbit.
        magnitude: Empirical magnitude formula; returns None to use the
            albedo model.
        local_rotation: (jd, jde, use_nutation) -> local to parent rotation.
            Identity when unset.
        sidereal_time: (jd, jde, use_nutation) -> prime meridian angle in
            degrees. Zero when unset.
        rot_obliquity: JDE -> obliquity of the rotation axis in radians.
            Falls back to the constant on the body.
    """

    position: PositionFunction | None = None
    magnitude: MagnitudeFunction | None = None
    local_rotation: RotationFunction | None = None
    sidereal_time: SiderealFunction | None = None
    rot_obliquity: ObliquityFunction | None = None


@dataclass(frozen=True)
class Body:
    """Immutable description of one solar-system body.

    Attributes:
        id: NAIF-style integer id; None until added to a SolarSystem.
        name: English name.
        type: Body kind.
        radius_km: Equatorial radius.
        oblateness: Flattening f.
        albedo: Geometric albedo, used by the albedo magnitude model.
        parent: Index of the parent body in the arena; None for the root.
        orbit: Classical elements for minor bodies and satellites.
        ring: Ring extent, if any.
        sidereal_day: Rotation period in days; negative for retrograde.
        sidereal_period: Orbital period in days; 0 if unknown or open.
        absolute_magnitude: V(1,0); -99 when not defined.
        mean_opposition_magnitude: Fixed value, or None to derive it.
        mean_solar_day: Fixed value, or None to derive it.
        mass: Mass in solar masses.
        rot_obliquity: Constant axis obliquity in radians.
        rot_ascending_node: Axis ascending node in radians.
        slope: H-G slope parameter; below -9.99 disables the H-G model.
        model: Behavior hooks.
    """

    id: int | None
    name: str
    type: BodyType
    radius_km: float
    oblateness: float = 0.0
    albedo: float = 0.0
    parent: int | None = None
    orbit: Orbit | None = None
    ring: Ring | None = None
    sidereal_day: float = 0.0
    sidereal_period: float = 0.0
    absolute_magnitude: float = -99.0
    mean_opposition_magnitude: float | None = None
    mean_solar_day: float | None = None
    mass: float = 0.0
    rot_obliquity: float = 0.0
    rot_ascending_node: float = 0.0
    slope: float = -10.0
    model: BodyModel = field(default_factory=BodyModel, repr=False)

    @property
    def radius_au(self) -> float:
        return self.radius_km / AU_KM

    @property
    def outer_radius_au(self) -> float:
        """Ring outer radius if ringed, else the equatorial radius, in AU."""
        if self.ring is not None:
            return self.ring.size_km / AU_KM
        return self.radius_au

    @property
    def is_rotating_retrograde(self) -> bool:
        return self.sidereal_day < 0.0

    @property
    def is_star(self) -> bool:
        return self.type is BodyType.STAR

    def position(self, jde: float) -> tuple[Vector3, Vector3]:
        """Position and velocity relative to the parent at ``jde`` (uncached)."""
        if self.model.position is not None:
            return self.model.position(jde)
        if self.orbit is not None:
            return self.orbit.position_and_velocity(jde)
        return Vector3(), Vector3()

    def obliquity_at(self, jde: float) -> float:
        """Obliquity of the rotation axis in radians."""
        if self.model.rot_obliquity is not None:
            return self.model.rot_obliquity(jde)
        return self.rot_obliquity

    def local_rotation(self, jd: float, jde: float, use_nutation: bool) -> Matrix4:
        """Rotation from this body's equatorial frame to its parent's frame."""
        if self.model.local_rotation is not None:
            return self.model.local_rotation(jd, jde, use_nutation)
        return IDENTITY

    def sidereal_time(self, jd: float, jde: float, use_nutation: bool) -> float:
        """Prime meridian rotation angle in degrees."""
        if self.model.sidereal_time is not None:
            return self.model.sidereal_time(jd, jde, use_nutation)
        return 0.0


class SolarSystem:
    """Arena of bodies; parents are referenced by index.

    Every parent index must be strictly smaller than the child's own index,
    which makes the tree acyclic by construction.
    """

    def __init__(self, bodies: Iterable[Body]) -> None:
        items = list(bodies)
        seen_ids: set[int] = set()
        seen_names: set[str] = set()
        for index, body in enumerate(items):
            if body.parent is not None and not 0 <= body.parent < index:
                raise ValueError(
                    f'Body {body.name!r} at index {index} has invalid parent index {body.parent}'
                )
            if body.id is None:
                body = replace(body, id=FIRST_USER_BODY_ID + index)
                items[index] = body
            if body.id in seen_ids:
                raise ValueError(f'Duplicate body id {body.id} ({body.name!r})')
            key = body.name.casefold()
            if key in seen_names:
                raise ValueError(f'Duplicate body name {body.name!r}')
            seen_ids.add(body.id)
            seen_names.add(key)
        self._bodies: tuple[Body, ...] = tuple(items)
        self._by_id = {b.id: i for i, b in enumerate(self._bodies)}
        self._by_name = {b.name.casefold(): i for i, b in enumerate(self._bodies)}

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __getitem__(self, index: int) -> Body:
        return self._bodies[index]

    def __repr__(self) -> str:
        return f'SolarSystem({[b.name for b in self._bodies]!r})'

    def index_of(self, key: int | str | Body) -> int:
        """Arena index of a body given by name, NAIF id or Body.

        Raises:
            ValueError: If no such body exists.
        """
        if isinstance(key, Body):
            key = key.id if key.id is not None else key.name
        if isinstance(key, str):
            index = self._by_name.get(key.casefold())
        else:
            index = self._by_id.get(key)
        if index is None:
            raise ValueError(f'Unknown body: {key!r}')
        return index

    def get(self, key: int | str) -> Body:
        """Body by name or NAIF id."""
        return self._bodies[self.index_of(key)]

    def parent_of(self, index: int) -> Body | None:
        parent = self._bodies[index].parent
        return None if parent is None else self._bodies[parent]

    def ancestors(self, index: int) -> list[int]:
        """Indices of the parent, grandparent, ... up to the root."""
        chain = []
        parent = self._bodies[index].parent
        while parent is not None:
            chain.append(parent)
            parent = self._bodies[parent].parent
        return chain

    def with_body(self, body: Body) -> SolarSystem:
        """New arena with ``body`` appended; an id of None is assigned."""
        return SolarSystem((*self._bodies, body))

    def mean_solar_day(self, index: int) -> float:
        """Mean solar day in Earth days.

        For moons this is the synodic month seen from the moon.
        """
        body = self._bodies[index]
        if body.mean_solar_day is not None:
            return body.mean_solar_day
        sday = body.sidereal_day
        if body.type is BodyType.MOON and body.parent is not None:
            a = self._bodies[body.parent].sidereal_period / sday
            return sday * (a / (a - 1.0))
        if body.sidereal_period == 0.0:
            return sday
        coeff = abs(sday / body.sidereal_period)
        sign = -1.0 if body.is_rotating_retrograde else 1.0
        return sign * sday / (1.0 - sign * coeff)

    def mean_opposition_magnitude(self, index: int) -> float:
        """V(1,0) + 5 log10(a(a-1)), Explanatory Supplement 2013 eq. 10.5.

        Returns:
            Magnitude, or 100 when it cannot be derived.
        """
        body = self._bodies[index]
        if body.mean_opposition_magnitude is not None:
            return body.mean_opposition_magnitude
        if body.absolute_magnitude <= -99.0:
            return 100.0

        parent = self.parent_of(index)
        if parent is not None and parent.orbit is not None:
            a = parent.orbit.semi_major_axis
        elif body.type in (BodyType.MINOR_PLANET, BodyType.COMET) and body.orbit is not None:
            a = body.orbit.semi_major_axis
        elif parent is not None and parent.name in _PARENT_SEMI_MAJOR_AXIS:
            a = _PARENT_SEMI_MAJOR_AXIS[parent.name]
        else:
            return 100.0

        if a * (a - 1.0) <= 0.0:
            return 100.0
        return body.absolute_magnitude + 5.0 * math.log10(a * (a - 1.0))
