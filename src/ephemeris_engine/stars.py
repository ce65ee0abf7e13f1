"""Stars and deep-sky objects as CelestialObject value types.

Positions are J2000 unit vectors; catalog values are supplied by the
caller.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING

from ephemeris_engine.celestial import CelestialObject
from ephemeris_engine.constants import ARCSEC_TO_RAD, AU_KM, J2000, SECONDS_PER_DAY
from ephemeris_engine.geometry import spherical_to_rectangular
from ephemeris_engine.units import Angle, Distance
from ephemeris_engine.vec_math import Vector3

if TYPE_CHECKING:
    from ephemeris_engine.observer import Observer

UNKNOWN_MAGNITUDE = 99.0

# (648000 / π) * 1000 * (AU / light year): light years times mas of parallax
_LY_MAS = 3261.56377715928389707856614026952786500443553209103464

# AU in one parsec
_AU_PER_PARSEC = 206264.8062470963551564734

_DAYS_PER_JULIAN_YEAR = 365.25


def distance_from_parallax(parallax: float) -> Distance:
    """Distance for a parallax in milliarcseconds; zero when the parallax is zero."""
    if abs(parallax) > 0.0:
        return Distance.from_light_years(_LY_MAS / parallax)
    return Distance(0.0)


def position_and_velocity(
    ra: float, dec: float, pm_ra: float, pm_dec: float, parallax: float, radial_velocity: float
) -> tuple[Vector3, Vector3]:
    """Barycentric position (AU) and velocity (AU/day) of a star.

    Parameters:
        ra: Right ascension, radians.
        dec: Declination, radians.
        pm_ra: Proper motion in RA along the great circle, radians/year.
        pm_dec: Proper motion in declination, radians/year.
        parallax: Parallax in mas; must be non-zero.
        radial_velocity: km/s, positive receding.
    """
    r = _AU_PER_PARSEC / (parallax / 1000.0)
    td = pm_ra / _DAYS_PER_JULIAN_YEAR
    pd = pm_dec / _DAYS_PER_JULIAN_YEAR
    rd = radial_velocity / AU_KM * SECONDS_PER_DAY
    st = math.sin(ra)
    ct = math.cos(ra)
    sp = math.sin(dec)
    cp = math.cos(dec)
    rcp = r * cp
    x = rcp * ct
    y = rcp * st
    rpd = r * pd
    w = rpd * sp - cp * rd
    return (
        Vector3(x, y, r * sp),
        Vector3(-y * td - w * ct, x * td - w * st, rpd * cp + sp * rd),
    )


@dataclass(frozen=True)
class DeepSky(CelestialObject):
    """Extended object at a fixed J2000 position.

    Attributes:
        ra: J2000 right ascension.
        dec: J2000 declination.
        mag_b: B magnitude, 99 when unknown.
        mag_v: V magnitude, 99 when unknown.
        major_axis: Major axis size.
        minor_axis: Minor axis size; zero for round objects.
        distance_ly: Distance in light years, 0 when unknown.
        name: Display name.
    """

    ra: Angle
    dec: Angle
    mag_b: float = UNKNOWN_MAGNITUDE
    mag_v: float = UNKNOWN_MAGNITUDE
    major_axis: Angle = Angle(0.0)
    minor_axis: Angle = Angle(0.0)
    distance_ly: float = 0.0
    name: str = ''

    @cached_property
    def _direction(self) -> Vector3:
        return spherical_to_rectangular(self.ra.radians, self.dec.radians)

    @property
    def magnitude(self) -> float:
        return min(self.mag_v, self.mag_b)

    @property
    def surface_area(self) -> float:
        """Apparent area in square degrees (circle when the minor axis is unset)."""
        mb = self.major_axis.degrees
        ma = self.minor_axis.degrees
        if ma == 0.0:
            return math.pi * (mb / 2.0) * (mb / 2.0)
        return math.pi * (mb / 2.0) * (ma / 2.0)

    @property
    def surface_brightness(self) -> float:
        """Mean surface brightness in mag/arcsec², 99 when undefined."""
        if self.magnitude < UNKNOWN_MAGNITUDE and self.major_axis.radians > 0.0:
            return self.magnitude + 2.5 * math.log10(self.surface_area * 3600.0 * 3600.0)
        return UNKNOWN_MAGNITUDE

    @property
    def color_index(self) -> float | None:
        """B-V, or None if either magnitude is missing."""
        if self.mag_b < 50.0 and self.mag_v < 50.0:
            return self.mag_b - self.mag_v
        return None

    def j2000_position(self, o: Observer) -> Vector3:
        return self._direction

    def visual_magnitude(self, o: Observer) -> float:
        return self.magnitude

    def angular_size(self, o: Observer) -> Angle:
        return (self.major_axis + self.minor_axis) * 0.5

    def distance(self, o: Observer) -> Distance:
        return Distance.from_light_years(self.distance_ly)


@dataclass(frozen=True)
class Star(DeepSky):
    """Star with space motion.

    Attributes:
        parallax: mas.
        pm_ra: Proper motion in RA, mas/year (RA rate times cos δ).
        pm_dec: Proper motion in declination, mas/year.
        radial_velocity: km/s.
        mag_i: I magnitude.
    """

    parallax: float = 0.0
    pm_ra: float = 0.0
    pm_dec: float = 0.0
    radial_velocity: float = 0.0
    mag_i: float = UNKNOWN_MAGNITUDE

    @cached_property
    def _pv(self) -> tuple[Vector3, Vector3]:
        if self.parallax == 0.0:
            return self._direction, Vector3()
        dec = self.dec.radians
        return position_and_velocity(
            self.ra.radians,
            dec,
            self.pm_ra / 1000.0 * ARCSEC_TO_RAD / math.cos(dec),
            self.pm_dec / 1000.0 * ARCSEC_TO_RAD,
            self.parallax,
            self.radial_velocity,
        )

    def j2000_position(self, o: Observer) -> Vector3:
        """J2000 direction moved along the space motion to the observer's JDE."""
        position, velocity = self._pv
        return (position + velocity * (o.jde - J2000)).normalized()

    def absolute_magnitude(self, o: Observer) -> float:
        """M = m + 5 (1 + log10 π), 99 without a positive parallax."""
        if self.parallax > 0.0:
            return self.visual_magnitude(o) + 5.0 * (1.0 + math.log10(self.parallax / 1000.0))
        return UNKNOWN_MAGNITUDE

    def distance(self, o: Observer) -> Distance:
        return distance_from_parallax(self.parallax)


class NebulaType(Enum):
    """Morphological class of a deep-sky object."""

    GALAXY = 0
    ACTIVE_GALAXY = 1
    RADIO_GALAXY = 2
    INTERACTING_GALAXY = 3
    QUASAR = 4
    STAR_CLUSTER = 5
    OPEN_STAR_CLUSTER = 6
    GLOBULAR_STAR_CLUSTER = 7
    STELLAR_ASSOCIATION = 8
    STAR_CLOUD = 9
    NEBULA = 10
    PLANETARY_NEBULA = 11
    DARK_NEBULA = 12
    REFLECTION_NEBULA = 13
    BIPOLAR_NEBULA = 14
    EMISSION_NEBULA = 15
    CLUSTER_WITH_NEBULOSITY = 16
    HII_REGION = 17
    SUPERNOVA_REMNANT = 18
    INTERSTELLAR_MATTER = 19
    EMISSION_OBJECT = 20
    BL_LAC_OBJECT = 21
    BLAZAR = 22
    MOLECULAR_CLOUD = 23
    YOUNG_STELLAR_OBJECT = 24
    POSSIBLE_QUASAR = 25
    POSSIBLE_PLANETARY_NEBULA = 26
    PROTOPLANETARY_NEBULA = 27
    STAR = 28
    SYMBIOTIC_STAR = 29
    EMISSION_LINE_STAR = 30
    SUPERNOVA_CANDIDATE = 31
    SUPERNOVA_REMNANT_CANDIDATE = 32
    CLUSTER_OF_GALAXIES = 33
    UNKNOWN = 34


# Catalog prefixes, in display order, for the numbered designations
_NUMBERED_CATALOGS = (
    ('m', 'M'),
    ('ngc', 'NGC'),
    ('ic', 'IC'),
    ('c', 'C'),
    ('b', 'B'),
    ('sh2', 'Sh2-'),
    ('vdb', 'vdB'),
    ('rcw', 'RCW'),
    ('ldn', 'LDN'),
    ('lbn', 'LBN'),
    ('cr', 'Cr'),
    ('mel', 'Mel'),
    ('pgc', 'PGC'),
    ('ugc', 'UGC'),
    ('arp', 'Arp'),
    ('vv', 'VV'),
    ('dwb', 'DWB'),
    ('tr', 'Tr'),
    ('st', 'St'),
    ('ru', 'Ru'),
    ('vdbha', 'vdB-Ha'),
)

_NAMED_CATALOGS = (
    ('ced', 'Ced'),
    ('pk', 'PK'),
    ('png', 'PN G'),
    ('snrg', 'SNR G'),
    ('aco', 'Abell'),
    ('hcg', 'HCG'),
    ('eso', 'ESO'),
    ('vdbh', 'vdBH'),
)


@dataclass(frozen=True)
class Nebula(CelestialObject):
    """Catalogued deep-sky object with its cross-identifications.

    Catalog numbers are 0 (or empty strings) when the object is not listed.
    """

    id: str = ''
    m: int = 0
    ngc: int = 0
    ic: int = 0
    c: int = 0
    b: int = 0
    sh2: int = 0
    vdb: int = 0
    rcw: int = 0
    ldn: int = 0
    lbn: int = 0
    cr: int = 0
    mel: int = 0
    pgc: int = 0
    ugc: int = 0
    arp: int = 0
    vv: int = 0
    dwb: int = 0
    tr: int = 0
    st: int = 0
    ru: int = 0
    vdbha: int = 0
    ced: str = ''
    pk: str = ''
    png: str = ''
    snrg: str = ''
    aco: str = ''
    hcg: str = ''
    eso: str = ''
    vdbh: str = ''
    m_type: str = ''
    mag_b: float = UNKNOWN_MAGNITUDE
    mag_v: float = UNKNOWN_MAGNITUDE
    major_axis: Angle = Angle(0.0)
    minor_axis: Angle = Angle(0.0)
    orientation: Angle = Angle(0.0)
    distance_ly: float = 0.0
    distance_error: float = 0.0
    redshift: float = 0.0
    redshift_error: float = 0.0
    parallax: float = 0.0
    parallax_error: float = 0.0
    surface_brightness: float = 0.0
    ra: Angle = Angle(0.0)
    dec: Angle = Angle(0.0)
    nebula_type: NebulaType = NebulaType.UNKNOWN
    h400: bool = False
    bennett: bool = False
    dunlop: bool = False
    names: tuple[str, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:  # type: ignore[override]
        if self.names:
            return self.names[0]
        designations = self.designations()
        return designations[0] if designations else self.id

    def designations(self) -> list[str]:
        """Catalog designations such as ``M 31`` and ``NGC 224``, in catalog order."""
        result = [
            f'{prefix} {getattr(self, attr)}'
            for attr, prefix in _NUMBERED_CATALOGS
            if getattr(self, attr) > 0
        ]
        result.extend(
            f'{prefix} {getattr(self, attr)}' for attr, prefix in _NAMED_CATALOGS if getattr(self, attr)
        )
        return result

    @cached_property
    def _direction(self) -> Vector3:
        return spherical_to_rectangular(self.ra.radians, self.dec.radians)

    def j2000_position(self, o: Observer) -> Vector3:
        return self._direction

    def visual_magnitude(self, o: Observer) -> float:
        return min(self.mag_v, self.mag_b)

    def angular_size(self, o: Observer) -> Angle:
        return (self.major_axis + self.minor_axis) * 0.5

    def distance(self, o: Observer) -> Distance:
        return Distance.from_light_years(self.distance_ly)
