"""Tests for solar-system body positions and derived quantities."""

from __future__ import annotations

import math

import pytest
from conftest import local_observer

from ephemeris_engine.bodies import BodyType, SolarSystem
from ephemeris_engine.bodies.magnitude import MagnitudeAlgorithm
from ephemeris_engine.bodies.planet import Planet
from ephemeris_engine.observer import Observer

POSITION_TOLERANCE = 0.01


def _degrees(pair: tuple) -> tuple[float, float]:
    return pair[0].degrees, pair[1].degrees


@pytest.mark.parametrize(
    ('name', 'az', 'alt'),
    [
        ('Sun', 90.7432, 43.3413),
        ('Mercury', 86.5517, 36.8015),
        ('Venus', 92.5681, 55.3030),
        ('Mars', 87.1402, -44.6719),
        ('Jupiter', 91.7507, 49.0952),
        ('Saturn', 91.8896, 54.4151),
        ('Neptune', 91.1530, 10.8117),
    ],
)
def test_horizontal_geometric(
    system: SolarSystem, observer: Observer, name: str, az: float, alt: float
) -> None:
    """Geometric azimuth and altitude match reference values."""

    result = _degrees(Planet(system, name).horizontal(observer, apparent=False))

    assert result == pytest.approx((az, alt), abs=POSITION_TOLERANCE)


def test_horizontal_apparent_and_south_azimuth(system: SolarSystem, observer: Observer) -> None:
    """Refraction lifts the Sun; south azimuth is shifted by 180°."""

    sun = Planet(system, 'Sun')

    apparent = sun.horizontal(observer)
    south = sun.horizontal(observer, south_azimuth=True, apparent=False)

    assert apparent.alt.degrees == pytest.approx(43.3589, abs=POSITION_TOLERANCE)
    assert apparent.alt.degrees > sun.horizontal(observer, apparent=False).alt.degrees
    assert south.az.degrees == pytest.approx(270.7432, abs=POSITION_TOLERANCE)


@pytest.mark.parametrize(
    ('name', 'ra', 'dec'),
    [
        ('Sun', 319.06728, -15.8555),
        ('Mars', 41.81461, 17.5037),
        ('Jupiter', 313.4488, -18.0259),
    ],
)
def test_equatorial_j2000(
    system: SolarSystem, observer: Observer, name: str, ra: float, dec: float
) -> None:
    """Astrometric J2000 right ascension and declination."""

    result = _degrees(Planet(system, name).equatorial_j2000(observer))

    assert result == pytest.approx((ra, dec), abs=POSITION_TOLERANCE)


def test_ecliptic_coordinates(system: SolarSystem, observer: Observer) -> None:
    """Ecliptic longitude and latitude of date and of J2000."""

    sun = Planet(system, 'Sun')
    mars = Planet(system, 'Mars')

    assert _degrees(sun.ecliptic(observer)) == pytest.approx((316.9039, 0.0), abs=POSITION_TOLERANCE)
    assert _degrees(mars.ecliptic(observer)) == pytest.approx((44.9753, 1.3212), abs=POSITION_TOLERANCE)
    assert _degrees(sun.ecliptic_j2000(observer)) == pytest.approx(
        (316.6135, 0.0017), abs=POSITION_TOLERANCE
    )


def test_galactic_and_supergalactic(system: SolarSystem, observer: Observer) -> None:
    """Galactic and supergalactic coordinates of the Sun."""

    sun = Planet(system, 'Sun')

    assert _degrees(sun.galactic(observer)) == pytest.approx((34.1094, -39.0728), abs=POSITION_TOLERANCE)
    assert _degrees(sun.supergalactic(observer)) == pytest.approx(
        (-104.0866, 42.9741), abs=POSITION_TOLERANCE
    )


def test_hour_angle(system: SolarSystem, observer: Observer) -> None:
    """Hour angle in hours and declination of date."""

    ha = Planet(system, 'Sun').hour_angle(observer, apparent=False)

    assert ha.ha == pytest.approx(20.72784, abs=0.001)
    assert ha.dec.degrees == pytest.approx(-15.7682, abs=POSITION_TOLERANCE)


def test_parallactic_angle(system: SolarSystem, observer: Observer) -> None:
    """Parallactic angle of the Sun and Mars."""

    assert Planet(system, 'Sun').parallactic_angle(observer).degrees == pytest.approx(-106.3196, abs=0.02)
    assert Planet(system, 'Mars').parallactic_angle(observer).degrees == pytest.approx(-104.5911, abs=0.02)


def test_distances(system: SolarSystem, observer: Observer) -> None:
    """Observer distances and heliocentric distance in AU."""

    assert Planet(system, 'Sun').distance(observer).au == pytest.approx(0.986, abs=0.001)
    assert Planet(system, 'Mars').distance(observer).au == pytest.approx(1.236, abs=0.001)
    assert Planet(system, 'Jupiter').distance(observer).au == pytest.approx(6.064, abs=0.001)
    assert Planet(system, 'Jupiter').distance_from_sun(observer).au == pytest.approx(5.084, abs=0.001)


def test_elongation_phase_angle_and_illumination(system: SolarSystem, observer: Observer) -> None:
    """Sun-relative angles and illuminated fraction."""

    mars = Planet(system, 'Mars')
    venus = Planet(system, 'Venus')

    assert mars.elongation(observer).degrees == pytest.approx(88.0661, abs=0.01)
    assert mars.phase_angle(observer).degrees == pytest.approx(39.3243, abs=0.01)
    assert venus.phase_angle(observer).degrees == pytest.approx(16.3937, abs=0.01)
    assert Planet(system, 'Mercury').illumination(observer) == pytest.approx(0.039, abs=0.001)
    assert venus.illumination(observer) == pytest.approx(0.980, abs=0.001)
    assert mars.illumination(observer) == pytest.approx(0.887, abs=0.001)


def test_synodic_period(system: SolarSystem, observer: Observer) -> None:
    """Synodic periods seen from the Earth; undefined for the home body."""

    assert Planet(system, 'Mercury').synodic_period(observer) == pytest.approx(115.88, abs=0.01)
    assert Planet(system, 'Mars').synodic_period(observer) == pytest.approx(779.95, abs=0.05)
    assert Planet(system, 'Moon').synodic_period(observer) == pytest.approx(29.53, abs=0.01)
    assert Planet(system, 'Sun').synodic_period(observer) == 0.0


def test_orbital_velocity(system: SolarSystem, observer: Observer) -> None:
    """Speed relative to the parent in km/s."""

    assert Planet(system, 'Mercury').orbital_velocity(observer) == pytest.approx(56.441, abs=0.05)
    assert Planet(system, 'Mars').orbital_velocity(observer) == pytest.approx(23.639, abs=0.05)


def test_angular_size(system: SolarSystem, observer: Observer) -> None:
    """Saturn's rings enlarge its disc beyond the spheroid."""

    jupiter = Planet(system, 'Jupiter')
    saturn = Planet(system, 'Saturn')

    assert (jupiter.angular_size(observer) * 2.0).degrees == pytest.approx(0.00903, abs=1e-4)
    assert (saturn.angular_size(observer) * 2.0).degrees == pytest.approx(0.00982, abs=1e-4)
    assert (saturn.spheroid_angular_size(observer) * 2.0).degrees == pytest.approx(0.00422, abs=1e-4)


def test_mean_solar_day(system: SolarSystem) -> None:
    """Mean solar days in Earth days, retrograde Venus included."""

    assert Planet(system, 'Jupiter').mean_solar_day() == pytest.approx(0.4137, abs=1e-3)
    assert Planet(system, 'Venus').mean_solar_day() == pytest.approx(116.7502, abs=0.01)
    assert Planet(system, 'Earth').mean_solar_day() == pytest.approx(1.0, abs=1e-3)


def test_is_above_horizon(system: SolarSystem, observer: Observer) -> None:
    """Horizon test follows the geometric altitude."""

    evening = local_observer(system, 2021, 2, 5, 21)

    assert Planet(system, 'Neptune').is_above_horizon(observer)
    assert not Planet(system, 'Mars').is_above_horizon(observer)
    assert Planet(system, 'Mars').is_above_horizon(evening)


@pytest.mark.parametrize(
    ('name', 'rise', 'transit', 'set_'),
    [
        ('Sun', 5.75, 12.2833, 18.8167),
        ('Venus', 4.85, 11.483, 18.117),
        ('Mars', 12.267, 17.817, 23.367),
    ],
)
def test_rise_transit_set(
    system: SolarSystem, observer: Observer, name: str, rise: float, transit: float, set_: float
) -> None:
    """Local rise, transit and set hours."""

    result = Planet(system, name).rts(observer)

    assert tuple(result) == pytest.approx((rise, transit, set_), abs=0.02)
    assert not result.is_circumpolar
    assert not result.never_rises


def test_airmass(system: SolarSystem) -> None:
    """Airmass rises towards the horizon."""

    o = local_observer(system, 2021, 2, 5, 13)

    assert Planet(system, 'Sun').airmass(o) == pytest.approx(1.02, abs=0.01)
    assert Planet(system, 'Jupiter').airmass(o) == pytest.approx(1.04, abs=0.01)
    assert Planet(system, 'Mars').airmass(o) == pytest.approx(6.05, abs=0.1)


@pytest.mark.parametrize(
    ('name', 'expected'),
    [
        ('Sun', -26.77),
        ('Venus', -3.87),
        ('Mars', 0.53),
        ('Jupiter', -1.95),
        ('Saturn', 0.63),
        ('Uranus', 5.79),
        ('Neptune', 7.95),
        ('Moon', -10.77),
    ],
)
def test_visual_magnitude(system: SolarSystem, name: str, expected: float) -> None:
    """Default (2013 supplement) magnitudes."""

    o = local_observer(system, 2021, 2, 5, 13)

    assert Planet(system, name).visual_magnitude(o) == pytest.approx(expected, abs=0.1)


def test_visual_magnitude_other_algorithms(system: SolarSystem) -> None:
    """Older magnitude laws and the generic albedo law."""

    o = local_observer(system, 2021, 2, 5, 13)
    es1992 = o.with_config(apparent_magnitude_algorithm=MagnitudeAlgorithm.EXPLANATORY_SUPPLEMENT_1992)
    generic = o.with_config(apparent_magnitude_algorithm=MagnitudeAlgorithm.GENERIC)

    assert Planet(system, 'Mercury').visual_magnitude(es1992) == pytest.approx(2.66, abs=0.1)
    assert Planet(system, 'Venus').visual_magnitude(es1992) == pytest.approx(-3.80, abs=0.1)
    assert Planet(system, 'Jupiter').visual_magnitude(es1992) == pytest.approx(-1.80, abs=0.1)
    assert Planet(system, 'Saturn').visual_magnitude(generic) == pytest.approx(1.63, abs=0.1)


def test_visual_magnitude_with_extinction(system: SolarSystem) -> None:
    """Extinction dims objects above the horizon only."""

    o = local_observer(system, 2021, 2, 5, 13)
    sun = Planet(system, 'Sun')
    mars = Planet(system, 'Mars')
    night = local_observer(system, 2021, 2, 5, 9)

    assert sun.visual_magnitude_with_extinction(o) == pytest.approx(-26.64, abs=0.1)
    assert mars.visual_magnitude_with_extinction(night) == mars.visual_magnitude(night)


def test_planet_rejects_foreign_observer(system: SolarSystem, observer: Observer) -> None:
    """A Planet only answers observers built on its own arena."""

    from ephemeris_engine.bodies import build_solar_system

    other = Planet(build_solar_system(), 'Mars')

    with pytest.raises(ValueError, match='arena'):
        other.heliocentric_position(observer)


def test_planet_identity(system: SolarSystem) -> None:
    """Planets compare by arena and index; the parent chain follows the arena."""

    moon = Planet(system, 'Moon')

    assert moon == Planet(system, 301)
    assert hash(moon) == hash(Planet(system, 'Moon'))
    assert moon.parent == Planet(system, 'Earth')
    assert moon.body.type is BodyType.MOON
    assert Planet(system, 'Sun').parent is None


def test_coma_requires_comet(system: SolarSystem, observer: Observer) -> None:
    """Coma and tail estimates are only defined for comets."""

    with pytest.raises(ValueError, match='not a comet'):
        Planet(system, 'Mars').coma_diameter_and_tail_length(observer)


def test_light_time_moves_positions(system: SolarSystem, observer: Observer) -> None:
    """Disabling light travel time changes Jupiter's direction by about 30 arcseconds."""

    jupiter = Planet(system, 'Jupiter')
    instant = observer.with_config(use_light_travel_time=False)

    separation = jupiter.j2000_position(observer).normalized().angle(
        jupiter.j2000_position(instant).normalized()
    )

    assert 0.0 < math.degrees(separation) * 3600.0 < 120.0
