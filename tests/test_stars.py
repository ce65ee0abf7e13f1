"""Tests for stars, deep-sky objects and catalogued nebulae."""

from __future__ import annotations

import math

import pytest
from conftest import local_observer

from ephemeris_engine.bodies import SolarSystem
from ephemeris_engine.stars import (
    UNKNOWN_MAGNITUDE,
    DeepSky,
    Nebula,
    NebulaType,
    Star,
    distance_from_parallax,
)
from ephemeris_engine.units import Angle

NGC_4565 = DeepSky(
    ra=Angle(3.300185203552246),
    dec=Angle(0.4535655677318573),
    mag_b=13.61,
    mag_v=12.43,
    major_axis=Angle.from_degrees(0.265),
    minor_axis=Angle.from_degrees(0.030833),
    distance_ly=5.679008041430424e7,
    name='NGC 4565',
)

BARNARDS_STAR = Star(
    ra=Angle.from_degrees(269.4520824975141),
    dec=Angle.from_degrees(4.69336426506333),
    mag_b=11.08,
    mag_v=9.5,
    name="Barnard's Star",
    parallax=547.4506,
    pm_ra=-802.803,
    pm_dec=10362.542,
    radial_velocity=-110.353,
    mag_i=6.741,
)


def _degrees(pair: tuple) -> tuple[float, float]:
    return pair[0].degrees, pair[1].degrees


def test_deep_sky_coordinates(system: SolarSystem) -> None:
    """Equatorial, horizontal and galactic coordinates of NGC 4565."""

    o = local_observer(system, 2021, 8, 5, 15)

    assert _degrees(NGC_4565.equatorial_j2000(o)) == pytest.approx((189.08668, 25.9874), abs=1e-3)
    assert _degrees(NGC_4565.equatorial(o)) == pytest.approx((189.35088, 25.8702), abs=2e-3)
    assert _degrees(NGC_4565.horizontal(o)) == pytest.approx((12.3785, 40.5713), abs=0.01)
    assert _degrees(NGC_4565.galactic(o)) == pytest.approx((-129.2399, 86.4379), abs=1e-3)


def test_deep_sky_rise_transit_set(system: SolarSystem) -> None:
    """Fixed objects rise and set by the sidereal clock."""

    o = local_observer(system, 2021, 8, 5, 15)

    assert tuple(NGC_4565.rts(o)) == pytest.approx((10.4104, 15.697, 20.983), abs=0.02)


def test_deep_sky_magnitudes(system: SolarSystem) -> None:
    """The brighter band is the visual magnitude; extinction dims it."""

    o = local_observer(system, 2021, 8, 5, 15)

    assert NGC_4565.visual_magnitude(o) == pytest.approx(12.43)
    assert NGC_4565.visual_magnitude_with_extinction(o) == pytest.approx(12.63, abs=0.02)
    assert NGC_4565.color_index == pytest.approx(1.18)


def test_deep_sky_size_and_distance(system: SolarSystem) -> None:
    """Angular size is the mean of the axes; distance comes from the catalog."""

    o = local_observer(system, 2021, 8, 5, 15)

    assert NGC_4565.angular_size(o).degrees == pytest.approx((0.265 + 0.030833) / 2.0)
    assert NGC_4565.distance(o).light_years == pytest.approx(5.679008041430424e7)
    assert NGC_4565.surface_area == pytest.approx(math.pi * 0.1325 * 0.0154165)
    assert NGC_4565.surface_brightness < UNKNOWN_MAGNITUDE


def test_deep_sky_missing_magnitudes() -> None:
    """Unknown magnitudes give no color index or surface brightness."""

    blank = DeepSky(ra=Angle(0.0), dec=Angle(0.0), mag_v=8.0)

    assert blank.color_index is None
    assert blank.surface_brightness == UNKNOWN_MAGNITUDE


def test_star_magnitudes_and_distance(system: SolarSystem) -> None:
    """Barnard's Star: apparent and absolute magnitude and parallax distance."""

    o = local_observer(system, 2021, 8, 5, 9)

    assert BARNARDS_STAR.visual_magnitude(o) == pytest.approx(9.50)
    assert BARNARDS_STAR.absolute_magnitude(o) == pytest.approx(13.19, abs=0.01)
    assert BARNARDS_STAR.distance(o).light_years == pytest.approx(5.957, abs=2e-3)


@pytest.mark.parametrize(
    ('year', 'ra', 'dec'),
    [
        (2021, 269.7103, 4.7537),
        (2030, 269.8272, 4.7812),
    ],
)
def test_star_proper_motion(system: SolarSystem, year: int, ra: float, dec: float) -> None:
    """Space motion carries Barnard's Star north by about 10 arcseconds a year."""

    o = local_observer(system, year, 8, 5, 9)

    assert _degrees(BARNARDS_STAR.equatorial(o)) == pytest.approx((ra, dec), abs=0.01)


def test_star_without_parallax(system: SolarSystem) -> None:
    """Without a parallax the catalog direction is used and the magnitude is unknown."""

    o = local_observer(system, 2021, 8, 5, 9)
    star = Star(ra=Angle.from_degrees(10.0), dec=Angle.from_degrees(20.0), mag_v=5.0, pm_dec=100.0)

    assert star.absolute_magnitude(o) == UNKNOWN_MAGNITUDE
    assert star.distance(o).light_years == 0.0
    assert _degrees(star.equatorial_j2000(o)) == pytest.approx((10.0, 20.0))


def test_distance_from_parallax() -> None:
    """One arcsecond of parallax is one parsec."""

    assert distance_from_parallax(1000.0).light_years == pytest.approx(3.26156, abs=1e-5)
    assert distance_from_parallax(0.0).light_years == 0.0


def test_nebula_designations_and_name() -> None:
    """Names come first, then catalog designations in catalog order."""

    andromeda = Nebula(id='40', m=31, ngc=224, pgc=2557, ugc=454, names=('Andromeda Galaxy',))
    unnamed = Nebula(id='1000', ic=434, ldn=1630, pk='')

    assert andromeda.name == 'Andromeda Galaxy'
    assert andromeda.designations() == ['M 31', 'NGC 224', 'PGC 2557', 'UGC 454']
    assert unnamed.name == 'IC 434'
    assert Nebula(id='7').name == '7'
    assert Nebula(id='8', png='064.7+05.0').designations() == ['PN G 064.7+05.0']


def test_nebula_position_and_type(system: SolarSystem) -> None:
    """Nebulae share the deep-sky coordinate derivations."""

    o = local_observer(system, 2021, 8, 5, 15)
    galaxy = Nebula(
        id='4565',
        ngc=4565,
        ra=NGC_4565.ra,
        dec=NGC_4565.dec,
        mag_b=13.61,
        mag_v=12.43,
        nebula_type=NebulaType.GALAXY,
    )

    assert galaxy.nebula_type.value == 0
    assert NebulaType.UNKNOWN.value == 34
    assert _degrees(galaxy.equatorial(o)) == pytest.approx(_degrees(NGC_4565.equatorial(o)))
    assert galaxy.visual_magnitude(o) == pytest.approx(12.43)
