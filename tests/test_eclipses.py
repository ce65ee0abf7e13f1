"""Tests for lunar and solar eclipse geometry and the lunar phase."""

from __future__ import annotations

import math

import pytest
from conftest import RANGPUR, local_observer

from ephemeris_engine.bodies import SolarSystem
from ephemeris_engine.bodies.planet import Planet
from ephemeris_engine.eclipses import (
    NO_LUNAR_ECLIPSE,
    EclipseType,
    LunarEclipse,
    LunarPhase,
    SolarEclipse,
    lunar_eclipse,
    lunar_phase,
    moon_age,
    solar_eclipse,
)
from ephemeris_engine.observer import Observer
from ephemeris_engine.units import Angle
from ephemeris_engine.vec_math import Pair

BST = 6.0


def test_total_lunar_eclipse(system: SolarSystem) -> None:
    """Mid-eclipse of 2022-05-16 seen from Brazil."""

    o = local_observer(system, 2022, 5, 16, 1, 11, 20)

    eclipse = lunar_eclipse(o)
    moon = Planet(system, 'Moon').horizontal(o, apparent=False)

    assert eclipse.penumbral_magnitude == pytest.approx(2.37272, abs=0.02)
    assert eclipse.umbral_magnitude == pytest.approx(1.41382, abs=0.02)
    assert eclipse.is_eclipsing
    assert eclipse.eclipse_type is EclipseType.TOTAL
    assert lunar_phase(o) is LunarPhase.FULL_MOON
    assert moon.az.degrees == pytest.approx(277.2745, abs=0.05)
    assert moon.alt.degrees == pytest.approx(72.3696, abs=0.05)


def test_no_lunar_eclipse_before_contact(system: SolarSystem) -> None:
    """Hours before the penumbral contact nothing is eclipsed."""

    o = local_observer(system, 2022, 5, 15, 22, 31)

    eclipse = lunar_eclipse(o)

    assert not eclipse.is_eclipsing
    assert eclipse.eclipse_type is EclipseType.NONE


def test_no_lunar_eclipse_away_from_full_moon(observer: Observer) -> None:
    """Away from opposition the default result is returned."""

    assert lunar_eclipse(observer) == NO_LUNAR_ECLIPSE


def test_lunar_eclipse_types() -> None:
    """Umbral magnitude above 1 is total, below is partial umbral, then penumbral."""

    assert LunarEclipse(1.5, 0.4).eclipse_type is EclipseType.UMBRAL
    assert LunarEclipse(0.7, 0.0).eclipse_type is EclipseType.PENUMBRAL
    assert LunarEclipse().eclipse_type is EclipseType.NONE


def test_total_solar_eclipse_obscuration(system: SolarSystem) -> None:
    """The 2009-07-22 total eclipse seen from Rangpur."""

    def at(hour: int, minute: int) -> float:
        o = local_observer(system, 2009, 7, 22, hour, minute, 28, location=RANGPUR, utc_offset=BST)
        return o.eclipse_obscuration()

    assert at(6, 57) > 99.0
    assert at(6, 37) == pytest.approx(61.73, abs=2.0)
    assert at(5, 57) == 0.0


def test_sun_dimmed_during_eclipse(system: SolarSystem) -> None:
    """The Sun's magnitude rises as the Moon covers it."""

    partial = local_observer(system, 2009, 7, 22, 6, 37, 28, location=RANGPUR, utc_offset=BST)
    maximum = local_observer(system, 2009, 7, 22, 6, 57, 28, location=RANGPUR, utc_offset=BST)
    sun = Planet(system, 'Sun')

    position = sun.horizontal(maximum, apparent=False)

    assert sun.visual_magnitude(partial, moon='Moon') > sun.visual_magnitude(partial) + 0.5
    assert position.az.degrees == pytest.approx(75.3662, abs=0.05)
    assert position.alt.degrees == pytest.approx(17.2680, abs=0.05)


def test_solar_eclipse_center_line(system: SolarSystem) -> None:
    """The center line passes close to the site at maximum."""

    o = local_observer(system, 2009, 7, 22, 6, 57, 28, location=RANGPUR, utc_offset=BST)

    eclipse = solar_eclipse(o)

    assert eclipse is not None
    assert math.degrees(eclipse.position.x) == pytest.approx(87.079, abs=0.3)
    assert math.degrees(eclipse.position.y) == pytest.approx(25.9876, abs=0.3)
    assert eclipse.magnitude == pytest.approx(1.033, abs=0.01)
    assert eclipse.eclipse_type is EclipseType.TOTAL
    assert eclipse.distance_km < 50.0


def test_solar_eclipse_outside_conjunction(observer: Observer) -> None:
    """No center line away from new moon."""

    assert solar_eclipse(observer) is None


def test_solar_eclipse_annular_type() -> None:
    """A magnitude below 1 is annular."""

    eclipse = SolarEclipse(Pair(0.0, 0.0), 0.97, 0.0, Angle(0.0))

    assert eclipse.eclipse_type is EclipseType.ANNULAR


@pytest.mark.parametrize(
    ('fields', 'phase', 'age'),
    [
        ((2021, 2, 19, 15), LunarPhase.FIRST_QUARTER, 7.4),
        ((2021, 2, 20, 21), LunarPhase.WAXING_GIBBOUS, 8.5),
        ((2021, 2, 27, 5), LunarPhase.FULL_MOON, 14.8),
        ((2021, 3, 5, 23), LunarPhase.THIRD_QUARTER, 22.2),
    ],
)
def test_lunar_phase_and_age(
    system: SolarSystem, fields: tuple[int, ...], phase: LunarPhase, age: float
) -> None:
    """Named phase and age in days since new moon."""

    o = local_observer(system, *fields)

    assert lunar_phase(o) is phase
    assert moon_age(o) == pytest.approx(age, abs=0.1)
