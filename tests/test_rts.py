"""Tests for rise, transit and set times."""

from __future__ import annotations

import math

import pytest
from conftest import local_observer

from ephemeris_engine.bodies import SolarSystem
from ephemeris_engine.rts import CIRCUMPOLAR, NEVER_RISES, RiseTransitSet
from ephemeris_engine.stars import DeepSky
from ephemeris_engine.units import Angle

SOUTHERN = DeepSky(ra=Angle.from_hours(6.0), dec=Angle.from_degrees(-80.0), name='southern')
NORTHERN = DeepSky(ra=Angle.from_hours(6.0), dec=Angle.from_degrees(80.0), name='northern')
EQUATORIAL = DeepSky(ra=Angle.from_hours(6.0), dec=Angle.from_degrees(0.0), name='equatorial')


def test_circumpolar_object(system: SolarSystem) -> None:
    """A star near the south celestial pole never sets at -22.5°."""

    o = local_observer(system, 2021, 8, 5, 15)

    rts = SOUTHERN.rts(o)

    assert rts.is_circumpolar
    assert rts.rise == CIRCUMPOLAR
    assert rts.set == CIRCUMPOLAR
    assert 0.0 <= rts.transit < 24.0


def test_object_that_never_rises(system: SolarSystem) -> None:
    """A star near the north celestial pole stays below the horizon."""

    o = local_observer(system, 2021, 8, 5, 15)

    rts = NORTHERN.rts(o)

    assert rts.never_rises
    assert rts.rise == NEVER_RISES
    assert not rts.is_circumpolar


def test_equatorial_object_is_up_half_a_day(system: SolarSystem) -> None:
    """On the celestial equator the arc is half a day scaled by the solar to sidereal ratio."""

    o = local_observer(system, 2021, 8, 5, 15)

    rise, transit, set_ = EQUATORIAL.rts(o, has_atmosphere=False)

    assert (transit - rise) % 24.0 == pytest.approx((set_ - transit) % 24.0, abs=1e-9)
    assert (set_ - rise) % 24.0 == pytest.approx(12.0 * 1.0027379, abs=0.01)


def test_refraction_lengthens_the_day(system: SolarSystem) -> None:
    """With an atmosphere the object rises earlier and sets later."""

    o = local_observer(system, 2021, 8, 5, 15)

    with_air = EQUATORIAL.rts(o)
    vacuum = EQUATORIAL.rts(o, has_atmosphere=False)

    assert with_air.transit == pytest.approx(vacuum.transit)
    assert (with_air.set - with_air.rise) % 24.0 > (vacuum.set - vacuum.rise) % 24.0
    assert math.degrees(EQUATORIAL.horizon_altitude(o)) == pytest.approx(-0.564, abs=0.02)
    assert EQUATORIAL.horizon_altitude(o, has_atmosphere=False) == 0.0


def test_transit_follows_sidereal_time(system: SolarSystem) -> None:
    """Transit moves about four minutes earlier each day."""

    today = EQUATORIAL.rts(local_observer(system, 2021, 8, 5, 15)).transit
    tomorrow = EQUATORIAL.rts(local_observer(system, 2021, 8, 6, 15)).transit

    assert (today - tomorrow) * 60.0 == pytest.approx(3.93, abs=0.1)


def test_rise_transit_set_tuple() -> None:
    """The result unpacks like a plain tuple."""

    rts = RiseTransitSet(1.0, 7.0, 13.0)

    assert tuple(rts) == (1.0, 7.0, 13.0)
    assert not rts.is_circumpolar
    assert not rts.never_rises
