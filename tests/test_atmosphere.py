"""Tests for refraction, airmass and extinction."""

from __future__ import annotations

import math

import pytest

from ephemeris_engine.atmosphere import Extinction, Refraction, airmass
from ephemeris_engine.geometry import spherical_to_rectangular
from ephemeris_engine.vec_math import Vector3


def _altitude(v: Vector3) -> float:
    return math.degrees(v.latitude())


@pytest.mark.parametrize(
    ('zenith', 'expected'),
    [
        (0.0, 1.0),
        (10.0, 1.02),
        (20.0, 1.06),
        (30.0, 1.15),
        (40.0, 1.30),
        (50.0, 1.55),
        (60.0, 2.0),
        (70.0, 2.90),
        (80.0, 5.60),
    ],
)
def test_airmass(zenith: float, expected: float) -> None:
    """Rozenberg airmass for apparent zenith angles."""

    assert airmass(math.cos(math.radians(zenith))) == pytest.approx(expected, abs=0.05)


def test_airmass_geometric_zenith() -> None:
    """Young's formula is 1 at the zenith and grows toward the horizon."""

    assert airmass(1.0, apparent_z=False) == pytest.approx(1.0, abs=1e-3)
    assert airmass(0.5, apparent_z=False) > airmass(0.9, apparent_z=False)


def test_airmass_below_horizon_is_bounded() -> None:
    """Negative altitudes are reflected instead of diverging."""

    assert math.isfinite(airmass(-0.5))
    assert airmass(-0.5) == pytest.approx(airmass(0.43))


def test_extinction() -> None:
    """Extinction adds k magnitudes per airmass."""

    extinction = Extinction(0.25)
    zenith = Vector3(0.0, 0.0, 1.0)

    assert extinction.forward(zenith, 2.0) == pytest.approx(2.25, abs=1e-3)
    assert extinction.backward(zenith, 2.25) == pytest.approx(2.0, abs=1e-3)
    low = spherical_to_rectangular(0.0, math.radians(20.0))
    assert extinction.forward(low, 2.0) > extinction.forward(zenith, 2.0)


def test_refraction_lifts_objects() -> None:
    """About one arcminute at 45°, about half a degree at the horizon."""

    refraction = Refraction(1013.0, 15.0)

    at_45 = refraction.forward(spherical_to_rectangular(1.0, math.radians(45.0)))
    at_0 = refraction.forward(spherical_to_rectangular(1.0, 0.0))

    assert _altitude(at_45) == pytest.approx(45.0167, abs=1e-3)
    assert _altitude(at_0) == pytest.approx(0.476, abs=0.01)
    assert at_45.longitude() == pytest.approx(1.0)


@pytest.mark.parametrize('altitude', [5.0, 10.0, 30.0, 60.0, 85.0])
def test_refraction_round_trip(altitude: float) -> None:
    """Bennett undoes Saemundsson to well below an arcsecond-level error budget."""

    refraction = Refraction(1013.0, 15.0)
    geometric = spherical_to_rectangular(0.3, math.radians(altitude)) * 2.0

    apparent = refraction.forward(geometric)
    back = refraction.backward(apparent)

    assert apparent.length() == pytest.approx(2.0)
    assert _altitude(back) == pytest.approx(altitude, abs=5e-3)


def test_refraction_ignores_deep_negative_altitudes() -> None:
    """Far below the horizon the direction is unchanged."""

    refraction = Refraction(1013.0, 15.0)
    below = spherical_to_rectangular(0.0, math.radians(-10.0))

    assert refraction.forward(below) == below
    assert refraction.backward(below) == below
    assert refraction.forward(Vector3()) == Vector3()


def test_refraction_scales_with_pressure() -> None:
    """Thin air refracts less."""

    direction = spherical_to_rectangular(0.0, math.radians(10.0))

    sea_level = _altitude(Refraction(1013.0, 15.0).forward(direction))
    mountain = _altitude(Refraction(600.0, 15.0).forward(direction))

    assert 10.0 < mountain < sea_level
    assert Refraction(1010.0, 10.0).ptc == pytest.approx(1.0 / 60.0)
