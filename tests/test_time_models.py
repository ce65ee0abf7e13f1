"""Tests for ΔT models, sidereal time, precession and nutation."""

from __future__ import annotations

import math

import pytest

from ephemeris_engine import delta_t, nutation, precession, sidereal
from ephemeris_engine.constants import J2000
from ephemeris_engine.delta_t import TimeCorrection
from ephemeris_engine.time_utils import jd_from_calendar
from ephemeris_engine.units import Angle


@pytest.mark.parametrize(
    ('year', 'expected', 'tolerance'),
    [
        (-500, 17190.0, 430.0),
        (0, 10580.0, 260.0),
        (1000, 1570.0, 55.0),
        (1600, 120.0, 20.0),
        (1800, 14.0, 1.0),
        (1900, -3.0, 1.0),
        (1950, 29.0, 0.1),
        (1980, 50.5, 0.1),
        (2000, 63.8, 0.1),
    ],
)
def test_espenak_meeus(year: int, expected: float, tolerance: float) -> None:
    """Five Millennium Canon ΔT against tabulated values."""

    jd = jd_from_calendar(year, 1, 1)

    assert delta_t.espenak_meeus(jd) == pytest.approx(expected, abs=tolerance)


@pytest.mark.parametrize(
    ('year', 'expected'),
    [(1619, 0.0), (1974, 44.49), (1985, 54.34), (1999, 64.00), (2001, 0.0)],
)
def test_meeus_simons(year: int, expected: float) -> None:
    """Meeus-Simons ΔT is zero outside 1620-2000."""

    jd = jd_from_calendar(year, 1, 1)

    assert delta_t.meeus_simons(jd) == pytest.approx(expected, abs=1.0)


def test_time_correction_members() -> None:
    """The lunar secular term is applied unless the model opts out."""

    jd = jd_from_calendar(1700, 1, 1)
    base = TimeCorrection.ESPENAK_MEEUS.compute(jd)

    assert TimeCorrection.NONE.delta_t(jd) == 0.0
    assert TimeCorrection.ESPENAK_MEEUS_ZERO_MOON_ACCEL.delta_t(jd) == base
    assert TimeCorrection.ESPENAK_MEEUS.delta_t(jd) == pytest.approx(
        base + delta_t.moon_secular_acceleration(jd, -25.858)
    )
    assert TimeCorrection.ESPENAK_MEEUS.delta_t(jd) != base


def test_moon_secular_acceleration_vanishes_in_1955() -> None:
    """The correction is centered on 1955.5."""

    jd = jd_from_calendar(1955, 7, 2)

    assert delta_t.moon_secular_acceleration(jd, -25.858) == pytest.approx(0.0, abs=1e-3)


@pytest.mark.parametrize(
    ('jd', 'hours', 'minutes', 'seconds'),
    [
        (2430360.5, 6.0, 40.0, 3.137),
        (2448988.5, 6.0, 42.0, 36.7508),
        (2449292.5, 2.0, 41.0, 9.5825),
        (2457844.5, 12.0, 38.0, 11.0891),
        (2457966.5, 20.0, 39.0, 10.8440),
    ],
)
def test_greenwich_mean_sidereal_time(jd: float, hours: float, minutes: float, seconds: float) -> None:
    """Mean sidereal time at 0h UT against almanac values."""

    jde = jd + delta_t.espenak_meeus(jd) / 86400.0
    expected = hours + minutes / 60.0 + seconds / 3600.0

    assert sidereal.compute_mean(jd, jde).hours == pytest.approx(expected, abs=2e-4)


def test_mean_sidereal_time_at_j2000() -> None:
    """GMST at the J2000 epoch from the 24110.5493771 s constant term."""

    gmst = sidereal.compute_mean(J2000, J2000)

    assert isinstance(gmst, Angle)
    assert gmst.degrees == pytest.approx(280.4606224, abs=1e-6)


@pytest.mark.parametrize(
    ('jd', 'hours', 'minutes', 'seconds'),
    [
        (2457844.5, 12.0, 38.0, 10.5428),
        (2457905.5, 16.0, 38.0, 40.3712),
        (2457966.5, 20.0, 39.0, 10.2937),
    ],
)
def test_greenwich_apparent_sidereal_time(
    jd: float, hours: float, minutes: float, seconds: float
) -> None:
    """Apparent sidereal time includes the equation of the equinoxes."""

    jde = jd + delta_t.espenak_meeus(jd) / 86400.0
    expected = hours + minutes / 60.0 + seconds / 3600.0

    assert sidereal.compute_apparent(jd, jde).hours % 24.0 == pytest.approx(expected, abs=2e-4)


def test_mean_obliquity_at_j2000() -> None:
    """Vondrák obliquity reproduces ε0 = 84381.406″."""

    assert precession.mean_obliquity_degrees(J2000) * 3600.0 == pytest.approx(84381.406, abs=0.5)


def test_precession_accumulates() -> None:
    """General precession in longitude is about 50″ per year."""

    start = precession.compute_vondrak(J2000)
    century = precession.compute_vondrak(J2000 + 36525.0)

    assert math.degrees(century.psi - start.psi) * 3600.0 == pytest.approx(5038.5, abs=5.0)


def test_nutation_amplitude() -> None:
    """Nutation stays within its principal term's amplitude."""

    for day in range(0, 6800, 400):
        nut = nutation.compute(J2000 + day)
        assert abs(math.degrees(nut.delta_psi) * 3600.0) < 20.0
        assert abs(math.degrees(nut.delta_epsilon) * 3600.0) < 10.5
