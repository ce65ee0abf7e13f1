"""Tests for calendar conversion, Julian Day helpers and leap-second setup."""

from __future__ import annotations

import logging

import pytest

from ephemeris_engine import time_utils
from ephemeris_engine.time_utils import (
    CalendarDate,
    JulianDay,
    Period,
    calendar_from_jd,
    day_in_year,
    days_in_month,
    is_leap_year,
    jd_from_calendar,
    year_as_fraction,
)


def _patch_julian(
    monkeypatch: pytest.MonkeyPatch, path: str | None, fail: set[str | None]
) -> list[tuple[str, str | None]]:
    calls: list[tuple[str, str | None]] = []

    def _set_ut_model(model: str, future: object = None) -> None:
        del future
        calls.append(('set_ut_model', model))

    def _load_lsk(lsk_path: str | None = None) -> None:
        calls.append(('load_lsk', lsk_path))
        if lsk_path in fail:
            raise FileNotFoundError(lsk_path)

    monkeypatch.setattr('julian.set_ut_model', _set_ut_model)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('ephemeris_engine.time_utils.get_leapsecs_path', lambda: path)
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)
    return calls


def test_ensure_leapsecs_falls_back_to_bundled_lsk(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A missing LSK file falls back to the rms-julian bundled one, once."""

    calls = _patch_julian(monkeypatch, '/missing.tls', fail={'/missing.tls'})

    with caplog.at_level(logging.INFO, logger='ephemeris_engine.time_utils'):
        time_utils._ensure_leapsecs()
        time_utils._ensure_leapsecs()

    assert calls == [
        ('set_ut_model', 'SPICE'),
        ('load_lsk', '/missing.tls'),
        ('load_lsk', None),
    ]
    assert time_utils._leapsecs_loaded
    assert "'/missing.tls' not used" in caplog.text


def test_ensure_leapsecs_without_configured_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """With JULIAN_LEAPSECS unset only the bundled LSK is loaded."""

    calls = _patch_julian(monkeypatch, None, fail=set())

    time_utils._ensure_leapsecs()

    assert calls == [('set_ut_model', 'SPICE'), ('load_lsk', None)]


def test_ensure_leapsecs_reraises_when_bundled_lsk_fails(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """If the fallback fails too the error propagates and nothing is marked loaded."""

    _patch_julian(monkeypatch, '/missing.tls', fail={'/missing.tls', None})

    with caplog.at_level(logging.ERROR, logger='ephemeris_engine.time_utils'):
        with pytest.raises(FileNotFoundError):
            time_utils._ensure_leapsecs()

    assert not time_utils._leapsecs_loaded
    assert 'bundled LSK failed' in caplog.text


def test_from_string_loads_leapsecs_first(monkeypatch: pytest.MonkeyPatch) -> None:
    """Parsing a date string goes through the leap-second setup."""

    calls: list[str] = []
    monkeypatch.setattr(time_utils, '_ensure_leapsecs', lambda: calls.append('leapsecs'))

    JulianDay.from_string('2022-08-18T00:01:47')

    assert calls == ['leapsecs']


def test_jd_from_calendar_with_utc_offset() -> None:
    """09:00 at UTC-3 is noon UTC."""

    assert jd_from_calendar(2021, 2, 5, 9, utc_offset=-3.0) == pytest.approx(2459251.0)
    assert jd_from_calendar(2000, 1, 1, 12) == pytest.approx(2451545.0)
    assert jd_from_calendar(1582, 10, 15) == pytest.approx(2299160.5)
    assert jd_from_calendar(1582, 10, 4) == pytest.approx(2299159.5)


def test_calendar_from_jd() -> None:
    """Julian Day back to calendar fields."""

    assert calendar_from_jd(2459251.0) == CalendarDate(2021, 2, 5, 12, 0, 0, 0)
    assert calendar_from_jd(2451544.5) == CalendarDate(2000, 1, 1, 0, 0, 0, 0)
    assert calendar_from_jd(jd_from_calendar(-500, 3, 1, 6, 30)) == CalendarDate(-500, 3, 1, 6, 30, 0, 0)


def test_calendar_helpers() -> None:
    """Leap years, day numbers and month lengths."""

    assert is_leap_year(1500)
    assert is_leap_year(2000)
    assert not is_leap_year(2100)
    assert is_leap_year(2020)
    assert day_in_year(2019, 3, 10) == 69
    assert day_in_year(2020, 3, 10) == 70
    assert year_as_fraction(2019, 1, 31) == pytest.approx(2019.08493, abs=1e-4)
    assert days_in_month(2020, 2) == 29
    assert days_in_month(2019, 2) == 28
    assert days_in_month(2020, 0) == 31
    assert days_in_month(2020, 13) == 31


def test_julian_day_arithmetic() -> None:
    """Adding days, subtracting instants and advancing by named periods."""

    jd = JulianDay.from_date(2021, 2, 5, 9, utc_offset=-3.0)

    assert float(jd) == pytest.approx(2459251.0)
    assert (jd + 1.5).value == pytest.approx(2459252.5)
    assert (jd + 2.0) - jd == pytest.approx(2.0)
    assert jd.mjd == pytest.approx(59250.5)
    assert jd.add_synodic_months(1).value == pytest.approx(2459251.0 + 29.530588853)
    assert jd.advance(Period.JULIAN_YEAR, -2).value == pytest.approx(2459251.0 - 730.5)
    assert jd.to_calendar() == CalendarDate(2021, 2, 5, 12, 0, 0, 0)


def test_julian_day_from_unix_and_besselian_epoch() -> None:
    """Unix epoch and the B1950 epoch."""

    assert JulianDay.from_unix(0.0).value == pytest.approx(2440587.5)
    assert JulianDay.from_besselian_epoch(1950.0).value == pytest.approx(2433282.4235, abs=1e-3)


def test_julian_day_from_string_accepts_iso_z_suffix() -> None:
    """ISO-8601 trailing Z parses as UTC like the same timestamp without Z."""

    with_z = JulianDay.from_string('2022-08-18T00:01:47Z')
    without_z = JulianDay.from_string('2022-08-18T00:01:47')

    assert with_z == without_z
    assert with_z.value == pytest.approx(jd_from_calendar(2022, 8, 18, 0, 1, 47), abs=1e-8)


def test_julian_day_from_string_rejects_garbage() -> None:
    """Unparseable text raises ValueError."""

    with pytest.raises(ValueError, match='Invalid date/time'):
        JulianDay.from_string('not a date')
