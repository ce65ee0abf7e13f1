"""Shared fixtures: the built-in solar system and two observing sites."""

from __future__ import annotations

import pytest

from ephemeris_engine.bodies import SolarSystem, build_solar_system
from ephemeris_engine.observer import Location, Observer
from ephemeris_engine.time_utils import JulianDay

PICO_DOS_DIAS = Location.from_degrees(-22.534444, -45.5825, 1864.0, 'Pico dos Dias Observatory - BR')
RANGPUR = Location.from_degrees(25.9896, 87.0868, 14.0, 'Rangpur - BD')

BRT = -3.0


@pytest.fixture(scope='module')
def system() -> SolarSystem:
    return build_solar_system()


def local_observer(
    system: SolarSystem,
    *fields: int,
    location: Location = PICO_DOS_DIAS,
    utc_offset: float = BRT,
    **config: object,
) -> Observer:
    """Observer at local calendar time ``fields`` (year, month, day, hour, ...)."""
    jd = JulianDay.from_date(*fields, utc_offset=utc_offset)
    o = Observer(system, location, jd, utc_offset=utc_offset)
    if config:
        o = o.with_config(**config)
    return o


@pytest.fixture(scope='module')
def observer(system: SolarSystem) -> Observer:
    """Pico dos Dias, 2021-02-05 09:00 local (JD 2459251.0)."""
    return local_observer(system, 2021, 2, 5, 9)
