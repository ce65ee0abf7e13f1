"""Tests for constellation identification."""

from __future__ import annotations

import math

import pytest
from conftest import local_observer
from test_stars import BARNARDS_STAR, NGC_4565

from ephemeris_engine.bodies import SolarSystem
from ephemeris_engine.bodies.planet import Planet
from ephemeris_engine.constellations import (
    Constellation,
    boundaries,
    find_b1875,
    j2000_to_b1875,
)
from ephemeris_engine.observer import Observer
from ephemeris_engine.vec_math import IDENTITY, Vector3


def test_constellation_names() -> None:
    """Each member carries its Latin name, abbreviation and genitive."""

    assert len(Constellation) == 88
    assert Constellation.CAP.latin_name == 'Capricornus'
    assert Constellation.CVN.iau == 'CVn'
    assert Constellation.UMA.genitive == 'Ursae Majoris'
    assert Constellation.COM.description == "Berenice's hair"


def test_boundary_table() -> None:
    """Spans are sorted north to south and cover every constellation."""

    spans = boundaries()
    decs = [span.dec_low for span in spans]

    assert len(spans) == 357
    assert decs == sorted(decs, reverse=True)
    assert {span.constellation for span in spans} == set(Constellation)
    assert all(0.0 <= span.ra_low < span.ra_high <= 24.0 for span in spans)
    assert spans[-1].dec_low == -90.0


@pytest.mark.parametrize(
    ('ra_hours', 'dec_deg', 'expected'),
    [
        (0.0, 89.5, Constellation.UMI),
        (12.0, -89.5, Constellation.OCT),
        (5.5, 0.0, Constellation.ORI),
        (6.75, -16.7, Constellation.CMA),
        (13.4, 54.9, Constellation.UMA),
        (0.7, 41.3, Constellation.AND),
    ],
)
def test_find_b1875(ra_hours: float, dec_deg: float, expected: Constellation) -> None:
    """Direct lookup on B1875.0 coordinates."""

    assert find_b1875(ra_hours, dec_deg) is expected


def test_find_b1875_rejects_impossible_declination() -> None:
    """Nothing lies south of the south pole."""

    with pytest.raises(ValueError, match='No constellation'):
        find_b1875(3.0, -91.0)


def test_j2000_to_b1875_is_a_small_rotation() -> None:
    """A proper rotation moving the pole by 125 years of precession."""

    m = j2000_to_b1875()
    pole = m @ Vector3(0.0, 0.0, 1.0)

    assert (m @ m.transpose()).is_close(IDENTITY)
    assert m.determinant() == pytest.approx(1.0)
    assert math.degrees(pole.angle(Vector3(0.0, 0.0, 1.0))) == pytest.approx(0.696, abs=0.02)


def test_sun_in_capricornus(system: SolarSystem, observer: Observer) -> None:
    """Early February the Sun is in Capricornus."""

    assert Planet(system, 'Sun').constellation(observer) is Constellation.CAP


@pytest.mark.parametrize(
    ('year', 'expected'),
    [
        (2021, Constellation.CAP),
        (2022, Constellation.AQR),
        (2023, Constellation.PSC),
        (2024, Constellation.ARI),
        (2025, Constellation.TAU),
        (2026, Constellation.GEM),
        (2027, Constellation.LEO),
        (2028, Constellation.VIR),
        (2030, Constellation.LIB),
        (2031, Constellation.OPH),
        (2032, Constellation.SGR),
        (2033, Constellation.CAP),
    ],
)
def test_jupiter_through_the_zodiac(system: SolarSystem, year: int, expected: Constellation) -> None:
    """Jupiter moves about one zodiacal constellation a year."""

    o = local_observer(system, year, 2, 5, 9)

    assert Planet(system, 'Jupiter').constellation(o) is expected


def test_deep_sky_and_stars(system: SolarSystem) -> None:
    """Fixed objects keep their constellation."""

    o = local_observer(system, 2021, 8, 5, 9)

    assert NGC_4565.constellation(o) is Constellation.COM
    assert BARNARDS_STAR.constellation(o) is Constellation.OPH
