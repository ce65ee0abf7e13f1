"""ΔT (TT - UT1) models and the lunar secular-acceleration correction."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from ephemeris_engine.constants import DAYS_PER_CENTURY, J2000
from ephemeris_engine.time_utils import calendar_from_jd, year_as_fraction


def _fractional_year(jd: float) -> float:
    date = calendar_from_jd(jd)
    return year_as_fraction(date.year, date.month, date.day)


def espenak_meeus(jd: float) -> float:
    """ΔT in seconds from the Five Millennium Canon polynomials (Espenak & Meeus 2006)."""
    y = _fractional_year(jd)
    u = (y - 1820.0) / 100.0
    r = -20.0 + 32.0 * u * u

    if y < -500:
        return r
    if y < 500:
        u = y / 100.0
        return (
            ((((0.0090316521 * u + 0.022174192) * u - 0.1798452) * u - 5.952053) * u + 33.78311)
            * u
            - 1014.41
        ) * u + 10583.6
    if y < 1600:
        u = (y - 1000.0) / 100.0
        return (
            ((((0.0083572073 * u - 0.005050998) * u - 0.8503463) * u + 0.319781) * u + 71.23472)
            * u
            - 556.01
        ) * u + 1574.2
    if y < 1700:
        t = y - 1600.0
        return ((t / 7129.0 - 0.01532) * t - 0.9808) * t + 120.0
    if y < 1800:
        t = y - 1700.0
        return (((-t / 1174000.0 + 0.00013336) * t - 0.0059285) * t + 0.1603) * t + 8.83
    if y < 1860:
        t = y - 1800.0
        p = 0.000000000875 * t - 0.0000001699
        p = p * t + 0.0000121272
        p = p * t - 0.00037436
        p = p * t + 0.0041116
        p = p * t + 0.0068612
        p = p * t - 0.332447
        return p * t + 13.72
    if y < 1900:
        t = y - 1860.0
        return (
            (((t / 233174.0 - 0.0004473624) * t + 0.01680668) * t - 0.251754) * t + 0.5737
        ) * t + 7.62
    if y < 1920:
        t = y - 1900.0
        return (((-0.000197 * t + 0.0061966) * t - 0.0598939) * t + 1.494119) * t - 2.79
    if y < 1941:
        t = y - 1920.0
        return ((0.0020936 * t - 0.076100) * t + 0.84493) * t + 21.20
    if y < 1961:
        t = y - 1950.0
        return ((t / 2547.0 - 1.0 / 233.0) * t + 0.407) * t + 29.07
    if y < 1986:
        t = y - 1975.0
        return ((-t / 718.0 - 1.0 / 260.0) * t + 1.067) * t + 45.45
    if y < 2005:
        t = y - 2000.0
        return (
            (((0.00002373599 * t + 0.000651814) * t + 0.0017275) * t - 0.060374) * t + 0.3345
        ) * t + 63.86
    if y < 2050:
        t = y - 2000.0
        return (0.005589 * t + 0.32217) * t + 62.92
    if y < 2150:
        # Patch the discontinuity with the long-term parabola.
        return r - 0.5628 * (2150.0 - y)
    return r


def meeus_simons(jd: float) -> float:
    """ΔT in seconds from Meeus & Simons (2000); 0 outside 1620-2000."""
    year = calendar_from_jd(jd).year
    ub = (jd - J2000) / DAYS_PER_CENTURY

    if year < 1620:
        return 0.0
    if year < 1690:
        u = 3.45 + ub
        return (((1244.0 * u - 454.0) * u + 50.0) * u - 107.0) * u + 40.3
    if year < 1770:
        u = 2.70 + ub
        return (((70.0 * u - 16.0) * u - 1.0) * u + 11.3) * u + 10.2
    if year < 1820:
        u = 2.05 + ub
        return (((6.0 * u + 173.0) * u - 22.0) * u - 18.8) * u + 14.7
    if year < 1870:
        u = 1.55 + ub
        return (((-1654.0 * u - 534.0) * u + 111.0) * u + 12.7) * u + 5.7
    if year < 1900:
        u = 1.15 + ub
        return (((8234.0 * u + 101.0) * u + 27.0) * u - 14.6) * u - 5.8
    if year < 1940:
        u = 0.80 + ub
        return (((4441.0 * u + 19.0) * u - 443.0) * u + 67.0) * u + 21.4
    if year < 1990:
        u = 0.35 + ub
        return (((-1883.0 * u - 140.0) * u + 189.0) * u + 74.0) * u + 36.2
    if year <= 2000:
        u = 0.05 + ub
        return ((-5034.0 * u - 188.0) * u + 82.0) * u + 60.8
    return 0.0


def _no_correction(jd: float) -> float:
    return 0.0


def moon_secular_acceleration(jd: float, n_dot: float, use_de43x: bool = False) -> float:
    """Correction in seconds for a lunar n-dot other than the ephemeris' own.

    Parameters:
        jd: Julian Day.
        n_dot: Secular acceleration of the Moon ("/cy²) assumed by the ΔT model.
        use_de43x: Adapt to the DE43x value (-25.8) instead of ELP2000-82B (-23.8946).

    Returns:
        Seconds to add to ΔT.
    """
    t = (_fractional_year(jd) - 1955.5) / 100.0
    eph_n_dot = -25.8 if use_de43x else -23.8946
    return -0.91072 * (eph_n_dot + abs(n_dot)) * t * t


class TimeCorrection(Enum):
    """Selectable ΔT model: (n-dot, first year, last year, skip lunar term)."""

    NONE = ('none', -26.0, None, None, True)
    MEEUS_SIMONS = ('meeus_simons', -25.7376, 1620, 2000, False)
    ESPENAK_MEEUS = ('espenak_meeus', -25.858, -1999, 3000, False)
    ESPENAK_MEEUS_ZERO_MOON_ACCEL = ('espenak_meeus', -25.858, -1999, 3000, True)

    def __init__(
        self,
        model: str,
        n_dot: float,
        start_year: int | None,
        finish_year: int | None,
        dont_use_moon: bool,
    ) -> None:
        self.model = model
        self.n_dot = n_dot
        self.start_year = start_year
        self.finish_year = finish_year
        self.dont_use_moon = dont_use_moon

    def compute(self, jd: float) -> float:
        """Model ΔT in seconds, without the lunar correction."""
        return _MODELS[self.model](jd)

    def delta_t(self, jd: float) -> float:
        """ΔT in seconds including the lunar correction unless the model opts out."""
        value = self.compute(jd)
        if not self.dont_use_moon:
            value += moon_secular_acceleration(jd, self.n_dot)
        return value


_MODELS: dict[str, Callable[[float], float]] = {
    'none': _no_correction,
    'meeus_simons': meeus_simons,
    'espenak_meeus': espenak_meeus,
}
