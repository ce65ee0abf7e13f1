"""Julian Day value type, calendar conversion and period arithmetic.

Date strings are parsed with rms-julian; calendar fields use the
Gregorian/Julian switchover of 1582-10-15 and proleptic negative years.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import julian

from ephemeris_engine.config import get_leapsecs_path
from ephemeris_engine.constants import (
    MJD_OFFSET,
    SECONDS_PER_DAY,
    SYNODIC_MONTH_DAYS,
    UNIX_EPOCH_JD,
)

logger = logging.getLogger(__name__)

# JD of 2000-01-01 00:00 UTC; rms-julian counts days from this midnight.
_JD_OF_JULIAN_DAY_ZERO = 2451544.5

# First Julian day number of the Gregorian calendar (1582-10-15).
JD_GREG_CAL = 2299161

# 1582-10-15 encoded as day + 31 * (month + 12 * year).
_IGREG2 = 15 + 31 * (10 + 12 * 1582)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load leap seconds for rms-julian if not already loaded.

    Uses the LSK named by JULIAN_LEAPSECS when set; if that file is missing or
    not in LSK format, falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        if not path:
            raise FileNotFoundError('JULIAN_LEAPSECS not set')
        julian.load_lsk(path)
        _leapsecs_loaded = True
    except (OSError, KeyError, ValueError) as e:
        logger.info(
            'Leap seconds from %r not used (%s); using rms-julian bundled LSK.',
            path,
            e,
        )
        try:
            julian.load_lsk()
        except Exception as fallback_err:
            logger.error(
                'Fallback to rms-julian bundled LSK failed: %s',
                fallback_err,
                exc_info=True,
            )
            raise
        _leapsecs_loaded = True


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def is_leap_year(year: int) -> bool:
    """Gregorian rule after 1582, Julian rule before."""
    if year > 1582:
        if year % 400 == 0:
            return True
        if year % 100 == 0:
            return False
    return year % 4 == 0


def day_in_year(year: int, month: int, day: int) -> int:
    """Day number within the year (Meeus, Astronomical Algorithms ch. 7)."""
    k = 1 if is_leap_year(year) else 2
    return (275 * month) // 9 - k * ((month + 9) // 12) + day - 30


def year_as_fraction(year: int, month: int, day: int) -> float:
    """Fractional year such as 2019.08493 for 2019-01-31."""
    d = day_in_year(year, month, 0) + day
    days_in_year = 366.0 if is_leap_year(year) else 365.0
    return year + d / days_in_year


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month``; months 0 and 13 wrap into the adjacent year."""
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    if month in (4, 6, 9, 11):
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month == 0:
        return days_in_month(year - 1, 12)
    if month == 13:
        return days_in_month(year + 1, 1)
    return 0


class CalendarDate(NamedTuple):
    """Calendar fields decoded from a Julian Day (UTC)."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0


def jd_from_calendar(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
    utc_offset: float = 0.0,
) -> float:
    """Convert local calendar fields to a Julian Day.

    Parameters:
        year: Year; 0 is 1 BC, negative years are proleptic.
        month: Month 1-12.
        day: Day of month.
        hour: Hour 0-23.
        minute: Minute.
        second: Second.
        millisecond: Millisecond.
        utc_offset: Local offset from UTC in hours (e.g. -3 for UTC-3).

    Returns:
        Julian Day (UTC).
    """
    delta_time = (
        hour / 24.0
        + minute / 1440.0
        + second / SECONDS_PER_DAY
        + millisecond / (SECONDS_PER_DAY * 1000.0)
        - 0.5
    )
    jy = year
    if month > 2:
        jm = month + 1
    else:
        jy -= 1
        jm = month + 13
    laa = _tdiv(1461 * jy, 4)
    if jy < 0 and jy % 4 != 0:
        laa -= 1
    lbb = _tdiv(306001 * jm, 10000)
    ljul = laa + lbb + day + 1720995
    if day + 31 * (month + 12 * year) >= _IGREG2:
        lcc = _tdiv(jy, 100)
        if jy < 0 and jy % 100 != 0:
            lcc -= 1
        lee = _tdiv(lcc, 4)
        if lcc < 0 and lcc % 4 != 0:
            lee -= 1
        ljul += 2 - lcc + lee
    return (ljul + delta_time) - utc_offset / 24.0


def calendar_from_jd(jd: float) -> CalendarDate:
    """Decode a Julian Day into UTC calendar fields.

    Parameters:
        jd: Julian Day.

    Returns:
        CalendarDate with millisecond resolution.
    """
    jdn = math.floor(jd + 0.5)
    if jdn >= JD_GREG_CAL:
        jalpha = _tdiv(4 * (jdn - 1867216) - 1, 146097)
        ta = jdn + 1 + jalpha - _tdiv(jalpha, 4)
    elif jdn < 0:
        ta = jdn + 36525 * (1 - _tdiv(jdn, 36525))
    else:
        ta = jdn
    tb = ta + 1524
    tc = _tdiv(tb * 20 - 2442, 7305)
    td = 365 * tc + _tdiv(tc, 4)
    te = _tdiv((tb - td) * 10000, 306001)
    day = tb - td - _tdiv(306001 * te, 10000)
    month = te - 1
    if month > 12:
        month -= 12
    year = tc - 4715
    if month > 2:
        year -= 1
    if jdn < 0:
        year -= 100 * (1 - _tdiv(jdn, 36525))

    # Small constant absorbs floating-point truncation of whole seconds.
    secs = (jd - math.floor(jd)) * SECONDS_PER_DAY + 0.0001
    s = math.floor(secs)
    hour = (s // 3600 + 12) % 24
    minute = (s // 60) % 60
    second = s % 60
    millisecond = math.floor((secs - s) * 1000.0)
    return CalendarDate(year, month, day, hour, minute, second, millisecond)


class Period(Enum):
    """Named time periods, value in days."""

    SOLAR_DAY = 1.0
    SIDEREAL_DAY = 0.99726956633
    SYNODIC_MONTH = SYNODIC_MONTH_DAYS
    DRACONIC_MONTH = 27.212220817
    TROPICAL_MONTH = 27.321582241
    ANOMALISTIC_MONTH = 27.554549878
    SIDEREAL_YEAR = 365.256363004
    TROPICAL_YEAR = 365.2421897
    ANOMALISTIC_YEAR = 365.259636
    JULIAN_YEAR = 365.25
    SAROS = 6585.321347

    @property
    def days(self) -> float:
        return self.value


@dataclass(frozen=True, order=True)
class JulianDay:
    """Continuous day count (UT when used as an observation instant)."""

    value: float

    @classmethod
    def from_date(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        utc_offset: float = 0.0,
    ) -> JulianDay:
        """Build from local calendar fields and a UTC offset in hours."""
        return cls(
            jd_from_calendar(year, month, day, hour, minute, second, millisecond, utc_offset)
        )

    @classmethod
    def from_besselian_epoch(cls, epoch: float) -> JulianDay:
        return cls(MJD_OFFSET + (15019.81352 + (epoch - 1900.0) * 365.242198781))

    @classmethod
    def from_unix(cls, timestamp_ms: float) -> JulianDay:
        """Build from Unix time in milliseconds."""
        return cls(timestamp_ms / (SECONDS_PER_DAY * 1000.0) + UNIX_EPOCH_JD)

    @classmethod
    def now(cls) -> JulianDay:
        return cls.from_unix(time.time() * 1000.0)

    @classmethod
    def from_string(cls, string: str) -> JulianDay:
        """Parse a UTC date/time string with rms-julian.

        Parameters:
            string: Date/time string in any format rms-julian accepts; a
                trailing ISO ``Z`` is allowed.

        Returns:
            JulianDay of the parsed instant.

        Raises:
            ValueError: If rms-julian cannot parse the string.
        """
        _ensure_leapsecs()
        stripped = string.strip()
        candidates = [stripped]
        if stripped.endswith(('Z', 'z')):
            # rms-julian does not parse the ISO UTC suffix.
            candidates.append(stripped[:-1])
        for candidate in candidates:
            try:
                day, sec = julian.day_sec_from_string(candidate)[:2]
            except (ValueError, TypeError, LookupError) as e:
                logger.debug('rms-julian rejected %r: %s', candidate, e)
                continue
            return cls(_JD_OF_JULIAN_DAY_ZERO + int(day) + float(sec) / SECONDS_PER_DAY)
        raise ValueError(f'Invalid date/time string: {string!r}')

    @property
    def mjd(self) -> float:
        return self.value - MJD_OFFSET

    def to_calendar(self) -> CalendarDate:
        return calendar_from_jd(self.value)

    def __add__(self, days: float) -> JulianDay:
        return JulianDay(self.value + days)

    def __sub__(self, other: JulianDay | float) -> JulianDay | float:  # type: ignore[override]
        if isinstance(other, JulianDay):
            return self.value - other.value
        return JulianDay(self.value - other)

    def __float__(self) -> float:
        return self.value

    def advance(self, period: Period, n: float = 1.0) -> JulianDay:
        """Move ``n`` periods forward (backward for negative ``n``)."""
        return JulianDay(self.value + n * period.days)

    def add_solar_days(self, n: float) -> JulianDay:
        return self.advance(Period.SOLAR_DAY, n)

    def add_sidereal_days(self, n: float) -> JulianDay:
        return self.advance(Period.SIDEREAL_DAY, n)

    def add_synodic_months(self, n: float) -> JulianDay:
        return self.advance(Period.SYNODIC_MONTH, n)

    def add_draconic_months(self, n: float) -> JulianDay:
        return self.advance(Period.DRACONIC_MONTH, n)

    def add_tropical_months(self, n: float) -> JulianDay:
        return self.advance(Period.TROPICAL_MONTH, n)

    def add_anomalistic_months(self, n: float) -> JulianDay:
        return self.advance(Period.ANOMALISTIC_MONTH, n)

    def add_sidereal_years(self, n: float) -> JulianDay:
        return self.advance(Period.SIDEREAL_YEAR, n)

    def add_tropical_years(self, n: float) -> JulianDay:
        return self.advance(Period.TROPICAL_YEAR, n)

    def add_anomalistic_years(self, n: float) -> JulianDay:
        return self.advance(Period.ANOMALISTIC_YEAR, n)

    def add_julian_years(self, n: float) -> JulianDay:
        return self.advance(Period.JULIAN_YEAR, n)

    def add_saros(self, n: float) -> JulianDay:
        return self.advance(Period.SAROS, n)
