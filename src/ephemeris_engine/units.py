"""Immutable scalar unit types: Angle, Distance, Pressure, Temperature."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ephemeris_engine.angle_utils import dms_string, parse_angle_string
from ephemeris_engine.constants import (
    AU_M,
    DEGREES_PER_HOUR,
    LIGHT_YEAR_M,
    SPEED_OF_LIGHT_KM_S,
)
from ephemeris_engine.geometry import normalize_radians


@dataclass(frozen=True, order=True)
class Angle:
    """Angle stored in radians."""

    radians: float

    @classmethod
    def from_degrees(cls, degrees: float) -> Angle:
        return cls(math.radians(degrees))

    @classmethod
    def from_hours(cls, hours: float) -> Angle:
        return cls(math.radians(hours * DEGREES_PER_HOUR))

    @classmethod
    def from_arcsec(cls, arcsec: float) -> Angle:
        return cls(math.radians(arcsec / 3600.0))

    @classmethod
    def parse(cls, string: str, hours: bool = False) -> Angle:
        """Parse a sexagesimal string such as ``-22 32 04``, ``03h12m45s`` or ``12:30``.

        Parameters:
            string: Angle text.
            hours: Interpret the leading field as hours instead of degrees.

        Returns:
            Parsed Angle.

        Raises:
            ValueError: If the string is not a valid angle.
        """
        value = parse_angle_string(string)
        if value is None:
            raise ValueError(f'Invalid angle string: {string!r}')
        return cls.from_hours(value) if hours else cls.from_degrees(value)

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    @property
    def hours(self) -> float:
        return self.degrees / DEGREES_PER_HOUR

    @property
    def arcmin(self) -> float:
        return self.degrees * 60.0

    @property
    def arcsec(self) -> float:
        return self.degrees * 3600.0

    def normalized(self) -> Angle:
        """Same direction wrapped to [0, 2π)."""
        return Angle(normalize_radians(self.radians))

    def dms(self, ndecimal: int = 3) -> str:
        """Format as degrees, minutes, seconds."""
        return dms_string(self.degrees, 'dms', ndecimal)

    def hms(self, ndecimal: int = 3) -> str:
        """Format as hours, minutes, seconds."""
        return dms_string(self.hours, 'hms', ndecimal)

    def __add__(self, other: Angle) -> Angle:
        return Angle(self.radians + other.radians)

    def __sub__(self, other: Angle) -> Angle:
        return Angle(self.radians - other.radians)

    def __neg__(self) -> Angle:
        return Angle(-self.radians)

    def __mul__(self, scale: float) -> Angle:
        return Angle(self.radians * scale)

    __rmul__ = __mul__

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)


def _parsec_not_implemented() -> NotImplementedError:
    return NotImplementedError('Parsec conversions are not implemented')


@dataclass(frozen=True, order=True)
class Distance:
    """Distance stored in meters."""

    meters: float

    @classmethod
    def from_km(cls, km: float) -> Distance:
        return cls(km * 1000.0)

    @classmethod
    def from_au(cls, au: float) -> Distance:
        return cls(au * AU_M)

    @classmethod
    def from_light_years(cls, light_years: float) -> Distance:
        return cls(light_years * LIGHT_YEAR_M)

    @classmethod
    def from_parsecs(cls, parsecs: float) -> Distance:
        raise _parsec_not_implemented()

    @property
    def kilometers(self) -> float:
        return self.meters / 1000.0

    @property
    def au(self) -> float:
        return self.meters / AU_M

    @property
    def light_years(self) -> float:
        return self.meters / LIGHT_YEAR_M

    @property
    def parsecs(self) -> float:
        raise _parsec_not_implemented()

    @property
    def light_time(self) -> float:
        """Seconds light needs to cross this distance."""
        return self.kilometers / SPEED_OF_LIGHT_KM_S

    def __add__(self, other: Distance) -> Distance:
        return Distance(self.meters + other.meters)

    def __sub__(self, other: Distance) -> Distance:
        return Distance(self.meters - other.meters)

    def __mul__(self, scale: float) -> Distance:
        return Distance(self.meters * scale)

    __rmul__ = __mul__


@dataclass(frozen=True, order=True)
class Pressure:
    """Atmospheric pressure stored in millibar."""

    millibar: float

    @property
    def pascal(self) -> float:
        return self.millibar * 100.0


@dataclass(frozen=True, order=True)
class Temperature:
    """Temperature stored in degrees Celsius."""

    celsius: float

    @property
    def kelvin(self) -> float:
        return self.celsius + 273.15

    @property
    def fahrenheit(self) -> float:
        return self.celsius * 9.0 / 5.0 + 32.0
