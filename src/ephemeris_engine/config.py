"""Configuration: observer defaults and leap-second path from environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ephemeris_engine.bodies.magnitude import MagnitudeAlgorithm
    from ephemeris_engine.delta_t import TimeCorrection

logger = logging.getLogger(__name__)

# Env var overrides with defaults matching the reference observatory setup.
DEFAULT_TIME_CORRECTION = 'ESPENAK_MEEUS'
DEFAULT_MAGNITUDE_ALGORITHM = 'EXPLANATORY_SUPPLEMENT_2013'
DEFAULT_PRESSURE_MBAR = 1013.0
DEFAULT_TEMPERATURE_C = 15.0
DEFAULT_EXTINCTION_COEFFICIENT = 0.13


def _get_float(name: str, default: float) -> float:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r (not a number); using %s', name, raw, default)
        return default


def get_time_correction() -> TimeCorrection:
    """Return the ΔT model (EPHEM_TIME_CORRECTION env var or default).

    Returns:
        TimeCorrection member; unknown names log a warning and use the default.
    """
    from ephemeris_engine.delta_t import TimeCorrection

    raw = os.environ.get('EPHEM_TIME_CORRECTION', DEFAULT_TIME_CORRECTION).strip().upper()
    try:
        return TimeCorrection[raw]
    except KeyError:
        logger.warning(
            'Unknown time correction %r; using %s', raw, DEFAULT_TIME_CORRECTION
        )
        return TimeCorrection[DEFAULT_TIME_CORRECTION]


def get_magnitude_algorithm() -> MagnitudeAlgorithm:
    """Return the apparent magnitude model (EPHEM_MAGNITUDE_ALGORITHM env var or default).

    Returns:
        MagnitudeAlgorithm member; unknown names log a warning and use the default.
    """
    from ephemeris_engine.bodies.magnitude import MagnitudeAlgorithm

    raw = (
        os.environ.get('EPHEM_MAGNITUDE_ALGORITHM', DEFAULT_MAGNITUDE_ALGORITHM)
        .strip()
        .upper()
    )
    try:
        return MagnitudeAlgorithm[raw]
    except KeyError:
        logger.warning(
            'Unknown magnitude algorithm %r; using %s', raw, DEFAULT_MAGNITUDE_ALGORITHM
        )
        return MagnitudeAlgorithm[DEFAULT_MAGNITUDE_ALGORITHM]


def get_pressure_mbar() -> float:
    """Return refraction pressure in millibar (EPHEM_PRESSURE_MBAR or default)."""
    return _get_float('EPHEM_PRESSURE_MBAR', DEFAULT_PRESSURE_MBAR)


def get_temperature_c() -> float:
    """Return refraction temperature in Celsius (EPHEM_TEMPERATURE_C or default)."""
    return _get_float('EPHEM_TEMPERATURE_C', DEFAULT_TEMPERATURE_C)


def get_extinction_coefficient() -> float:
    """Return extinction coefficient k (EPHEM_EXTINCTION_COEFFICIENT or default)."""
    return _get_float('EPHEM_EXTINCTION_COEFFICIENT', DEFAULT_EXTINCTION_COEFFICIENT)


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Empty when JULIAN_LEAPSECS is unset, in which case rms-julian's bundled
    LSK is used.

    Returns:
        Path string, possibly empty.
    """
    return os.environ.get('JULIAN_LEAPSECS', '').strip()


@dataclass(frozen=True)
class ObserverConfig:
    """Options applied to every frame matrix an Observer builds.

    Attributes:
        use_topocentric_coordinates: Shift the origin from the home body's
            centre to the observer's site.
        use_nutation: Include IAU 2000B nutation in the home rotation and in
            apparent sidereal time.
        use_light_travel_time: Evaluate body positions at the retarded time
            (one pass).
        time_correction: ΔT model.
        apparent_magnitude_algorithm: Empirical planet magnitude model.
        pressure: Refraction pressure in millibar.
        temperature: Refraction temperature in Celsius.
        extinction_coefficient: Extinction k in magnitudes per airmass.
    """

    use_topocentric_coordinates: bool = True
    use_nutation: bool = True
    use_light_travel_time: bool = True
    time_correction: TimeCorrection = field(default_factory=get_time_correction)
    apparent_magnitude_algorithm: MagnitudeAlgorithm = field(
        default_factory=get_magnitude_algorithm
    )
    pressure: float = field(default_factory=get_pressure_mbar)
    temperature: float = field(default_factory=get_temperature_c)
    extinction_coefficient: float = field(default_factory=get_extinction_coefficient)

    def with_changes(self, **changes: object) -> ObserverConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
