"""Solar-system bodies: records, magnitude laws, the built-in table and minor bodies."""

from ephemeris_engine.bodies.base import Body, BodyModel, BodyType, Ring, SolarSystem
from ephemeris_engine.bodies.magnitude import MagnitudeAlgorithm
from ephemeris_engine.bodies.minor import comet, minor_planet, parse_mpc_one_line, satellite
from ephemeris_engine.bodies.solar_system import build_solar_system

__all__ = [
    'Body',
    'BodyModel',
    'BodyType',
    'MagnitudeAlgorithm',
    'Ring',
    'SolarSystem',
    'build_solar_system',
    'comet',
    'minor_planet',
    'parse_mpc_one_line',
    'satellite',
]
