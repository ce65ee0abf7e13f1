"""Ephemeris and reference-frame engine.

Computes, for an observer at a site on a home body and an instant, the
apparent positions, magnitudes, rise/transit/set times, phases and eclipse
circumstances of solar-system bodies, stars and deep-sky objects:

- bodies: the solar-system arena and the Planet handle
- observer: Location, ObserverState and the Observer frame matrices
- stars: Star, DeepSky and Nebula value types
- eclipses: lunar and solar eclipses, lunar phase

Planetary and lunar series come from ERFA (pyerfa); date strings are parsed
with rms-julian and site vectors use cspyce.
"""

__all__: list[str] = []
