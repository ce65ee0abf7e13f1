"""Rise, transit and set times from a single position (no iteration)."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from ephemeris_engine.celestial import CelestialObject
    from ephemeris_engine.observer import Observer

# Sentinel hours for objects that never set or never rise
CIRCUMPOLAR = 100.0
NEVER_RISES = -100.0


class RiseTransitSet(NamedTuple):
    """Local decimal hours in [0, 24), or ±100 for rise and set.

    ``rise == set == 100`` means the object never sets; ``-100`` that it
    never rises.
    """

    rise: float
    transit: float
    set: float

    @property
    def is_circumpolar(self) -> bool:
        return self.rise == CIRCUMPOLAR

    @property
    def never_rises(self) -> bool:
        return self.rise == NEVER_RISES


def compute_rts(obj: CelestialObject, o: Observer, horizon_altitude: float) -> RiseTransitSet:
    """Rise, transit and set of ``obj`` for the local day of ``o``.

    Parameters:
        obj: Object whose geometric sidereal position is used.
        o: Observer; its UTC offset shifts the result to local time.
        horizon_altitude: Altitude of the object's centre at rise and set,
            radians.

    Returns:
        RiseTransitSet in local decimal hours.
    """
    system = o.system
    home = o.home_body
    coeff = system.mean_solar_day(o.home) / home.sidereal_day

    pos = obj.sidereal_position_geometric(o)
    ra = math.pi * 2.0 - pos.longitude()
    dec = pos.latitude()

    ha = ra * 12.0 / math.pi
    if ha > 24.0:
        ha -= 24.0
    if ha > 12.0:
        ha -= 24.0

    jd = o.jd
    current_hours = (jd - int(jd)) * 24.0
    transit = (current_hours - ha * coeff + o.utc_offset + 12.0) % 24.0

    phi = o.location.latitude.radians
    cos_h = (math.sin(horizon_altitude) - math.sin(phi) * math.sin(dec)) / (
        math.cos(phi) * math.cos(dec)
    )
    if cos_h < -1.0:
        return RiseTransitSet(CIRCUMPOLAR, transit, CIRCUMPOLAR)
    if cos_h > 1.0:
        return RiseTransitSet(NEVER_RISES, transit, NEVER_RISES)

    half_arc = math.acos(cos_h) * 12.0 * coeff / math.pi
    return RiseTransitSet((transit - half_arc) % 24.0, transit, (transit + half_arc) % 24.0)
