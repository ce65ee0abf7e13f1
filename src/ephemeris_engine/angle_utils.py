"""Sexagesimal angle parsing and formatting."""

from __future__ import annotations

import re

# Any of these between fields acts as whitespace.
_SEPARATORS = re.compile(r"[hHdDmMsS°:'\"′″]")


def parse_angle_string(string: str) -> float | None:
    """Parse an angle as hours/degrees, minutes, and seconds.

    Accepts three numbers (deg/h, m, s), two (deg/h, m), or one (deg/h),
    separated by whitespace, colons or unit letters (``12h30m45s``,
    ``-22°32'04"``, ``12:30:45``). Minutes and seconds must be non-negative.
    A leading minus makes the result negative, including ``-0 30``.

    Parameters:
        string: Angle text.

    Returns:
        Angle in the units of the first field (hours or degrees), or None on
        parse failure.
    """
    s = string.strip()
    if len(s) == 0:
        return None
    negative = s.startswith('-')
    parts = _SEPARATORS.sub(' ', s).split()
    if not 1 <= len(parts) <= 3:
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 for v in values[1:]):
        return None
    angle = abs(values[0])
    if len(values) >= 2:
        angle += values[1] / 60.0
    if len(values) == 3:
        angle += values[2] / 3600.0
    return -angle if negative else angle


def dms_string(
    value: float,
    separator: str,
    ndecimal: int = 3,
) -> str:
    """Format angle as degrees/hours, minutes, seconds.

    Parameters:
        value: Angle in degrees (or hours for RA).
        separator: 3-character string for separators (e.g. 'hms' or 'dms').
        ndecimal: Decimal places for seconds.

    Returns:
        Formatted string (e.g. " 12d 30m 45.123s").
    """
    if len(separator) < 3:
        sep1 = sep2 = sep3 = ' '
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    sign = '-' if value < 0 else ' '
    ntens = 10**ndecimal
    units = round(abs(value) * 3600.0 * ntens)
    isec, frac = divmod(units, ntens)
    imin, isec = divmod(isec, 60)
    ideg, imin = divmod(imin, 60)
    frac_text = f'.{frac:0{ndecimal}d}' if ndecimal > 0 else ''
    return f'{sign}{ideg:d}{sep1} {imin:02d}{sep2} {isec:02d}{frac_text}{sep3}'
