"""Normalization helpers.

Centralizes defensive parsing and the coordinate range check shared by
current-position display and trajectory correlation.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

LATITUDE_RANGE: tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: tuple[float, float] = (-180.0, 180.0)


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(result):
        return None
    return result


def is_number(value: Any) -> bool:
    """Return ``True`` for finite real numbers.

    ``bool`` is rejected even though it subclasses ``int``, and so are
    numeric strings: the feed sends coordinates as JSON numbers. Integers
    too large to convert to ``float`` are not finite for this purpose.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def is_valid_coordinate(lat: Any, lon: Any) -> bool:
    """Return ``True`` when *lat*/*lon* are finite numbers inside the WGS84 ranges.

    Bounds are inclusive: ``(90, 180)`` and ``(-90, -180)`` are valid.
    """
    if not (is_number(lat) and is_number(lon)):
        return False
    return LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1] and LONGITUDE_RANGE[0] <= lon <= LONGITUDE_RANGE[1]
