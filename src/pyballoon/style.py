"""Zoom-adaptive trajectory styling."""

from __future__ import annotations

from pyballoon._constants import ZOOM_STYLE_STEPS
from pyballoon.models.trajectory import TrajectoryStyle


def style_for_zoom(zoom: float) -> TrajectoryStyle:
    """Map a map zoom level to a line weight and opacity.

    A step function: thicker, more opaque lines as the map zooms in. Each
    bin's lower bound is inclusive (``style_for_zoom(3)`` is the ``[3, 5)``
    style). A NaN zoom gets the most zoomed-in style.
    """
    for upper, weight, opacity in ZOOM_STYLE_STEPS:
        if zoom < upper:
            return TrajectoryStyle(weight=weight, opacity=opacity)
    # NaN compares False against every bound and lands in the last bin.
    _, weight, opacity = ZOOM_STYLE_STEPS[-1]
    return TrajectoryStyle(weight=weight, opacity=opacity)
