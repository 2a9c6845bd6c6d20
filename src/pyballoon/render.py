"""Renderer interface.

Map drawing, marker clustering and tiling live outside this library. A
renderer receives validated positions and coordinate paths from
:class:`~pyballoon.tracker.BalloonTracker` and draws them however it likes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pyballoon.models.load import CurrentPosition
from pyballoon.models.trajectory import TrajectoryStyle


class Renderer(Protocol):
    """Structural interface for map front-ends."""

    def show_positions(self, positions: Sequence[CurrentPosition]) -> None:
        ...

    def hide_positions(self) -> None:
        ...

    def show_trajectories(self, paths: Sequence[Sequence[tuple[float, float]]], style: TrajectoryStyle) -> None:
        ...

    def hide_trajectories(self) -> None:
        ...

    def restyle_trajectories(self, style: TrajectoryStyle) -> None:
        ...

    def clear(self) -> None:
        ...
