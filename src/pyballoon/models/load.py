"""Load-cycle results and tracker view models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyballoon.models.record import Record
from pyballoon.models.trajectory import Trajectory, TrajectoryStyle
from pyballoon.state.events import FetchFailure


class LoadStatus(StrEnum):
    """Aggregate outcome of one load cycle.

    Only ``FAILED`` and ``DEGRADED`` are user-facing errors; a missing
    non-current hour is reported as ``PARTIAL`` and otherwise only logged.
    """

    COMPLETE = "complete"
    PARTIAL = "partial"
    DEGRADED = "degraded"
    FAILED = "failed"
    SUPERSEDED = "superseded"

    @property
    def is_error(self) -> bool:
        return self in (LoadStatus.DEGRADED, LoadStatus.FAILED)


class CurrentPosition(Record):
    """A validated record chosen for the current-position display."""

    hour: int = Field(default=0, ge=0)

    @property
    def label(self) -> str:
        number = "?" if self.index is None else str(self.index + 1)
        return f"Balloon #{number}"

    def describe(self) -> list[str]:
        """Popup lines for the marker."""
        lines = [self.label, f"Position: {self.latitude:.4f}°, {self.longitude:.4f}°"]
        if self.altitude is not None:
            lines.append(f"Altitude: {self.altitude:.2f} km")
        lines.append("Time: Current" if self.hour == 0 else f"Time: {self.hour} hours ago")
        return lines


class LoadResult(BaseModel):
    """Everything a settled load cycle produced.

    Parameters
    ----------
    generation : int
        Store generation of the cycle.
    status : LoadStatus
        Aggregate status.
    requested_hours : int
        Number of hourly snapshots that were fetched.
    available_hours : int
        Number of hours that loaded successfully.
    display_hour : int or None
        Hour whose records are shown as current positions.
    failures : dict
        Hour offset → typed failure for every hour that did not load.
    positions : list[CurrentPosition]
        Valid current positions (independent of marker visibility).
    trajectories : list[Trajectory]
        Correlated paths (independent of trajectory visibility).
    message : str
        Human-readable status line.
    """

    model_config = ConfigDict(frozen=True)

    generation: int
    status: LoadStatus
    requested_hours: int = 0
    available_hours: int = 0
    display_hour: int | None = None
    failures: dict[int, FetchFailure] = Field(default_factory=dict)
    positions: list[CurrentPosition] = Field(default_factory=list)
    skipped_positions: int = 0
    trajectories: list[Trajectory] = Field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (LoadStatus.COMPLETE, LoadStatus.PARTIAL)


class TrackerStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_objects: int = 0
    visible_markers: int = 0
    trajectory_count: int = 0
    available_hours: int = 0
    zoom: float = 0


class RenderState(BaseModel):
    """What the renderer should currently draw, after visibility gating."""

    model_config = ConfigDict(frozen=True)

    positions: list[CurrentPosition] = Field(default_factory=list)
    paths: list[list[tuple[float, float]]] = Field(default_factory=list)
    style: TrajectoryStyle
    show_markers: bool = True
    show_trajectories: bool = True
