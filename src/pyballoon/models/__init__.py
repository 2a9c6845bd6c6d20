"""Data models for snapshot feeds, trajectories and load results."""

from pyballoon.models.record import Record, coerce_record, parse_record
from pyballoon.models.snapshot import Snapshot
from pyballoon.models.trajectory import Trajectory, TrajectoryGap, TrajectoryPoint, TrajectoryStyle
from pyballoon.models.load import (
    CurrentPosition,
    LoadResult,
    LoadStatus,
    RenderState,
    TrackerStats,
)

__all__ = [
    "CurrentPosition",
    "LoadResult",
    "LoadStatus",
    "Record",
    "RenderState",
    "Snapshot",
    "TrackerStats",
    "Trajectory",
    "TrajectoryGap",
    "TrajectoryPoint",
    "TrajectoryStyle",
    "coerce_record",
    "parse_record",
]
