"""Trajectory correlation across hourly snapshots.

The feed has no object ids. An object's position inside each snapshot's
array is assumed to be stable from hour to hour, so the records at index
``i`` of every snapshot are chained into one trajectory. Hours where index
``i`` is missing or fails coordinate validation are skipped without a
placeholder, which means a path can connect two non-adjacent hours directly;
:meth:`Trajectory.gaps` exposes where that happens.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Mapping

from pyballoon.models.snapshot import Snapshot
from pyballoon.models.trajectory import Trajectory, TrajectoryPoint

MIN_TRAJECTORY_POINTS = 2

HourOrdering = Callable[[Iterable[int]], list[int]]


class HourOrder(enum.Enum):
    """Order in which hour offsets are walked when building a path.

    A larger offset is further in the past, so chronological order is
    *descending* offset.
    """

    OLDEST_FIRST = "oldest_first"
    """23, 22, ..., 0: chronological, the path ends at the current position."""

    ASCENDING_OFFSET = "ascending_offset"
    """0, 1, ..., 23: plain numeric order, newest point first."""

    def sort(self, hours: Iterable[int]) -> list[int]:
        return sorted(hours, reverse=self is HourOrder.OLDEST_FIRST)


def _resolve_order(order: HourOrder | HourOrdering) -> HourOrdering:
    if isinstance(order, HourOrder):
        return order.sort
    return order


def build_trajectories(
    snapshots: Mapping[int, Snapshot],
    *,
    order: HourOrder | HourOrdering = HourOrder.OLDEST_FIRST,
) -> list[Trajectory]:
    """Correlate records by positional index across *snapshots*.

    Parameters
    ----------
    snapshots : Mapping[int, Snapshot]
        Hour offset → snapshot, e.g. ``SnapshotStore.snapshots``.
    order : HourOrder or callable
        How hours are walked for every path. A callable receives the
        available hour offsets and returns them in the desired order.

    Returns
    -------
    list[Trajectory]
        One trajectory per index with at least two valid points, ordered by
        index. Empty when fewer than two hours are available.
    """
    if len(snapshots) < 2:
        return []

    hours = _resolve_order(order)(snapshots.keys())
    max_len = max(len(snapshot) for snapshot in snapshots.values())

    trajectories: list[Trajectory] = []
    for index in range(max_len):
        points: list[TrajectoryPoint] = []
        for hour in hours:
            record = snapshots[hour].record_at(index)
            if record is not None:
                points.append(TrajectoryPoint(hour=hour, latitude=record.latitude, longitude=record.longitude))
        if len(points) >= MIN_TRAJECTORY_POINTS:
            trajectories.append(Trajectory(index=index, points=tuple(points)))
    return trajectories


def build_paths(
    snapshots: Mapping[int, Snapshot],
    *,
    order: HourOrder | HourOrdering = HourOrder.OLDEST_FIRST,
) -> list[list[tuple[float, float]]]:
    """Bare ``(lat, lon)`` lists, as handed to a polyline renderer."""
    return [trajectory.coordinates for trajectory in build_trajectories(snapshots, order=order)]
