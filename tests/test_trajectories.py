from __future__ import annotations

from pyballoon.models.snapshot import Snapshot
from pyballoon.trajectories import HourOrder, build_paths, build_trajectories


def _store(**hours: list) -> dict[int, Snapshot]:
    """Build ``{hour: Snapshot}`` from ``h0=[...], h1=[...]`` keyword arguments."""
    return {int(key[1:]): Snapshot(hour=int(key[1:]), records=records) for key, records in hours.items()}


def _filler(n: int) -> list[list[float]]:
    return [[0.0, float(i)] for i in range(n)]


def test_three_hours_oldest_first() -> None:
    snapshots = _store(
        h0=[*_filler(3), [10.0, 10.0]],
        h1=[*_filler(3), [11.0, 11.0]],
        h2=[*_filler(3), [12.0, 12.0]],
    )

    trajectories = {t.index: t for t in build_trajectories(snapshots)}

    path = trajectories[3]
    assert len(path) == 3
    assert path.hours == [2, 1, 0]
    assert path.coordinates == [(12.0, 12.0), (11.0, 11.0), (10.0, 10.0)]


def test_ascending_offset_order_is_newest_first() -> None:
    snapshots = _store(h0=[[10, 10]], h1=[[11, 11]], h2=[[12, 12]])

    (trajectory,) = build_trajectories(snapshots, order=HourOrder.ASCENDING_OFFSET)

    assert trajectory.hours == [0, 1, 2]


def test_custom_ordering_callable() -> None:
    snapshots = _store(h0=[[10, 10]], h1=[[11, 11]], h5=[[15, 15]])

    (trajectory,) = build_trajectories(snapshots, order=lambda hours: [h for h in sorted(hours) if h != 1])

    assert trajectory.hours == [0, 5]


def test_gap_is_skipped_without_placeholder() -> None:
    snapshots = _store(h0=[[10, 10]], h1=[[999, 0]], h2=[[12, 12]])

    (trajectory,) = build_trajectories(snapshots)

    assert trajectory.coordinates == [(12, 12), (10, 10)]
    assert len(trajectory.gaps()) == 1


def test_missing_index_is_skipped() -> None:
    snapshots = _store(h0=[[0, 0], [10, 10]], h1=[[1, 1]], h2=[[2, 2], [12, 12]])

    trajectories = {t.index: t for t in build_trajectories(snapshots)}

    assert trajectories[1].hours == [2, 0]
    assert trajectories[0].hours == [2, 1, 0]


def test_fewer_than_two_hours_produce_nothing() -> None:
    assert build_trajectories({}) == []
    assert build_trajectories(_store(h0=[[1, 1], [2, 2]])) == []


def test_single_point_indices_are_dropped() -> None:
    snapshots = _store(h0=[[1, 1], [2, 2], None], h1=[[1, 1], None, ["x", 2]])

    trajectories = build_trajectories(snapshots)

    assert [t.index for t in trajectories] == [0]


def test_max_len_covers_longest_snapshot() -> None:
    snapshots = _store(h0=[[1, 1]], h3=[[1, 1], [2, 2], [3, 3]], h4=[None, None, [4, 4]])

    trajectories = {t.index: t for t in build_trajectories(snapshots)}

    assert set(trajectories) == {0, 2}
    assert trajectories[2].coordinates == [(4, 4), (3, 3)]


def test_build_paths_returns_plain_coordinates() -> None:
    snapshots = _store(h0=[[10, 10]], h1=[[11, 11]])

    assert build_paths(snapshots) == [[(11, 11), (10, 10)]]


def test_hour_order_sort() -> None:
    assert HourOrder.OLDEST_FIRST.sort([0, 5, 23, 1]) == [23, 5, 1, 0]
    assert HourOrder.ASCENDING_OFFSET.sort([0, 5, 23, 1]) == [0, 1, 5, 23]
