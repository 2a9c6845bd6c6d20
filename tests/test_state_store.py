from __future__ import annotations

import pytest

from pyballoon.models.load import LoadStatus
from pyballoon.models.snapshot import Snapshot
from pyballoon.state.events import FetchFailureKind, SnapshotOutcome
from pyballoon.state.policy import choose_display_hour, load_status
from pyballoon.state.store import SnapshotStore


def _ok(hour: int, generation: int, records: list | None = None) -> SnapshotOutcome:
    return SnapshotOutcome.success(Snapshot(hour=hour, records=records or [[1, 2]]), generation=generation)


def test_begin_cycle_clears_and_bumps_generation() -> None:
    store = SnapshotStore()
    first = store.begin_cycle()
    assert store.apply(_ok(0, first))
    assert store.available_hours == 1

    second = store.begin_cycle()

    assert second == first + 1
    assert store.is_empty
    assert not store.is_settled


def test_stale_outcomes_are_discarded() -> None:
    store = SnapshotStore()
    old = store.begin_cycle()
    current = store.begin_cycle()

    assert store.apply(_ok(3, old)) is False
    assert store.apply(_ok(4, current)) is True
    assert store.hours() == [4]


def test_failed_outcomes_leave_hour_absent() -> None:
    store = SnapshotStore()
    generation = store.begin_cycle()

    assert store.apply(SnapshotOutcome.failed(5, FetchFailureKind.NETWORK, generation=generation)) is False
    assert 5 not in store
    assert store.get(5) is None


def test_settle_only_for_current_generation() -> None:
    store = SnapshotStore()
    old = store.begin_cycle()
    store.clear()

    assert store.mark_settled(old) is False

    current = store.begin_cycle()
    assert store.mark_settled(current) is True
    assert store.is_settled


def test_clear_invalidates_in_flight_cycle() -> None:
    store = SnapshotStore()
    generation = store.begin_cycle()
    store.apply(_ok(0, generation))

    store.clear()

    assert store.is_empty
    assert store.apply(_ok(1, generation)) is False


def test_snapshots_view_is_read_only() -> None:
    store = SnapshotStore()
    generation = store.begin_cycle()
    store.apply(_ok(2, generation))
    store.apply(_ok(0, generation))

    view = store.snapshots
    assert sorted(view) == [0, 2]
    assert store.hours() == [0, 2]
    with pytest.raises(TypeError):
        view[1] = Snapshot(hour=1)  # type: ignore[index]


def test_display_hour_prefers_current_then_most_recent() -> None:
    assert choose_display_hour({0, 1, 5}) == 0
    assert choose_display_hour({3, 12, 7}) == 3
    assert choose_display_hour({0, 2, 10}, usable={2, 10}) == 2
    assert choose_display_hour(set()) is None
    assert choose_display_hour({0, 1}, usable=set()) is None


def test_load_status() -> None:
    assert load_status(requested_hours=24, available_hours=24, display_hour=0) is LoadStatus.COMPLETE
    assert load_status(requested_hours=24, available_hours=22, display_hour=0) is LoadStatus.PARTIAL
    assert load_status(requested_hours=24, available_hours=22, display_hour=1) is LoadStatus.DEGRADED
    assert load_status(requested_hours=24, available_hours=3, display_hour=None) is LoadStatus.DEGRADED
    assert load_status(requested_hours=24, available_hours=0, display_hour=None) is LoadStatus.FAILED
