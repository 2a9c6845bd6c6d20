"""Generation-tagged in-memory snapshot store.

This is the only component allowed to merge fetch outcomes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from pyballoon.models.snapshot import Snapshot
from pyballoon.state.events import SnapshotOutcome
from pyballoon.state.policy import should_accept_outcome

_logger = logging.getLogger(__name__)


class SnapshotStore:
    """Mapping from hour offset to :class:`Snapshot` for the current load cycle.

    A missing hour means "unavailable", never "empty". Each cycle starts with
    :meth:`begin_cycle`, which clears the store and bumps ``generation``;
    outcomes tagged with an older generation (fetches still in flight from a
    superseded cycle) are dropped by :meth:`apply`. The store becomes
    readable once :meth:`mark_settled` is called for the current generation,
    i.e. after every fetch of the cycle has resolved.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._snapshots: dict[int, Snapshot] = {}
        self._settled = True

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_settled(self) -> bool:
        return self._settled

    @property
    def is_empty(self) -> bool:
        return not self._snapshots

    @property
    def available_hours(self) -> int:
        return len(self._snapshots)

    @property
    def snapshots(self) -> Mapping[int, Snapshot]:
        """Read-only view of the stored snapshots."""
        return MappingProxyType(self._snapshots)

    def begin_cycle(self) -> int:
        """Clear the store and start a new generation; returns its number."""
        self._generation += 1
        self._snapshots = {}
        self._settled = False
        return self._generation

    def clear(self) -> None:
        """Drop everything and invalidate in-flight fetches without starting a load."""
        self._generation += 1
        self._snapshots = {}
        self._settled = True

    def apply(self, outcome: SnapshotOutcome) -> bool:
        """Store a successful outcome of the current generation.

        Returns ``True`` when the snapshot was written.
        """
        if not should_accept_outcome(outcome, current_generation=self._generation):
            if outcome.generation != self._generation:
                _logger.debug(
                    "Discarding stale snapshot %02d (generation %d, current %d)",
                    outcome.hour,
                    outcome.generation,
                    self._generation,
                )
            return False
        assert outcome.snapshot is not None  # noqa: S101
        self._snapshots[outcome.hour] = outcome.snapshot
        return True

    def mark_settled(self, generation: int) -> bool:
        """Flag the store readable once every fetch of *generation* resolved."""
        if generation != self._generation:
            return False
        self._settled = True
        return True

    def get(self, hour: int) -> Snapshot | None:
        return self._snapshots.get(hour)

    def hours(self) -> list[int]:
        """Available hour offsets in ascending order (most recent first)."""
        return sorted(self._snapshots)

    def __contains__(self, hour: object) -> bool:
        return hour in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)
