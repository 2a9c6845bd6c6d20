"""Load-cycle policy decisions.

This module intentionally contains *no* I/O or parsing. It decides which
outcomes the store accepts, which hour feeds the current-position display,
and how a finished cycle is reported.
"""

from __future__ import annotations

from collections.abc import Collection

from pyballoon.models.load import LoadStatus
from pyballoon.state.events import SnapshotOutcome

CURRENT_HOUR = 0


def should_accept_outcome(outcome: SnapshotOutcome, *, current_generation: int) -> bool:
    """Accept only successful outcomes issued by the current load cycle."""
    return outcome.ok and outcome.generation == current_generation


def choose_display_hour(available: Collection[int], *, usable: Collection[int] | None = None) -> int | None:
    """Pick the hour whose records are shown as current positions.

    Hour 0 when it is available (and usable); otherwise the most recent
    other available hour, i.e. the smallest offset. ``usable`` narrows
    the candidates to hours that actually hold at least one valid record.
    """
    candidates = sorted(set(available) & set(usable) if usable is not None else set(available))
    if not candidates:
        return None
    return candidates[0]


def load_status(*, requested_hours: int, available_hours: int, display_hour: int | None) -> LoadStatus:
    """Summarize a settled cycle."""
    if available_hours == 0:
        return LoadStatus.FAILED
    if display_hour != CURRENT_HOUR:
        return LoadStatus.DEGRADED
    if available_hours < requested_hours:
        return LoadStatus.PARTIAL
    return LoadStatus.COMPLETE
