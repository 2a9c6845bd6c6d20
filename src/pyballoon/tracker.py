"""High-level async tracker for the hourly balloon snapshot feed."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyballoon._transport import HttpTransport, Transport
from pyballoon.config import BalloonConfig
from pyballoon.exceptions import BalloonError
from pyballoon.ingestion.snapshots import fetch_all_snapshots
from pyballoon.models.load import CurrentPosition, LoadResult, LoadStatus, RenderState, TrackerStats
from pyballoon.models.snapshot import Snapshot
from pyballoon.models.trajectory import Trajectory, TrajectoryStyle
from pyballoon.render import Renderer
from pyballoon.state.events import FetchFailure
from pyballoon.state.policy import CURRENT_HOUR, choose_display_hour, load_status
from pyballoon.state.store import SnapshotStore
from pyballoon.style import style_for_zoom
from pyballoon.trajectories import HourOrder, HourOrdering, build_trajectories

_logger = logging.getLogger(__name__)


def _current_positions(snapshot: Snapshot | None) -> tuple[list[CurrentPosition], int]:
    """Return ``(valid positions, number of skipped entries)``."""
    if snapshot is None:
        return [], 0
    positions = [
        CurrentPosition(
            latitude=record.latitude,
            longitude=record.longitude,
            altitude=record.altitude,
            index=record.index,
            hour=snapshot.hour,
        )
        for record in snapshot.valid_records()
    ]
    return positions, len(snapshot) - len(positions)


def _status_message(
    status: LoadStatus,
    *,
    snapshots: Mapping[int, Snapshot],
    display_hour: int | None,
) -> str:
    if status is LoadStatus.FAILED:
        return "Failed to load any data. Check the logs for errors."
    current = snapshots.get(CURRENT_HOUR)
    if status is LoadStatus.DEGRADED:
        if display_hour is None:
            return "Data loaded but no valid markers created"
        if current is not None:
            return f"No valid current positions in hour 0; showing data from {display_hour} hours ago instead"
        return f"No current balloon data available (hour 0); showing data from {display_hour} hours ago instead"
    return f"Loaded {len(current) if current is not None else 0} balloons from {len(snapshots)} time points"


class BalloonTracker:
    """Async tracker that loads, correlates and styles the snapshot feed.

    Usage::

        async with BalloonTracker(config, renderer=my_map) as tracker:
            result = await tracker.load()
            tracker.set_zoom(6)
            tracker.start_auto_refresh()

    Parameters
    ----------
    config : BalloonConfig or None
        Tracker configuration; defaults to ``BalloonConfig()``.
    session : aiohttp.ClientSession or None
        Externally owned HTTP session. When omitted, the tracker opens and
        closes its own.
    transport : Transport or None
        Replaces the HTTP transport entirely (tests, alternative sources).
    renderer : Renderer or None
        Receives positions and paths whenever they change.
    order : HourOrder or callable
        Hour walking order for trajectory correlation.
    """

    def __init__(
        self,
        config: BalloonConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        renderer: Renderer | None = None,
        order: HourOrder | HourOrdering = HourOrder.OLDEST_FIRST,
    ) -> None:
        self._config = config or BalloonConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._renderer = renderer
        self._order = order
        self._store = SnapshotStore()
        self._positions: list[CurrentPosition] = []
        self._trajectories: list[Trajectory] = []
        self._last_result: LoadResult | None = None
        self._show_markers = self._config.show_markers
        self._show_trajectories = self._config.show_trajectories
        self._zoom: float = self._config.initial_zoom
        self._refresh_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BalloonTracker:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop_auto_refresh()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise BalloonError("Tracker not initialized. Use 'async with BalloonTracker(...) as tracker:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> BalloonConfig:
        return self._config

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def last_result(self) -> LoadResult | None:
        return self._last_result

    @property
    def positions(self) -> list[CurrentPosition]:
        return list(self._positions)

    @property
    def trajectories(self) -> list[Trajectory]:
        return list(self._trajectories)

    @property
    def show_markers(self) -> bool:
        return self._show_markers

    @property
    def show_trajectories(self) -> bool:
        return self._show_trajectories

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def style(self) -> TrajectoryStyle:
        return style_for_zoom(self._zoom)

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    async def load(self) -> LoadResult:
        """Run one full load cycle.

        Clears the store and derived state, fetches every hour concurrently,
        waits for all fetches to settle, then rebuilds current positions and
        trajectories and hands them to the renderer.

        A cycle that is overtaken by another :meth:`load` or by :meth:`clear`
        before its fetches settle returns ``LoadStatus.SUPERSEDED`` and
        leaves the newer state alone.
        """
        transport = self._require_transport()
        generation = self._store.begin_cycle()
        self._reset_derived()
        _logger.info("Loading balloon data (cycle %d, %d hours)", generation, self._config.hours)

        outcomes = await fetch_all_snapshots(
            self._config,
            transport,
            generation=generation,
            on_outcome=self._store.apply,
        )

        if not self._store.mark_settled(generation):
            _logger.info("Load cycle %d superseded by cycle %d", generation, self._store.generation)
            return LoadResult(
                generation=generation,
                status=LoadStatus.SUPERSEDED,
                requested_hours=len(outcomes),
                message="Superseded by a newer load cycle",
            )

        failures: dict[int, FetchFailure] = {o.hour: o.failure for o in outcomes if o.failure is not None}
        snapshots = self._store.snapshots
        usable = {hour for hour, snapshot in snapshots.items() if next(snapshot.valid_records(), None) is not None}
        display_hour = choose_display_hour(snapshots.keys(), usable=usable)
        positions, skipped = _current_positions(snapshots.get(display_hour) if display_hour is not None else None)
        trajectories = build_trajectories(snapshots, order=self._order)

        status = load_status(
            requested_hours=len(outcomes),
            available_hours=len(snapshots),
            display_hour=display_hour,
        )
        result = LoadResult(
            generation=generation,
            status=status,
            requested_hours=len(outcomes),
            available_hours=len(snapshots),
            display_hour=display_hour,
            failures=failures,
            positions=positions,
            skipped_positions=skipped,
            trajectories=trajectories,
            message=_status_message(status, snapshots=snapshots, display_hour=display_hour),
        )

        if status is LoadStatus.FAILED:
            _logger.error("No data loaded from any time point (%d failures)", len(failures))
        else:
            _logger.info(
                "Data loading complete. Available hours: %d, displayed hour: %s, positions: %d (skipped %d), "
                "trajectories: %d",
                result.available_hours,
                display_hour,
                len(positions),
                skipped,
                len(trajectories),
            )
            if status is LoadStatus.DEGRADED:
                _logger.warning(result.message)

        self._positions = positions
        self._trajectories = trajectories
        self._last_result = result
        self._push_positions()
        self._push_trajectories()
        return result

    def clear(self) -> None:
        """Reset the store and all derived state without fetching."""
        self._store.clear()
        self._reset_derived()
        self._last_result = None
        _logger.debug("Tracker cleared (generation %d)", self._store.generation)

    def set_show_markers(self, show: bool | None = None) -> bool:
        """Set (or toggle, when *show* is ``None``) current-position visibility."""
        self._show_markers = not self._show_markers if show is None else show
        self._push_positions()
        return self._show_markers

    def set_show_trajectories(self, show: bool | None = None) -> bool:
        """Set (or toggle, when *show* is ``None``) trajectory visibility."""
        self._show_trajectories = not self._show_trajectories if show is None else show
        self._push_trajectories()
        return self._show_trajectories

    def set_zoom(self, zoom: float) -> TrajectoryStyle:
        """Record the renderer's zoom level and restyle visible trajectories."""
        self._zoom = zoom
        style = style_for_zoom(zoom)
        if self._renderer is not None and self._show_trajectories and self._trajectories:
            self._renderer.restyle_trajectories(style)
        return style

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def render_state(self) -> RenderState:
        """Pull-style snapshot of what should currently be drawn."""
        return RenderState(
            positions=list(self._positions) if self._show_markers else [],
            paths=[t.coordinates for t in self._trajectories] if self._show_trajectories else [],
            style=self.style,
            show_markers=self._show_markers,
            show_trajectories=self._show_trajectories,
        )

    def stats(self) -> TrackerStats:
        current = self._store.get(CURRENT_HOUR)
        return TrackerStats(
            total_objects=len(current) if current is not None else 0,
            visible_markers=len(self._positions) if self._show_markers else 0,
            trajectory_count=len(self._trajectories) if self._show_trajectories else 0,
            available_hours=self._store.available_hours,
            zoom=self._zoom,
        )

    # ------------------------------------------------------------------
    # Auto refresh
    # ------------------------------------------------------------------

    def start_auto_refresh(self, interval: float | None = None) -> asyncio.Task[None]:
        """Start re-running :meth:`load` every *interval* seconds.

        A tick is skipped while the last completed load produced no current
        positions, so automatic refreshing only kicks in after a successful
        manual load. Errors in a tick are logged and the loop carries on.
        """
        if self._refresh_task is not None and not self._refresh_task.done():
            return self._refresh_task
        period = self._config.auto_refresh_interval if interval is None else interval
        if period <= 0:
            raise ValueError(f"interval must be positive, got {period}")
        self._refresh_task = asyncio.get_running_loop().create_task(self._auto_refresh_loop(period))
        return self._refresh_task

    async def stop_auto_refresh(self) -> None:
        task = self._refresh_task
        self._refresh_task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _auto_refresh_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            # Keyed on the last completed load so a cycle that raised midway
            # (and already reset the derived state) is retried.
            if self._last_result is None or not self._last_result.positions:
                _logger.debug("Auto-refresh skipped: no current positions loaded")
                continue
            try:
                await self.load()
            except BalloonError:
                _logger.warning("Auto-refresh failed", exc_info=True)
            except Exception:
                _logger.exception("Auto-refresh cycle raised unexpectedly")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reset_derived(self) -> None:
        self._positions = []
        self._trajectories = []
        if self._renderer is not None:
            self._renderer.clear()

    def _push_positions(self) -> None:
        if self._renderer is None:
            return
        if self._show_markers and self._positions:
            self._renderer.show_positions(list(self._positions))
        else:
            self._renderer.hide_positions()

    def _push_trajectories(self) -> None:
        if self._renderer is None:
            return
        if self._show_trajectories and self._trajectories:
            self._renderer.show_trajectories([t.coordinates for t in self._trajectories], self.style)
        else:
            self._renderer.hide_trajectories()
