"""Hourly snapshot ingestion.

This module owns "how data enters": building the snapshot URL, issuing the
request through a :class:`~pyballoon._transport.Transport`, and handing the
body to the repair parser. Every failure is caught here and turned into a
typed :class:`~pyballoon.state.events.SnapshotOutcome`, so one bad hour never
affects the others.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from urllib.parse import quote

from pyballoon._excerpt import excerpt_for_log
from pyballoon._transport import Transport
from pyballoon.config import BalloonConfig
from pyballoon.exceptions import (
    BalloonEmptyBodyError,
    BalloonFetchError,
    BalloonParseError,
    BalloonShapeError,
    BalloonTransportError,
)
from pyballoon.ingestion.repair import ParseFailure, parse_snapshot_text
from pyballoon.models.snapshot import Snapshot
from pyballoon.state.events import FetchFailureKind, SnapshotOutcome

_logger = logging.getLogger(__name__)


def snapshot_url(config: BalloonConfig, hour: int) -> str:
    """Return the URL for *hour*, wrapped by the configured proxy if any."""
    if not 0 <= hour < config.hours:
        raise ValueError(f"hour must be between 0 and {config.hours - 1}, got {hour}")
    url = f"{config.base_url.rstrip('/')}/{hour:02d}.json"
    if config.proxy_prefix:
        return config.proxy_prefix + quote(url, safe="")
    return url


async def _read_snapshot(config: BalloonConfig, transport: Transport, hour: int) -> Snapshot:
    url = snapshot_url(config, hour)
    _logger.debug("Fetching snapshot %02d from %s", hour, url)

    text = await transport.get_text(url)
    if not text or not text.strip():
        raise BalloonEmptyBodyError(f"Empty response from {hour:02d}.json", url=url, hour=hour)

    result = parse_snapshot_text(text)
    if result.failure is ParseFailure.SHAPE:
        raise BalloonShapeError(f"Data from {hour:02d}.json is not an array: {result.error}", url=url, hour=hour)
    if not result.ok:
        _logger.warning(
            "First %d chars of %02d.json: %s",
            config.log_excerpt_chars,
            hour,
            excerpt_for_log(text, max_string=config.log_excerpt_chars),
        )
        raise BalloonParseError(f"Failed to parse JSON from {hour:02d}.json: {result.error}", url=url, hour=hour)

    if result.repaired:
        _logger.info("Repaired malformed JSON from %02d.json", hour)
    assert result.value is not None  # noqa: S101
    return Snapshot(hour=hour, records=result.value, repaired=result.repaired)


def _failure_kind(exc: BalloonFetchError) -> FetchFailureKind:
    if isinstance(exc, BalloonEmptyBodyError):
        return FetchFailureKind.EMPTY_BODY
    if isinstance(exc, BalloonShapeError):
        return FetchFailureKind.SHAPE
    if isinstance(exc, BalloonParseError):
        return FetchFailureKind.PARSE
    return FetchFailureKind.NETWORK


async def fetch_snapshot(
    config: BalloonConfig,
    transport: Transport,
    hour: int,
    *,
    generation: int = 0,
) -> SnapshotOutcome:
    """Fetch and decode one hourly snapshot.

    Records are **not** validated here; the returned snapshot may contain
    malformed entries that consumers skip.

    Returns
    -------
    SnapshotOutcome
        A success carrying the :class:`Snapshot`, or a typed failure.
        Fetch errors are logged, never raised.
    """
    try:
        snapshot = await _read_snapshot(config, transport, hour)
    except BalloonFetchError as exc:
        status_code = exc.status_code if isinstance(exc, BalloonTransportError) else None
        _logger.warning("Failed to fetch data from %d hours ago (%02d.json): %s", hour, hour, exc)
        return SnapshotOutcome.failed(
            hour,
            _failure_kind(exc),
            str(exc),
            generation=generation,
            status_code=status_code,
        )

    _logger.debug("Parsed %d records from %02d.json", len(snapshot), hour)
    return SnapshotOutcome.success(snapshot, generation=generation)


async def fetch_snapshot_or_none(config: BalloonConfig, transport: Transport, hour: int) -> Snapshot | None:
    """Nullable form of :func:`fetch_snapshot`."""
    outcome = await fetch_snapshot(config, transport, hour)
    return outcome.snapshot


async def fetch_all_snapshots(
    config: BalloonConfig,
    transport: Transport,
    hours: Iterable[int] | None = None,
    *,
    generation: int = 0,
    on_outcome: Callable[[SnapshotOutcome], None] | None = None,
) -> list[SnapshotOutcome]:
    """Fetch every hour concurrently and wait for all of them to settle.

    Parameters
    ----------
    hours
        Hour offsets to fetch; defaults to ``range(config.hours)``.
    generation
        Load-cycle tag copied into every outcome.
    on_outcome
        Called with each outcome as soon as its fetch resolves, before the
        join completes.

    Returns
    -------
    list[SnapshotOutcome]
        One outcome per requested hour, in request order.
    """
    requested = list(range(config.hours) if hours is None else hours)

    async def _one(hour: int) -> SnapshotOutcome:
        outcome = await fetch_snapshot(config, transport, hour, generation=generation)
        if on_outcome is not None:
            on_outcome(outcome)
        return outcome

    return list(await asyncio.gather(*(_one(hour) for hour in requested)))
