#!/usr/bin/env python3
"""Run a load cycle against the snapshot feed and dump the result.

Fetches all hourly snapshots, reports which hours failed and why, the
current positions and the correlated trajectories, either as a readable
summary or as machine-readable JSON.

Usage
-----
::

    python scripts/dump_snapshots.py
    PYBALLOON_PROXY_PREFIX="https://api.allorigins.win/raw?url=" python scripts/dump_snapshots.py

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --order ORDER        oldest_first (default) or ascending_offset
    --zoom ZOOM          Zoom level used to report the trajectory style
    --hours N            Only fetch the N most recent hours
    --proxy PREFIX       Route requests through a pass-through proxy
    --watch              Keep running and auto-refresh on the configured interval
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyballoon import BalloonConfig, BalloonTracker, HourOrder, LoadResult  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _summary(result: LoadResult, tracker: BalloonTracker, *, limit: int = 10) -> list[str]:
    out: list[str] = [_section(f"LOAD CYCLE {result.generation}")]
    out.append(f"  status    : {result.status.value}")
    out.append(f"  message   : {result.message}")
    out.append(f"  hours     : {result.available_hours}/{result.requested_hours} available")
    out.append(f"  display   : hour {result.display_hour}")

    if result.failures:
        out.append(_section("FAILED HOURS"))
        for hour, failure in sorted(result.failures.items()):
            status = f" (HTTP {failure.status_code})" if failure.status_code else ""
            out.append(f"  {hour:02d}: {failure.kind.value}{status} {failure.message}")

    out.append(_section(f"CURRENT POSITIONS ({len(result.positions)}, skipped {result.skipped_positions})"))
    for position in result.positions[:limit]:
        out.append("  " + " | ".join(position.describe()))
    if len(result.positions) > limit:
        out.append(f"  … {len(result.positions) - limit} more")

    style = tracker.style
    out.append(_section(f"TRAJECTORIES ({len(result.trajectories)})"))
    out.append(f"  style     : weight={style.weight} opacity={style.opacity} color={style.color} (zoom {tracker.zoom})")
    for trajectory in result.trajectories[:limit]:
        gaps = trajectory.gaps()
        gap_note = f", {len(gaps)} gap(s)" if gaps else ""
        out.append(f"  #{trajectory.index + 1}: {len(trajectory)} points, hours {trajectory.hours}{gap_note}")
    if len(result.trajectories) > limit:
        out.append(f"  … {len(result.trajectories) - limit} more")
    return out


def _as_json(result: LoadResult, tracker: BalloonTracker) -> dict[str, Any]:
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "result": result.model_dump(mode="json"),
        "stats": tracker.stats().model_dump(mode="json"),
        "style": tracker.style.model_dump(mode="json"),
    }


def _emit(payload: str, output: str | None) -> None:
    if output:
        Path(output).write_text(payload, encoding="utf-8")
        print(f"Written to {output}", file=sys.stderr)
    else:
        print(payload)


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(description="Dump the hourly balloon snapshot feed")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="Output JSON")
    parser.add_argument("--output", "-o", help="Write output to file")
    parser.add_argument(
        "--order",
        choices=[order.value for order in HourOrder],
        default=HourOrder.OLDEST_FIRST.value,
        help="Hour order used to build trajectories",
    )
    parser.add_argument("--zoom", type=float, default=None, help="Zoom level for the reported style")
    parser.add_argument("--hours", type=int, default=None, help="Number of hourly snapshots to fetch")
    parser.add_argument("--proxy", default=None, help="Pass-through proxy prefix")
    parser.add_argument("--watch", action="store_true", help="Keep running with auto-refresh")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.hours is not None:
        overrides["hours"] = args.hours
    if args.proxy is not None:
        overrides["proxy_prefix"] = args.proxy
    if args.zoom is not None:
        overrides["initial_zoom"] = args.zoom
    config = BalloonConfig.from_env(**overrides)

    async with BalloonTracker(config, order=HourOrder(args.order)) as tracker:
        result = await tracker.load()
        if args.json_mode:
            _emit(json.dumps(_as_json(result, tracker), indent=2, default=str, ensure_ascii=False), args.output)
        else:
            _emit("\n".join(_summary(result, tracker)), args.output)

        if args.watch:
            tracker.start_auto_refresh()
            print(f"Auto-refreshing every {config.auto_refresh_interval:.0f}s, Ctrl+C to stop", file=sys.stderr)
            previous = result.generation
            while True:
                await asyncio.sleep(1)
                latest = tracker.last_result
                if latest is not None and latest.generation != previous:
                    previous = latest.generation
                    print("\n".join(_summary(latest, tracker)))


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
