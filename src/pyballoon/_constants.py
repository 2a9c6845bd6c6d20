"""Internal constants shared across the library."""

BASE_URL = "https://a.windbornesystems.com/treasure"
USER_AGENT = "pyballoon"

#: Number of hourly snapshots published by the feed (``00.json`` .. ``23.json``).
SNAPSHOT_HOURS = 24

#: Seconds between automatic refreshes.
AUTO_REFRESH_INTERVAL: float = 5 * 60

NO_CACHE_HEADERS: dict[str, str] = {
    "cache-control": "no-cache",
    "pragma": "no-cache",
}

# ------------------------------------------------------------------
# Trajectory styling
# ------------------------------------------------------------------

TRAJECTORY_COLOR = "#3498db"

#: ``(zoom upper bound, weight, opacity)``; the first bound greater than the
#: zoom level wins, the last row has no upper bound.
ZOOM_STYLE_STEPS: tuple[tuple[float, float, float], ...] = (
    (3, 1, 0.2),
    (5, 1.5, 0.25),
    (7, 2, 0.3),
    (9, 3, 0.4),
    (11, 4, 0.5),
    (float("inf"), 5, 0.6),
)
