"""pyballoon - Async Python client for hourly balloon position snapshots."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyballoon")
except PackageNotFoundError:
    __version__ = "0+local"
from pyballoon.config import BalloonConfig
from pyballoon.exceptions import (
    BalloonConfigError,
    BalloonEmptyBodyError,
    BalloonError,
    BalloonFetchError,
    BalloonParseError,
    BalloonShapeError,
    BalloonTransportError,
    BalloonValidationError,
)
from pyballoon.ingestion.normalize import is_valid_coordinate
from pyballoon.ingestion.repair import ParseResult, parse_snapshot, parse_snapshot_text
from pyballoon.models import (
    CurrentPosition,
    LoadResult,
    LoadStatus,
    Record,
    RenderState,
    Snapshot,
    TrackerStats,
    Trajectory,
    TrajectoryPoint,
    TrajectoryStyle,
)
from pyballoon.render import Renderer
from pyballoon.state.store import SnapshotStore
from pyballoon.style import style_for_zoom
from pyballoon.tracker import BalloonTracker
from pyballoon.trajectories import HourOrder, build_paths, build_trajectories

__all__ = [
    "__version__",
    "BalloonConfig",
    "BalloonConfigError",
    "BalloonEmptyBodyError",
    "BalloonError",
    "BalloonFetchError",
    "BalloonParseError",
    "BalloonShapeError",
    "BalloonTracker",
    "BalloonTransportError",
    "BalloonValidationError",
    "CurrentPosition",
    "HourOrder",
    "LoadResult",
    "LoadStatus",
    "ParseResult",
    "Record",
    "RenderState",
    "Renderer",
    "Snapshot",
    "SnapshotStore",
    "TrackerStats",
    "Trajectory",
    "TrajectoryPoint",
    "TrajectoryStyle",
    "build_paths",
    "build_trajectories",
    "is_valid_coordinate",
    "parse_snapshot",
    "parse_snapshot_text",
    "style_for_zoom",
]
