"""Trajectory and styling models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pyballoon._constants import TRAJECTORY_COLOR


class TrajectoryPoint(BaseModel):
    """A validated position tagged with the hour offset it was observed at."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0)
    latitude: float
    longitude: float

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class TrajectoryGap(BaseModel):
    """A path segment that connects two non-adjacent hours directly."""

    model_config = ConfigDict(frozen=True)

    from_hour: int
    to_hour: int

    @property
    def missing_hours(self) -> int:
        return abs(self.from_hour - self.to_hour) - 1


class Trajectory(BaseModel):
    """Time-ordered positions inferred for one positional index.

    The feed carries no object id, so ``index`` (the entry's position in
    every snapshot) stands in for identity. Points are kept sparse: hours
    where the index was missing or invalid are simply absent, and
    :meth:`gaps` reports where that happened.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    points: tuple[TrajectoryPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def coordinates(self) -> list[tuple[float, float]]:
        """The plain ``(lat, lon)`` path handed to renderers."""
        return [point.coordinates for point in self.points]

    @property
    def hours(self) -> list[int]:
        return [point.hour for point in self.points]

    def gaps(self) -> list[TrajectoryGap]:
        return [
            TrajectoryGap(from_hour=a.hour, to_hour=b.hour)
            for a, b in zip(self.points, self.points[1:])
            if abs(a.hour - b.hour) > 1
        ]


class TrajectoryStyle(BaseModel):
    """Line style applied uniformly to every rendered trajectory."""

    model_config = ConfigDict(frozen=True)

    weight: float
    opacity: float = Field(ge=0, le=1)
    color: str = TRAJECTORY_COLOR
