"""Position record model."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from pyballoon.exceptions import BalloonValidationError
from pyballoon.ingestion.normalize import is_valid_coordinate, safe_float

_logger = logging.getLogger(__name__)


class Record(BaseModel):
    """One tracked object's position within a snapshot.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, within [-90, 90].
    longitude : float
        Longitude in degrees, within [-180, 180].
    altitude : float or None
        Altitude in km when the feed supplies one. Informational only.
    index : int or None
        Positional index inside the snapshot the record came from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float
    longitude: float
    altitude: float | None = None
    index: int | None = Field(default=None, ge=0)

    @field_validator("altitude", mode="before")
    @classmethod
    def _coerce_altitude(cls, value: Any) -> float | None:
        return safe_float(value)

    @model_validator(mode="after")
    def _check_range(self) -> Record:
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise ValueError(f"coordinates out of range: ({self.latitude}, {self.longitude})")
        return self

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


def parse_record(raw: Any, index: int | None = None) -> Record:
    """Build a :class:`Record` from a raw ``[lat, lon]`` / ``[lat, lon, alt]`` entry.

    Raises
    ------
    BalloonValidationError
        If *raw* is not a list of at least two entries, or its coordinates
        are not finite numbers inside the valid ranges.
    """
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)) or len(raw) < 2:
        raise BalloonValidationError(f"record is not a [lat, lon] list: {raw!r}", index=index)

    lat, lon = raw[0], raw[1]
    # Checked up front so that numeric strings are not coerced by pydantic.
    if not is_valid_coordinate(lat, lon):
        raise BalloonValidationError(f"invalid coordinates: ({lat!r}, {lon!r})", index=index)

    try:
        return Record(
            latitude=float(lat),
            longitude=float(lon),
            altitude=raw[2] if len(raw) > 2 else None,
            index=index,
        )
    except ValidationError as exc:
        raise BalloonValidationError(f"invalid record {raw!r}: {exc}", index=index) from exc


def coerce_record(raw: Any, index: int | None = None) -> Record | None:
    """Like :func:`parse_record`, but returns ``None`` for an invalid entry."""
    try:
        return parse_record(raw, index)
    except BalloonValidationError as exc:
        _logger.debug("Skipping record %s: %s", index, exc)
        return None
