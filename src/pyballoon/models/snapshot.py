"""Hourly snapshot model."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pyballoon._constants import SNAPSHOT_HOURS
from pyballoon.models.record import Record, coerce_record


class Snapshot(BaseModel):
    """All raw records published for one hour offset.

    ``records`` holds the entries exactly as decoded, malformed ones
    included. Positional indices are meaningful (they are the only
    identity the feed provides), so nothing is ever filtered out of the
    list itself; consumers use :meth:`valid_records` or :meth:`record_at`.

    Parameters
    ----------
    hour : int
        Hour offset, ``0`` is the most recent snapshot.
    records : list
        Decoded entries, nominally ``[lat, lon]`` or ``[lat, lon, alt]``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hour: int = Field(ge=0, lt=SNAPSHOT_HOURS)
    records: list[Any] = Field(default_factory=list)
    repaired: bool = False

    def __len__(self) -> int:
        return len(self.records)

    def record_at(self, index: int) -> Record | None:
        """Return the validated record at *index*, or ``None`` if missing/invalid."""
        if not 0 <= index < len(self.records):
            return None
        return coerce_record(self.records[index], index)

    def valid_records(self) -> Iterator[Record]:
        for index, raw in enumerate(self.records):
            record = coerce_record(raw, index)
            if record is not None:
                yield record

    @property
    def invalid_count(self) -> int:
        return len(self.records) - sum(1 for _ in self.valid_records())
