"""Per-hour fetch outcomes.

Every fetch in a load cycle resolves to exactly one :class:`SnapshotOutcome`,
success or typed failure. Only the state/store layer is allowed to merge
them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyballoon._constants import SNAPSHOT_HOURS
from pyballoon.models.snapshot import Snapshot


class FetchFailureKind(StrEnum):
    NETWORK = "network"
    EMPTY_BODY = "empty_body"
    PARSE = "parse"
    SHAPE = "shape"


class FetchFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FetchFailureKind
    message: str = ""
    status_code: int | None = None


class SnapshotOutcome(BaseModel):
    """Result of fetching one hour offset within one load cycle."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, lt=SNAPSHOT_HOURS)
    generation: int = Field(default=0, ge=0, description="Load cycle that issued the fetch")
    snapshot: Snapshot | None = None
    failure: FetchFailure | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _exactly_one_result(self) -> SnapshotOutcome:
        if (self.snapshot is None) == (self.failure is None):
            raise ValueError("outcome needs exactly one of snapshot or failure")
        if self.snapshot is not None and self.snapshot.hour != self.hour:
            raise ValueError(f"snapshot hour {self.snapshot.hour} does not match outcome hour {self.hour}")
        return self

    @property
    def ok(self) -> bool:
        return self.snapshot is not None

    @classmethod
    def success(cls, snapshot: Snapshot, *, generation: int = 0) -> SnapshotOutcome:
        return cls(hour=snapshot.hour, generation=generation, snapshot=snapshot)

    @classmethod
    def failed(
        cls,
        hour: int,
        kind: FetchFailureKind,
        message: str = "",
        *,
        generation: int = 0,
        status_code: int | None = None,
    ) -> SnapshotOutcome:
        return cls(
            hour=hour,
            generation=generation,
            failure=FetchFailure(kind=kind, message=message, status_code=status_code),
        )
