"""Custom exception hierarchy for pyballoon."""

from __future__ import annotations


class BalloonError(Exception):
    """Base exception for all pyballoon errors."""


class BalloonConfigError(BalloonError):
    """Invalid or missing configuration."""


class BalloonFetchError(BalloonError):
    """A single hourly snapshot could not be turned into records.

    The fetcher catches every subclass at its boundary and degrades the
    affected hour to "unavailable"; none of them abort a load cycle.
    """

    def __init__(self, message: str, *, url: str = "", hour: int | None = None) -> None:
        self.url = url
        self.hour = hour
        super().__init__(message)


class BalloonTransportError(BalloonFetchError):
    """HTTP-level failure (network, non-200, undecodable body)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
        hour: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, url=url, hour=hour)


class BalloonEmptyBodyError(BalloonFetchError):
    """The snapshot response body was empty or whitespace only."""


class BalloonParseError(BalloonFetchError):
    """The body did not decode as JSON, even after repair."""


class BalloonShapeError(BalloonFetchError):
    """The body decoded, but not to a list of records."""


class BalloonValidationError(BalloonError):
    """A record's coordinates are out of range or not numeric.

    Only ever excludes the offending record, never the snapshot.
    """

    def __init__(self, message: str, *, index: int | None = None) -> None:
        self.index = index
        super().__init__(message)
