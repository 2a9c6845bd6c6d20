"""Best-effort decoding of snapshot documents.

The feed occasionally serves truncated or sloppy JSON (a trailing comma, a
document cut off before its closing brackets). :func:`parse_snapshot_text`
decodes strictly first and, only if that fails, applies one bounded repair
pass before decoding again.

The repair is textual. Brackets inside string literals are counted like any
other, and missing closers are appended as all ``}`` followed by all ``]``
regardless of the order they were opened in. That covers the truncations
seen in practice (arrays of arrays) and is not meant to recover arbitrary
nesting.

Nothing in this module knows about HTTP; it only sees text.
"""

from __future__ import annotations

import dataclasses
import json
import re
from enum import StrEnum
from typing import Any

_TRAILING_SEPARATOR = re.compile(r",(\s*[}\]])")


class ParseFailure(StrEnum):
    PARSE = "parse"
    SHAPE = "shape"


@dataclasses.dataclass(frozen=True, slots=True)
class ParseResult:
    """Tagged result: either ``value`` (a decoded list) or ``failure``."""

    value: list[Any] | None = None
    failure: ParseFailure | None = None
    error: str = ""
    repaired: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None


def repair_json_text(text: str) -> str:
    """Apply the repair heuristics to *text* and return the result."""
    repaired = _TRAILING_SEPARATOR.sub(r"\1", text)

    missing_braces = repaired.count("{") - repaired.count("}")
    missing_brackets = repaired.count("[") - repaired.count("]")
    if missing_braces > 0:
        repaired += "}" * missing_braces
    if missing_brackets > 0:
        repaired += "]" * missing_brackets
    return repaired


def _strict_decode(text: str) -> tuple[Any, str]:
    """Return ``(value, "")`` or ``(None, error)``; never raises."""
    try:
        return json.loads(text), ""
    except ValueError as exc:
        return None, str(exc)
    except RecursionError:
        return None, "document nested too deeply"


def parse_snapshot_text(text: str) -> ParseResult:
    """Decode *text* into a list of raw records, repairing it if needed."""
    if not isinstance(text, str):
        return ParseResult(failure=ParseFailure.PARSE, error=f"expected text, got {type(text).__name__}")

    value, error = _strict_decode(text)
    repaired = False
    if error:
        value, repair_error = _strict_decode(repair_json_text(text))
        if repair_error:
            return ParseResult(failure=ParseFailure.PARSE, error=f"{error}; after repair: {repair_error}")
        repaired = True

    if not isinstance(value, list):
        return ParseResult(
            failure=ParseFailure.SHAPE,
            error=f"expected a JSON array, got {type(value).__name__}",
            repaired=repaired,
        )
    return ParseResult(value=value, repaired=repaired)


def parse_snapshot(text: str) -> list[Any] | None:
    """Nullable form of :func:`parse_snapshot_text`."""
    return parse_snapshot_text(text).value
