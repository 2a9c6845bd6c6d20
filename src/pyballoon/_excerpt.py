"""Helpers for bounded debug/warning logging.

Snapshot bodies can be megabytes of JSON. This module trims them before
they are interpolated into log messages.
"""

from __future__ import annotations


def excerpt_for_log(text: str, *, max_string: int = 200) -> str:
    """Return *text* cut to *max_string* characters, noting how much was dropped."""
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated {len(text) - max_string} chars>"
    return text
