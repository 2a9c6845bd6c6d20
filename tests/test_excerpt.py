from __future__ import annotations

from pyballoon._excerpt import excerpt_for_log


def test_excerpt_truncates_long_strings() -> None:
    excerpt = excerpt_for_log("x" * 600, max_string=10)

    assert excerpt.startswith("x" * 10)
    assert "<truncated 590 chars>" in excerpt


def test_excerpt_passes_short_strings_through() -> None:
    assert excerpt_for_log("[[1, 2],") == "[[1, 2],"
    assert excerpt_for_log("x" * 200) == "x" * 200
