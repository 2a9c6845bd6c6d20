from __future__ import annotations

import json

import pytest

from pyballoon.ingestion.repair import ParseFailure, parse_snapshot, parse_snapshot_text, repair_json_text


@pytest.mark.parametrize(
    "text",
    [
        "[]",
        "[[1.5, 2.5], [3, 4, 5.25]]",
        '[[10, 20, 1.1], null, "oops", [1]]',
        "  [[-90, -180]]\n",
    ],
)
def test_valid_json_decodes_like_strict_json(text: str) -> None:
    result = parse_snapshot_text(text)

    assert result.ok
    assert result.repaired is False
    assert result.value == json.loads(text)
    assert parse_snapshot(text) == json.loads(text)


def test_trailing_commas_are_removed() -> None:
    result = parse_snapshot_text("[[1, 2], [3, 4],\n]")

    assert result.ok
    assert result.repaired is True
    assert result.value == [[1, 2], [3, 4]]


def test_truncated_array_is_closed() -> None:
    result = parse_snapshot_text("[[1, 2], [3, 4]")

    assert result.value == [[1, 2], [3, 4]]
    assert result.repaired is True


def test_truncated_after_separator_is_not_recovered() -> None:
    # Separators are stripped before closers are appended, so the dangling
    # comma survives into "[[1, 2], [3, 4],]".
    assert parse_snapshot("[[1, 2], [3, 4],") is None
    assert parse_snapshot("[[1, 2], [3, 4,") is None


def test_repair_appends_braces_before_brackets() -> None:
    assert repair_json_text('[{"a": [1, 2') == '[{"a": [1, 2}]]'
    assert repair_json_text("[[1, 2],]") == "[[1, 2]]"
    assert repair_json_text("[1, 2]") == "[1, 2]"


def test_brace_closer_order_is_a_heuristic() -> None:
    # Closers are appended as "}" then "]", which cannot close "[{" nesting
    # opened in that order.
    result = parse_snapshot_text('[{"lat": 1, "lon": [2')

    assert not result.ok
    assert result.failure is ParseFailure.PARSE


def test_object_body_is_a_shape_failure() -> None:
    result = parse_snapshot_text('{"balloons": []}')

    assert result.failure is ParseFailure.SHAPE
    assert parse_snapshot('{"balloons": []}') is None


def test_scalar_after_repair_is_a_shape_failure() -> None:
    result = parse_snapshot_text('{"a": 1')

    assert result.failure is ParseFailure.SHAPE
    assert result.repaired is True


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "<html>502 Bad Gateway</html>",
        "[[1, 2] [3, 4]]",
        "]]]",
        "[" * 100_000,
        "{" * 100_000,
        "\x00\x01",
        "[1, 2, 3e999999999999999999999]",
    ],
)
def test_never_raises(text: str) -> None:
    result = parse_snapshot_text(text)
    assert result.ok is (result.value is not None)


def test_non_text_input_is_a_parse_failure() -> None:
    result = parse_snapshot_text(None)  # type: ignore[arg-type]

    assert result.failure is ParseFailure.PARSE
