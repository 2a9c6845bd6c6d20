from __future__ import annotations

import math

import pytest

from pyballoon.style import style_for_zoom


@pytest.mark.parametrize(
    ("zoom", "weight", "opacity"),
    [
        (0, 1, 0.2),
        (2, 1, 0.2),
        (2.99, 1, 0.2),
        (3, 1.5, 0.25),
        (4.5, 1.5, 0.25),
        (5, 2, 0.3),
        (6.99, 2, 0.3),
        (7, 3, 0.4),
        (9, 4, 0.5),
        (10.99, 4, 0.5),
        (11, 5, 0.6),
        (15, 5, 0.6),
        (22, 5, 0.6),
    ],
)
def test_style_bins(zoom: float, weight: float, opacity: float) -> None:
    style = style_for_zoom(zoom)

    assert style.weight == weight
    assert style.opacity == pytest.approx(opacity)


def test_style_is_uniform_color() -> None:
    assert style_for_zoom(1).color == style_for_zoom(18).color == "#3498db"


def test_negative_zoom_uses_lowest_bin() -> None:
    assert style_for_zoom(-1).weight == 1


def test_nan_zoom_falls_through_to_highest_bin() -> None:
    style = style_for_zoom(math.nan)

    assert style.weight == 5
    assert style.opacity == pytest.approx(0.6)
