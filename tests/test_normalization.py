from __future__ import annotations

import math
from decimal import Decimal

import pytest

from pyballoon.config import BalloonConfig
from pyballoon.exceptions import BalloonConfigError, BalloonValidationError
from pyballoon.ingestion.normalize import is_number, is_valid_coordinate, safe_float
from pyballoon.models.record import coerce_record, parse_record


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (0, 0),
        (90, 180),
        (-90, -180),
        (90.0, -180.0),
        (-89.9999, 179.9999),
        (45, 7.5),
    ],
)
def test_valid_coordinates(lat: float, lon: float) -> None:
    assert is_valid_coordinate(lat, lon) is True


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (90.0001, 0),
        (-90.0001, 0),
        (0, 180.0001),
        (0, -180.0001),
        (math.nan, 0),
        (0, math.nan),
        (math.inf, 0),
        (0, -math.inf),
        ("45", 7),
        (45, "7"),
        (None, 7),
        (True, 7),
        (45, False),
        ([45], 7),
    ],
)
def test_invalid_coordinates(lat: object, lon: object) -> None:
    assert is_valid_coordinate(lat, lon) is False


def test_is_number_accepts_other_real_types() -> None:
    assert is_number(3) is True
    assert is_number(Decimal("1.5")) is False  # Decimal is not registered as numbers.Real
    assert is_number(True) is False


def test_safe_float_handles_placeholders() -> None:
    assert safe_float("12.5") == 12.5
    assert safe_float(3) == 3.0
    assert safe_float("") is None
    assert safe_float("--") is None
    assert safe_float("abc") is None
    assert safe_float(math.nan) is None
    assert safe_float(True) is None


def test_oversized_integers_are_rejected_without_raising() -> None:
    huge = 10**400

    assert is_number(huge) is False
    assert is_number(-huge) is False
    assert is_valid_coordinate(huge, 0) is False
    assert is_valid_coordinate(0, -huge) is False
    assert safe_float(huge) is None


def test_record_with_oversized_values_is_skipped() -> None:
    huge = 10**400

    assert coerce_record([huge, 0], index=0) is None
    with pytest.raises(BalloonValidationError):
        parse_record([huge, 2], index=1)

    record = parse_record([1, 2, huge], index=2)
    assert record.coordinates == (1.0, 2.0)
    assert record.altitude is None


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYBALLOON_BASE_URL", "https://example.test/feed")
    monkeypatch.setenv("PYBALLOON_PROXY_PREFIX", "https://proxy.test/raw?url=")
    monkeypatch.setenv("PYBALLOON_HOURS", "12")
    monkeypatch.setenv("PYBALLOON_AUTO_REFRESH_INTERVAL", "60")
    monkeypatch.setenv("PYBALLOON_SHOW_MARKERS", "off")

    config = BalloonConfig.from_env()

    assert config.base_url == "https://example.test/feed"
    assert config.proxy_prefix == "https://proxy.test/raw?url="
    assert config.hours == 12
    assert config.auto_refresh_interval == 60.0
    assert config.show_markers is False
    assert config.show_trajectories is True


def test_config_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYBALLOON_HOURS", "12")
    monkeypatch.setenv("PYBALLOON_PROXY_PREFIX", "")

    config = BalloonConfig.from_env(hours=6)

    assert config.hours == 6
    assert config.proxy_prefix is None


def test_config_rejects_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(BalloonConfigError):
        BalloonConfig(hours=25)
    with pytest.raises(BalloonConfigError):
        BalloonConfig(auto_refresh_interval=0)

    monkeypatch.setenv("PYBALLOON_REQUEST_TIMEOUT", "soon")
    with pytest.raises(BalloonConfigError, match="PYBALLOON_REQUEST_TIMEOUT"):
        BalloonConfig.from_env()
