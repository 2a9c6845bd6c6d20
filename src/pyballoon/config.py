"""Client configuration for pyballoon."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyballoon._constants import AUTO_REFRESH_INTERVAL, BASE_URL, SNAPSHOT_HOURS
from pyballoon.exceptions import BalloonConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BalloonConfig:
    """Tracker configuration.

    Parameters
    ----------
    base_url : str
        Directory URL of the snapshot feed. Snapshot ``h`` is read from
        ``{base_url}/{h:02d}.json``.
    proxy_prefix : str or None
        Optional pass-through proxy. When set, the snapshot URL is
        percent-encoded and appended to this prefix
        (e.g. ``"https://api.allorigins.win/raw?url="``).
    hours : int
        Number of hourly snapshots to fetch per load cycle (1-24).
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` keeps the HTTP
        library's default.
    auto_refresh_interval : float
        Seconds between automatic load cycles.
    initial_zoom : float
        Zoom level assumed before the renderer reports one.
    show_markers : bool
        Whether current positions are handed to the renderer initially.
    show_trajectories : bool
        Whether trajectories are handed to the renderer initially.
    log_excerpt_chars : int
        Maximum number of response characters quoted in warning logs.
    """

    base_url: str = BASE_URL
    proxy_prefix: str | None = None
    hours: int = SNAPSHOT_HOURS
    request_timeout: float | None = None
    auto_refresh_interval: float = AUTO_REFRESH_INTERVAL
    initial_zoom: float = 2
    show_markers: bool = True
    show_trajectories: bool = True
    log_excerpt_chars: int = 200

    def __post_init__(self) -> None:
        if not 1 <= self.hours <= SNAPSHOT_HOURS:
            raise BalloonConfigError(f"hours must be between 1 and {SNAPSHOT_HOURS}, got {self.hours}")
        if self.auto_refresh_interval <= 0:
            raise BalloonConfigError(f"auto_refresh_interval must be positive, got {self.auto_refresh_interval}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise BalloonConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not self.base_url:
            raise BalloonConfigError("base_url must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> BalloonConfig:
        """Create configuration from ``PYBALLOON_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        BalloonConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("PYBALLOON_BASE_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        # An empty value disables the proxy.
        proxy_prefix = env.get("PYBALLOON_PROXY_PREFIX")
        if proxy_prefix is not None:
            config_kwargs["proxy_prefix"] = proxy_prefix or None

        _ENV_NUMERIC_MAP = {
            "PYBALLOON_HOURS": ("hours", int),
            "PYBALLOON_REQUEST_TIMEOUT": ("request_timeout", float),
            "PYBALLOON_AUTO_REFRESH_INTERVAL": ("auto_refresh_interval", float),
            "PYBALLOON_INITIAL_ZOOM": ("initial_zoom", float),
        }
        for env_key, (field_name, convert) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise BalloonConfigError(f"{env_key} is not a valid number: {val!r}") from exc

        if "show_markers" not in overrides:
            config_kwargs["show_markers"] = _env_bool(env.get("PYBALLOON_SHOW_MARKERS"), True)
        if "show_trajectories" not in overrides:
            config_kwargs["show_trajectories"] = _env_bool(env.get("PYBALLOON_SHOW_TRAJECTORIES"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
