"""HTTP transport for reading snapshot documents."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from pyballoon._constants import NO_CACHE_HEADERS, USER_AGENT
from pyballoon.config import BalloonConfig
from pyballoon.exceptions import BalloonTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the ingestion layer.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, url: str) -> str:
        ...


class HttpTransport:
    """Uncached GET requests over a shared ``aiohttp`` session."""

    def __init__(self, config: BalloonConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        # Without a configured timeout the session's own default applies.
        self._request_kwargs: dict[str, aiohttp.ClientTimeout] = {}
        if config.request_timeout is not None:
            self._request_kwargs["timeout"] = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, url: str) -> str:
        """GET *url* and return the body decoded as UTF-8.

        Raises
        ------
        BalloonTransportError
            On connection failure, a non-2xx status, or a body that is not
            valid UTF-8.
        """
        headers = {"user-agent": USER_AGENT, **NO_CACHE_HEADERS}
        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, **self._request_kwargs) as resp:
                if not 200 <= resp.status < 300:
                    try:
                        detail = (await resp.text())[: self._config.log_excerpt_chars // 2]
                    except (aiohttp.ClientError, UnicodeDecodeError):
                        detail = ""
                    raise BalloonTransportError(
                        f"HTTP {resp.status}: {resp.reason}. {detail}".rstrip(),
                        status_code=resp.status,
                        url=url,
                    )
                text = await resp.text(encoding="utf-8")
        except BalloonTransportError:
            raise
        except UnicodeDecodeError as exc:
            raise BalloonTransportError(f"Response from {url} is not valid UTF-8", url=url) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise BalloonTransportError(f"Request to {url} failed: {exc!r}", url=url) from exc

        _logger.debug("Received %d characters from %s", len(text), url)
        return text
