from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence

import httpx

from pokedex.models import Found, MediaHandle, NotFound, ProbeResult
from pokedex.time_utils import timestamp_str

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 5.0

MEDIA_CONTENT_TYPES = {"application/ogg", "application/octet-stream"}
MEDIA_CONTENT_PREFIXES = ("audio/", "video/")

Attempt = Callable[[str], Awaitable["MediaHandle | None"]]


class ProbeState(Enum):
    IDLE = "idle"
    TRYING = "trying"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


class NotMediaError(Exception):
    pass


def is_media_content_type(content_type: str) -> bool:
    ct = content_type.split(";")[0].strip().lower()
    return ct in MEDIA_CONTENT_TYPES or ct.startswith(MEDIA_CONTENT_PREFIXES)


class MediaProber:
    """Sequential fallback over candidate media URLs.

    One candidate is in flight at a time. The first one that becomes
    playable wins and nothing after it is touched. Failures (including
    timeouts) are logged and recorded, never raised.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        attempt: Attempt | None = None,
        failed_logger=None,
    ) -> None:
        if client is None and attempt is None:
            raise ValueError("MediaProber needs an http client or an attempt function")
        self.client = client
        self.timeout = timeout
        self.attempt: Attempt = attempt or self._load_media
        self.failed_logger = failed_logger
        self.state = ProbeState.IDLE
        self.index = -1

    async def probe(self, urls: Sequence[str]) -> ProbeResult:
        self.state = ProbeState.IDLE
        self.index = -1
        attempts = 0

        for i, url in enumerate(urls):
            self.state = ProbeState.TRYING
            self.index = i
            attempts += 1
            handle = await self._try_one(url)
            if handle is not None:
                self.state = ProbeState.SUCCESS
                logger.debug("probe hit url=%s attempts=%d", url, attempts)
                return Found(url=url, handle=handle)

        self.state = ProbeState.EXHAUSTED
        logger.debug("probe exhausted attempts=%d", attempts)
        return NotFound(attempts=attempts)

    async def _try_one(self, url: str) -> MediaHandle | None:
        try:
            handle = await asyncio.wait_for(self.attempt(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            self._record(url, "PROBE_TIMEOUT", f"no answer within {self.timeout}s")
            return None
        except NotMediaError as exc:
            self._record(url, "NOT_MEDIA", str(exc))
            return None
        except Exception as exc:  # noqa: BLE001
            self._record(url, "PROBE_FAIL", f"{type(exc).__name__}: {exc}")
            return None

        if handle is None:
            self._record(url, "PROBE_FAIL", "not playable")
        return handle

    def _record(self, url: str, reason: str, detail: str) -> None:
        logger.debug("probe miss url=%s reason=%s detail=%s", url, reason, detail)
        if self.failed_logger is None:
            return
        try:
            self.failed_logger.append(
                {
                    "time": timestamp_str(),
                    "url": url,
                    "reason": reason,
                    "detail": detail,
                }
            )
        except OSError as exc:
            logger.debug("probe log write failed: %s", exc)

    async def _load_media(self, url: str) -> MediaHandle | None:
        assert self.client is not None
        async with self.client.stream("GET", url, follow_redirects=True) as response:
            if not response.is_success:
                raise NotMediaError(f"status={response.status_code}")

            content_type = (response.headers.get("content-type") or "").split(";")[0].strip().lower()
            if not is_media_content_type(content_type):
                raise NotMediaError(f"content_type={content_type or 'unknown'}")

            # One chunk is enough to know the body is readable.
            async for chunk in response.aiter_bytes():
                if chunk:
                    break
            else:
                raise NotMediaError("empty body")

            return MediaHandle(
                url=str(response.url),
                content_type=content_type,
                content_length=_parse_length(response.headers.get("content-length")),
            )


def _parse_length(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
