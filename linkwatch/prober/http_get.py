# linkwatch/prober/http_get.py
import logging
import time
from typing import Optional

import httpx

from linkwatch.prober.base import Prober, make_result
from linkwatch.schemas import ProbeResult, Target

logger = logging.getLogger(__name__)


class HttpProber(Prober):
    """
    One HTTP GET per probe. Reaching the server at all counts as up, whatever the
    status code; only transport-level failures (DNS, refused, timeout, redirect loops,
    unusable URLs) count as down. The body is never read.
    """

    def __init__(self,
                 timeout_s: Optional[float] = None,
                 follow_redirects: bool = True,
                 user_agent: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout_s = timeout_s
        self.follow_redirects = follow_redirects
        self.user_agent = user_agent
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings, transport=None) -> "HttpProber":
        return cls(timeout_s=settings.timeout_s,
                   follow_redirects=settings.follow_redirects,
                   user_agent=settings.user_agent,
                   transport=transport)

    def _client_kwargs(self) -> dict:
        kwargs = {"follow_redirects": self.follow_redirects}
        if self.timeout_s is not None:
            kwargs["timeout"] = self.timeout_s
        if self.user_agent:
            kwargs["headers"] = {"User-Agent": self.user_agent}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return kwargs

    @property
    def client(self) -> httpx.AsyncClient:
        # one pooled client for the prober's lifetime; must be used from a single event loop
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(**self._client_kwargs())
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def probe_once(self, target: Target) -> ProbeResult:
        start = time.perf_counter()
        try:
            async with self.client.stream("GET", target) as resp:
                status_code = resp.status_code
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            rtt_ms = (time.perf_counter() - start) * 1000.0
            logger.debug("probe %s failed after %.1fms: %r", target, rtt_ms, e)
            return make_result(target, False, rtt_ms=rtt_ms,
                               error=f"{type(e).__name__}: {e}")

        rtt_ms = (time.perf_counter() - start) * 1000.0
        logger.debug("probe %s -> %s in %.1fms", target, status_code, rtt_ms)
        return make_result(target, True, status_code=status_code, rtt_ms=rtt_ms)
