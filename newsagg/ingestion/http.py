"""Shared HTTP client for feed and page fetches."""

import asyncio
from typing import Optional

import aiohttp

from ..config.settings import settings


class HttpClient:
    """aiohttp session with the aggregator's User-Agent and a global cap on
    in-flight requests.

    The semaphore is held only for the duration of one GET, so callers may
    nest fan-outs (feeds, then pages per item) without deadlocking.
    """

    def __init__(
        self,
        max_concurrent_requests: int = None,
        user_agent: str = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.user_agent = user_agent or settings.user_agent
        self.semaphore = asyncio.Semaphore(
            max_concurrent_requests or settings.max_concurrent_requests
        )
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent}
            )
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self):
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    async def get_text(self, url: str, timeout: float) -> str:
        """GET a URL and return its body. Raises on timeout, network error
        or a non-2xx status."""
        if self.session is None:
            raise RuntimeError("HttpClient used outside of its context")

        async with self.semaphore:
            async with self.session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=timeout),
                headers={"User-Agent": self.user_agent},
            ) as response:
                response.raise_for_status()
                return await response.text(errors="replace")
