"""Proxy rotation for outbound HTTP sessions."""

import asyncio
import random
from pathlib import Path

from xgraph.config import ProxyMode


class ProxyProvider:
    """Hands out proxy URLs for new transport sessions."""

    def __init__(self, proxy_urls: list[str], mode: ProxyMode = ProxyMode.RANDOM):
        """
        Args:
            proxy_urls: Proxy URLs (e.g., "http://proxy:8080")
            mode: Selection strategy; ProxyMode.NONE disables proxying
        """
        self.proxies = list(proxy_urls)
        self.mode = mode
        self._index = 0
        self._lock = asyncio.Lock()

    @property
    def has_proxies(self) -> bool:
        return len(self.proxies) > 0

    @property
    def enabled(self) -> bool:
        return self.has_proxies and self.mode != ProxyMode.NONE

    def _pick(self) -> str | None:
        if not self.enabled:
            return None
        if self.mode == ProxyMode.ROUND_ROBIN:
            proxy = self.proxies[self._index % len(self.proxies)]
            self._index += 1
            return proxy
        return random.choice(self.proxies)

    async def get_next(self) -> str | None:
        """Next proxy URL, or None when proxying is disabled."""
        async with self._lock:
            return self._pick()

    def get_sync(self) -> str | None:
        """Same as :meth:`get_next` for code outside an event loop."""
        return self._pick()

    @classmethod
    def from_file(cls, filepath: str | Path, mode: ProxyMode = ProxyMode.RANDOM) -> "ProxyProvider":
        """Load proxy URLs from a file, one per line; blank lines and # comments are skipped."""
        lines = Path(filepath).read_text(encoding="utf-8").splitlines()
        proxies = [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]
        return cls(proxies, mode)
