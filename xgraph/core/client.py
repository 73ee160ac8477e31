"""High-level client - owns the transport and exposes the graph operations."""

import asyncio
from collections.abc import AsyncIterator

from xgraph.config import ClientConfig
from xgraph.core import mutations
from xgraph.core.lookup import UserLookup
from xgraph.core.pagination import MAX_PAGE_SIZE, fetch_page
from xgraph.core.transport import Transport
from xgraph.exceptions import ConfigError, XGraphError
from xgraph.logging import configure_logging, get_logger
from xgraph.models.page import Page
from xgraph.models.profile import Profile
from xgraph.proxy.rotating import ProxyProvider


class GraphClient:
    """
    Social-graph client: following/followers pages and follow/unfollow.

    Example:
        async with GraphClient() as client:
            profiles, cursor = await client.following("44196397", 50)
            while cursor:
                more, cursor = await client.following("44196397", 50, cursor)
                profiles.extend(more)
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ):
        """
        Initialize client with optional configuration.

        Args:
            config: ClientConfig instance, uses defaults if None
            transport: Pre-built Transport; the client then leaves closing it to the caller
        """
        self.config = config or ClientConfig()
        self._transport = transport
        self._owns_transport = transport is None
        self._lookup: UserLookup | None = None
        self._proxy: ProxyProvider | None = None
        self._log = get_logger("client")

    async def __aenter__(self) -> "GraphClient":
        """Async context manager entry - open the HTTP session."""
        configure_logging(self.config)

        if self.config.proxy_urls:
            self._proxy = ProxyProvider(self.config.proxy_urls, self.config.proxy_mode)

        if self._transport is None:
            proxy = await self._proxy.get_next() if self._proxy else None
            self._transport = Transport.from_config(self.config, proxy=proxy)

        self._lookup = UserLookup(self._transport, self.config)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close the HTTP session if we opened it."""
        if self._owns_transport and self._transport is not None:
            await self._transport.aclose()
            self._transport = None
        self._lookup = None

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            raise XGraphError("GraphClient must be used inside 'async with'")
        return self._transport

    @property
    def lookup(self) -> UserLookup:
        if self._lookup is None:
            raise XGraphError("GraphClient must be used inside 'async with'")
        return self._lookup

    def _require_session(self, operation: str) -> None:
        if not self.config.has_session:
            raise ConfigError(
                f"{operation} requires an authenticated session; "
                "set XGRAPH_AUTH_TOKEN and XGRAPH_CT0"
            )

    async def fetch_page(
        self,
        user_id: str,
        count: int = MAX_PAGE_SIZE,
        cursor: str | None = None,
    ) -> Page:
        """
        Fetch one page of the Following timeline.

        Args:
            user_id: Numeric account id
            count: Page size, capped at 50
            cursor: Cursor from the previous page, None for the first

        Returns:
            Page with profiles and next/previous cursors
        """
        self._require_session("Following")
        return await fetch_page(self.transport, user_id, count, cursor, self.config)

    async def following(
        self,
        user_id: str,
        count: int = MAX_PAGE_SIZE,
        cursor: str | None = None,
    ) -> tuple[list[Profile], str | None]:
        """Accounts ``user_id`` follows, one page at a time.

        Returns:
            Tuple of (profiles, next_cursor)
        """
        page = await self.fetch_page(user_id, count, cursor)
        return list(page.profiles), page.next

    async def followers(
        self,
        user_id: str,
        count: int = MAX_PAGE_SIZE,
        cursor: str | None = None,
    ) -> tuple[list[Profile], str | None]:
        """Followers of ``user_id``, one page at a time.

        Served by the Following timeline query, so results match
        :meth:`following` for the same arguments.

        Returns:
            Tuple of (profiles, next_cursor)
        """
        page = await self.fetch_page(user_id, count, cursor)
        return list(page.profiles), page.next

    async def iter_following(
        self,
        user_id: str,
        count: int = MAX_PAGE_SIZE,
        max_pages: int | None = None,
        delay_ms: int | None = None,
        cursor: str | None = None,
    ) -> AsyncIterator[Page]:
        """
        Walk the Following timeline page by page.

        Stops when a page has no next cursor, repeats the cursor it was
        requested with, or ``max_pages`` is reached. Pages holding only
        cursors are yielded and followed.

        Args:
            user_id: Numeric account id
            count: Page size, capped at 50
            max_pages: Optional upper bound on pages fetched
            delay_ms: Delay between requests (uses config default if None)
            cursor: Cursor to resume from, None starts at the first page

        Yields:
            Pages in timeline order
        """
        delay = delay_ms if delay_ms is not None else self.config.request_delay_ms
        fetched = 0

        while True:
            page = await self.fetch_page(user_id, count, cursor)
            fetched += 1
            yield page

            if page.next is None or page.next == cursor:
                break
            if max_pages is not None and fetched >= max_pages:
                break

            cursor = page.next
            if delay > 0:
                await asyncio.sleep(delay / 1000)

        self._log.info("pagination_complete", user_id=user_id, pages=fetched)

    async def get_user_id(self, handle: str) -> str:
        """Resolve an @handle to its numeric account id."""
        return await self.lookup.get_user_id(handle)

    async def follow(self, handle: str) -> None:
        """Follow ``handle``. Success means the endpoint answered 2xx."""
        self._require_session("follow")
        await mutations.follow(self.transport, self.lookup, handle, self.config)

    async def unfollow(self, handle: str) -> None:
        """Unfollow ``handle``. Success means the endpoint answered 2xx."""
        self._require_session("unfollow")
        await mutations.unfollow(self.transport, self.lookup, handle, self.config)
