"""httpx-based transport for X web API requests."""

from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from xgraph.config import ClientConfig
from xgraph.exceptions import ApiError, DecodeError, TransportError
from xgraph.logging import get_logger

T = TypeVar("T")

FormData = Mapping[str, str] | Sequence[tuple[str, str]]

# Headers the X web client sends with every API call
BASE_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "origin": "https://twitter.com",
    "referer": "https://twitter.com/",
    "x-twitter-active-user": "yes",
    "x-twitter-client-language": "en",
}


def build_headers(config: ClientConfig) -> dict[str, str]:
    """Default request headers for the configured session."""
    headers = {
        **BASE_HEADERS,
        "authorization": f"Bearer {config.bearer_token}",
        "user-agent": config.user_agent,
    }
    if config.has_session:
        headers["x-csrf-token"] = config.ct0
        headers["x-twitter-auth-type"] = "OAuth2Session"
    return headers


def build_cookies(config: ClientConfig) -> dict[str, str]:
    """Session cookies, empty when running without credentials."""
    if not config.has_session:
        return {}
    return {"auth_token": config.auth_token, "ct0": config.ct0}


@lru_cache(maxsize=32)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


class Transport:
    """
    Sends one request and validates the JSON body into a caller-chosen shape.

    Example:
        async with Transport.from_config(config) as transport:
            payload, headers = await transport.get(url, RelationshipTimeline)
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client
        self._log = get_logger("transport")

    @classmethod
    def from_config(cls, config: ClientConfig, proxy: str | None = None) -> "Transport":
        """
        Build a transport with session headers, cookies and optional proxy.

        Args:
            config: ClientConfig with credentials and timeouts
            proxy: Proxy URL (e.g., "http://proxy:8080")

        Returns:
            Transport owning a fresh httpx.AsyncClient
        """
        http_transport = httpx.AsyncHTTPTransport(proxy=proxy) if proxy else None
        client = httpx.AsyncClient(
            headers=build_headers(config),
            cookies=build_cookies(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            transport=http_transport,
            follow_redirects=True,
        )
        return cls(client)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(
        self,
        method: str,
        url: str,
        shape: type[T] | Any,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        form: FormData | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> tuple[T, httpx.Headers]:
        """
        Issue a request and decode the response body.

        Args:
            method: HTTP method
            url: Absolute URL, query string included
            shape: Pydantic model or type the JSON body is validated into
            headers: Extra headers merged over the session defaults
            json: JSON request body
            form: URL-encoded form body
            files: Multipart file fields (combined with ``form`` as text fields)

        Returns:
            Tuple of (decoded payload, response headers)

        Raises:
            TransportError: No HTTP response (connection, timeout, proxy)
            ApiError: Non-2xx status
            DecodeError: Body is not JSON or does not fit ``shape``
        """
        data = dict(form) if form is not None else None

        try:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                json=json,
                data=data,
                files=files,
            )
        except httpx.HTTPError as e:
            self._log.error("request_failed", method=method, url=url, error=str(e))
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            self._log.warning(
                "http_error",
                method=method,
                url=url,
                status=response.status_code,
            )
            raise ApiError(response.status_code, response.reason_phrase, url=url)

        try:
            payload = _adapter(shape).validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"Unexpected response body from {url}: {e}") from e

        return payload, response.headers

    async def get(
        self,
        url: str,
        shape: type[T] | Any,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[T, httpx.Headers]:
        return await self.send("GET", url, shape, headers=headers)

    async def post_json(
        self,
        url: str,
        shape: type[T] | Any,
        body: Any,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[T, httpx.Headers]:
        return await self.send("POST", url, shape, headers=headers, json=body)

    async def post_form(
        self,
        url: str,
        shape: type[T] | Any,
        form: FormData,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[T, httpx.Headers]:
        return await self.send("POST", url, shape, headers=headers, form=form)

    async def post_multipart(
        self,
        url: str,
        shape: type[T] | Any,
        files: Mapping[str, Any],
        form: FormData | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[T, httpx.Headers]:
        return await self.send("POST", url, shape, headers=headers, form=form, files=files)
