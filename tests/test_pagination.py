"""Unit tests for the pagination driver - mocked httpx via respx, no internet."""

import json
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
import respx

from xgraph.config import ClientConfig
from xgraph.core.pagination import (
    FOLLOWING_FEATURES,
    MAX_PAGE_SIZE,
    build_following_url,
    build_variables,
    clamp_page_size,
    fetch_page,
)
from xgraph.core.transport import Transport
from xgraph.exceptions import ApiError, DecodeError


FIXTURES_DIR = Path(__file__).parent / "fixtures"

FOLLOWING_URL = "https://twitter.com/i/api/graphql/iSicc7LrzWGBgDPL0tM_TQ/Following"


def load_fixture_text(name: str) -> str:
    return (FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8")


def query_params(url: str) -> tuple[dict, dict]:
    """Decode the variables and features query parameters of a request URL."""
    params = parse_qs(urlsplit(str(url)).query)
    return json.loads(params["variables"][0]), json.loads(params["features"][0])


class TestPageSize:
    """Test page size clamping."""

    @pytest.mark.parametrize("requested,expected", [(1, 1), (20, 20), (50, 50), (51, 50), (200, 50)])
    def test_clamp(self, requested: int, expected: int):
        assert clamp_page_size(requested) == expected

    def test_max_page_size(self):
        assert MAX_PAGE_SIZE == 50


class TestBuildVariables:
    """Test the variables payload."""

    def test_first_page(self):
        assert build_variables("123", 20) == {
            "userId": "123",
            "count": 20,
            "includePromotedContent": False,
        }

    def test_cursor_included(self):
        assert build_variables("123", 20, "CURSOR1")["cursor"] == "CURSOR1"

    def test_empty_cursor_is_first_page(self):
        assert "cursor" not in build_variables("123", 20, "")

    def test_count_clamped(self):
        assert build_variables("123", 200)["count"] == 50


class TestBuildFollowingUrl:
    """Test URL construction."""

    def test_path_includes_query_id(self):
        url = build_following_url("123", 20)
        assert url.startswith(FOLLOWING_URL + "?")

    def test_params_round_trip(self):
        url = build_following_url("123", 200, "CUR|SOR")
        variables, features = query_params(url)

        assert variables == {
            "userId": "123",
            "count": 50,
            "includePromotedContent": False,
            "cursor": "CUR|SOR",
        }
        assert features == FOLLOWING_FEATURES

    def test_params_are_percent_encoded(self):
        url = build_following_url("123", 20, "a b")
        query = urlsplit(url).query
        assert "{" not in query
        assert " " not in query
        assert "%7B" in query

    def test_custom_host_and_query_id(self):
        config = ClientConfig(graphql_base_url="https://x.com", following_query_id="QID")
        url = build_following_url("123", 20, config=config)
        assert url.startswith("https://x.com/i/api/graphql/QID/Following?")


@pytest.mark.asyncio
class TestFetchPage:
    """Test fetch + decode through a mocked transport."""

    async def test_fetch_page_decodes_fixture(self):
        with respx.mock:
            route = respx.get(url__startswith=FOLLOWING_URL).mock(
                return_value=httpx.Response(200, text=load_fixture_text("following_page"))
            )
            async with httpx.AsyncClient() as client:
                page = await fetch_page(Transport(client), "783214", 20)

        assert route.call_count == 1
        assert [p.username for p in page.profiles] == ["X", "quiet_account", "elonmusk"]
        assert page.next == "1762384617416441850|1852461394702991308"

    async def test_count_200_requests_50(self):
        with respx.mock:
            route = respx.get(url__startswith=FOLLOWING_URL).mock(
                return_value=httpx.Response(200, json={"data": None})
            )
            async with httpx.AsyncClient() as client:
                await fetch_page(Transport(client), "783214", 200)

        variables, _ = query_params(route.calls.last.request.url)
        assert variables["count"] == 50

    async def test_cursor_sent(self):
        with respx.mock:
            route = respx.get(url__startswith=FOLLOWING_URL).mock(
                return_value=httpx.Response(200, json={"data": None})
            )
            async with httpx.AsyncClient() as client:
                await fetch_page(Transport(client), "783214", 20, cursor="CURSOR1")

        variables, _ = query_params(route.calls.last.request.url)
        assert variables["cursor"] == "CURSOR1"

    async def test_uses_get_without_body(self):
        with respx.mock:
            route = respx.get(url__startswith=FOLLOWING_URL).mock(
                return_value=httpx.Response(200, json={"data": None})
            )
            async with httpx.AsyncClient() as client:
                await fetch_page(Transport(client), "783214", 20)

        request = route.calls.last.request
        assert request.method == "GET"
        assert request.content == b""

    async def test_null_data_gives_empty_page(self):
        with respx.mock:
            respx.get(url__startswith=FOLLOWING_URL).mock(
                return_value=httpx.Response(200, json={"data": None})
            )
            async with httpx.AsyncClient() as client:
                page = await fetch_page(Transport(client), "783214", 20)

        assert page.is_empty
        assert page.next is None
        assert page.previous is None

    async def test_graphql_errors_still_decode(self):
        body = {"errors": [{"message": "Authorization: Denied by access control", "code": 37}], "data": None}
        with respx.mock:
            respx.get(url__startswith=FOLLOWING_URL).mock(return_value=httpx.Response(200, json=body))
            async with httpx.AsyncClient() as client:
                page = await fetch_page(Transport(client), "783214", 20)

        assert page.is_empty

    async def test_http_error_raises_api_error(self):
        with respx.mock:
            respx.get(url__startswith=FOLLOWING_URL).mock(return_value=httpx.Response(429))
            async with httpx.AsyncClient() as client:
                with pytest.raises(ApiError) as exc_info:
                    await fetch_page(Transport(client), "783214", 20)

        assert exc_info.value.status_code == 429

    async def test_garbage_body_raises_decode_error(self):
        with respx.mock:
            respx.get(url__startswith=FOLLOWING_URL).mock(
                return_value=httpx.Response(200, text="<html>rate limited</html>")
            )
            async with httpx.AsyncClient() as client:
                with pytest.raises(DecodeError):
                    await fetch_page(Transport(client), "783214", 20)
