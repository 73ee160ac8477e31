"""
Integration tests - live Following requests against real X/Twitter accounts.

These tests need internet plus a logged-in session (XGRAPH_AUTH_TOKEN and
XGRAPH_CT0) and should be run sparingly to avoid rate limiting.

Run with: pytest tests/test_integration_following.py -v -m integration
"""

import os

import pytest

from xgraph import GraphClient, ClientConfig

# Mark all tests in this module as integration tests (slow, requires internet)
pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (os.environ.get("XGRAPH_AUTH_TOKEN") and os.environ.get("XGRAPH_CT0")),
        reason="XGRAPH_AUTH_TOKEN / XGRAPH_CT0 not set",
    ),
]

# Account handle -> known numeric id
TEST_ACCOUNTS = {
    "X": "783214",
    "elonmusk": "44196397",
}


def validate_profiles(profiles) -> list[str]:
    """Returns list of validation errors (empty if all pass)."""
    errors = []
    if not profiles:
        errors.append("No profiles decoded")
    for p in profiles:
        if not p.id or not p.username:
            errors.append(f"Profile missing id/username: {p!r}")
    return errors


@pytest.mark.asyncio
@pytest.mark.parametrize("handle,user_id", TEST_ACCOUNTS.items())
async def test_lookup_resolves_known_id(handle: str, user_id: str):
    async with GraphClient(ClientConfig()) as client:
        assert await client.get_user_id(handle) == user_id


@pytest.mark.asyncio
async def test_following_first_page():
    async with GraphClient(ClientConfig()) as client:
        profiles, cursor = await client.following(TEST_ACCOUNTS["elonmusk"], 20)

    assert validate_profiles(profiles) == []
    assert len(profiles) <= 20
    assert cursor


@pytest.mark.asyncio
async def test_following_two_pages_do_not_overlap():
    config = ClientConfig(request_delay_ms=500)
    async with GraphClient(config) as client:
        pages = [
            page
            async for page in client.iter_following(TEST_ACCOUNTS["elonmusk"], 20, max_pages=2)
        ]

    assert len(pages) == 2
    first_ids = {p.id for p in pages[0].profiles}
    second_ids = {p.id for p in pages[1].profiles}
    assert not first_ids & second_ids
