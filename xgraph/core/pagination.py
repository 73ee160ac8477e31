"""Cursor pagination over the Following GraphQL timeline."""

import json
from urllib.parse import quote

from xgraph.config import ClientConfig
from xgraph.core.decoder import decode_timeline
from xgraph.core.transport import Transport
from xgraph.logging import get_logger
from xgraph.models.page import Page
from xgraph.models.timeline import RelationshipTimeline

# Upper bound the Following endpoint accepts for "count"
MAX_PAGE_SIZE = 50

# Feature flags required by the pinned Following query version
FOLLOWING_FEATURES: dict[str, bool] = {
    "responsive_web_twitter_article_tweet_consumption_enabled": False,
    "tweet_with_visibility_results_prefer_gql_limited_actions_policy_enabled": True,
    "longform_notetweets_inline_media_enabled": True,
    "responsive_web_media_download_video_enabled": False,
}

_log = get_logger("pagination")


def clamp_page_size(count: int) -> int:
    """Cap a requested page size at MAX_PAGE_SIZE."""
    return min(count, MAX_PAGE_SIZE)


def encode_param(value: dict) -> str:
    """Compact JSON, percent-encoded for use in a query string."""
    return quote(json.dumps(value, separators=(",", ":")), safe="")


def build_variables(user_id: str, count: int, cursor: str | None = None) -> dict:
    """
    Build the ``variables`` payload for one page.

    Args:
        user_id: Numeric account id whose timeline is paged
        count: Requested page size (clamped to MAX_PAGE_SIZE)
        cursor: Cursor from a previous page; None or "" requests the first page
    """
    variables = {
        "userId": user_id,
        "count": clamp_page_size(count),
        "includePromotedContent": False,
    }
    if cursor:
        variables["cursor"] = cursor
    return variables


def build_following_url(
    user_id: str,
    count: int,
    cursor: str | None = None,
    config: ClientConfig | None = None,
) -> str:
    """Full GET URL for one page of the Following timeline."""
    config = config or ClientConfig()
    variables = build_variables(user_id, count, cursor)
    return (
        f"{config.graphql_base_url}/i/api/graphql/{config.following_query_id}/Following"
        f"?variables={encode_param(variables)}&features={encode_param(FOLLOWING_FEATURES)}"
    )


async def fetch_page(
    transport: Transport,
    user_id: str,
    page_size: int,
    cursor: str | None = None,
    config: ClientConfig | None = None,
) -> Page:
    """
    Fetch and decode one page of a relationship timeline.

    Args:
        transport: Transport used for the GET
        user_id: Numeric account id
        page_size: Requested number of profiles (at most MAX_PAGE_SIZE are asked for)
        cursor: Cursor from a previous page, or None for the first page
        config: ClientConfig providing host and query id

    Returns:
        Decoded Page, possibly empty

    Raises:
        TransportError, ApiError, DecodeError: propagated from the transport
    """
    url = build_following_url(user_id, page_size, cursor, config)
    timeline, _ = await transport.get(url, RelationshipTimeline)

    if timeline.errors:
        # Partial GraphQL failures still come back as 200 with some data
        _log.warning(
            "graphql_errors",
            user_id=user_id,
            messages=[e.message for e in timeline.errors],
        )

    page = decode_timeline(timeline)
    _log.debug(
        "page_fetched",
        user_id=user_id,
        profiles=len(page.profiles),
        has_next=page.has_more,
    )
    return page
