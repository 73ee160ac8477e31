"""Follow / unfollow through the legacy 1.1 friendships endpoints."""

from typing import Any

from xgraph.config import ClientConfig
from xgraph.core.lookup import UserLookup
from xgraph.core.transport import Transport
from xgraph.logging import get_logger

FOLLOW_PATH = "/1.1/friendships/create.json"
UNFOLLOW_PATH = "/1.1/friendships/destroy.json"

_log = get_logger("mutations")


def friendship_form(user_id: str) -> list[tuple[str, str]]:
    return [
        ("include_profile_interstitial_type", "1"),
        ("skip_status", "true"),
        ("user_id", user_id),
    ]


async def _submit(
    transport: Transport,
    lookup: UserLookup,
    handle: str,
    path: str,
    event: str,
    config: ClientConfig | None,
) -> None:
    config = config or ClientConfig()
    user_id = await lookup.get_user_id(handle)

    body, _ = await transport.post_form(
        f"{config.api_base_url}{path}",
        Any,
        friendship_form(user_id),
    )

    # Success is the 2xx status alone; an error payload is only reported
    if isinstance(body, dict) and body.get("errors"):
        _log.warning("mutation_error_payload", handle=handle, user_id=user_id, errors=body["errors"])

    _log.info(event, handle=handle, user_id=user_id)


async def follow(
    transport: Transport,
    lookup: UserLookup,
    handle: str,
    config: ClientConfig | None = None,
) -> None:
    """
    Follow an account.

    Raises:
        ProfileNotFoundError: Handle did not resolve
        TransportError, ApiError, DecodeError: propagated from the transport
    """
    await _submit(transport, lookup, handle, FOLLOW_PATH, "follow_submitted", config)


async def unfollow(
    transport: Transport,
    lookup: UserLookup,
    handle: str,
    config: ClientConfig | None = None,
) -> None:
    """Unfollow an account. Same failure modes as :func:`follow`."""
    await _submit(transport, lookup, handle, UNFOLLOW_PATH, "unfollow_submitted", config)
