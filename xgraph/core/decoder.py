"""Relationship timeline decoding.

Turns a validated :class:`RelationshipTimeline` into a flat :class:`Page`.
Decoding never raises: missing wrappers yield an empty page, missing legacy
fields fall back to defaults, and unrecognized instructions or entries are
skipped.
"""

from datetime import datetime, timezone

from xgraph.models.page import Page
from xgraph.models.profile import Profile
from xgraph.models.timeline import (
    AddEntries,
    Entry,
    RelationshipTimeline,
    ReplaceEntry,
    TimelineCursor,
    TimelineItem,
    UserLegacy,
    UserResult,
)

# "Wed Oct 10 20:19:24 +0000 2018"
CREATED_AT_FORMAT = "%a %b %d %H:%M:%S %z %Y"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

NEXT_CURSOR = "Bottom"
PREVIOUS_CURSOR = "Top"


def parse_created_at(value: str | None) -> datetime:
    """
    Parse an account creation timestamp into UTC.

    Examples:
        "Wed Oct 10 20:19:24 +0000 2018" -> datetime(2018, 10, 10, 20, 19, 24, tzinfo=UTC)
        None -> 1970-01-01T00:00:00Z
        "yesterday" -> 1970-01-01T00:00:00Z
    """
    if not value:
        return EPOCH
    try:
        return datetime.strptime(value, CREATED_AT_FORMAT).astimezone(timezone.utc)
    except ValueError:
        return EPOCH


def to_profile(user: UserResult) -> Profile | None:
    """
    Build a Profile from a user result.

    Returns None when the result carries no legacy bag (unavailable or
    withheld accounts). Every other missing field takes its default here.
    """
    legacy = user.legacy
    if legacy is None:
        return None
    core = user.core

    screen_name = legacy.screen_name or (core.screen_name if core else None)
    name = legacy.name or (core.name if core else None)
    created_at = legacy.created_at or (core.created_at if core else None)

    return Profile(
        id=user.rest_id or "",
        username=screen_name or "",
        name=name or "",
        description=legacy.description,
        location=legacy.location,
        url=legacy.url,
        protected=bool(legacy.protected),
        verified=bool(legacy.verified),
        is_blue_verified=bool(user.is_blue_verified),
        followers_count=legacy.followers_count or 0,
        following_count=legacy.friends_count or 0,
        tweets_count=legacy.statuses_count or 0,
        listed_count=legacy.listed_count or 0,
        created_at=parse_created_at(created_at),
        profile_image_url=legacy.profile_image_url_https,
        profile_banner_url=legacy.profile_banner_url,
        pinned_tweet_id=_first_pinned(legacy),
    )


def _first_pinned(legacy: UserLegacy) -> str | None:
    if not legacy.pinned_tweet_ids_str:
        return None
    return legacy.pinned_tweet_ids_str[0]


class _PageBuilder:
    """Accumulates profiles and cursors while walking the instruction stream."""

    def __init__(self) -> None:
        self.profiles: list[Profile] = []
        self.next: str | None = None
        self.previous: str | None = None

    def add_entry(self, entry: Entry) -> None:
        match entry.content:
            case TimelineItem() as item:
                user = item.user
                if user is None:
                    return
                profile = to_profile(user)
                if profile is not None:
                    self.profiles.append(profile)
            case TimelineCursor() as cursor:
                self.set_cursor(cursor)
            case _:
                pass

    def replace_entry(self, entry: Entry | None) -> None:
        # Replace instructions only ever update cursor state
        if entry is not None and isinstance(entry.content, TimelineCursor):
            self.set_cursor(entry.content)

    def set_cursor(self, cursor: TimelineCursor) -> None:
        if cursor.value is None:
            return
        if cursor.cursor_type == NEXT_CURSOR:
            self.next = cursor.value
        elif cursor.cursor_type == PREVIOUS_CURSOR:
            self.previous = cursor.value

    def build(self) -> Page:
        return Page(profiles=tuple(self.profiles), next=self.next, previous=self.previous)


def decode_timeline(timeline: RelationshipTimeline) -> Page:
    """
    Flatten one relationship timeline response into a Page.

    Args:
        timeline: Validated GraphQL response tree

    Returns:
        Page with profiles in stream order and the last Bottom/Top cursors seen
    """
    builder = _PageBuilder()

    for instruction in timeline.instructions:
        match instruction:
            case AddEntries(entries=entries):
                for entry in entries or ():
                    builder.add_entry(entry)
            case ReplaceEntry(entry=entry):
                builder.replace_entry(entry)
            case _:
                # TimelineClearCache, TimelineTerminateTimeline, ...
                pass

    return builder.build()
