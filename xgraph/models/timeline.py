"""Pydantic schema for GraphQL relationship timeline responses.

The tree looks like::

    data.user.result.timeline.timeline.instructions[]
        {"type": "TimelineAddEntries", "entries": [Entry, ...]}
        {"type": "TimelineReplaceEntry", "entry": Entry}

    Entry.content
        {"entryType": "TimelineTimelineItem",
         "itemContent": {"user_results": {"result": {...legacy...}}}}
        {"entryType": "TimelineTimelineCursor",
         "cursorType": "Bottom", "value": "..."}

Every wrapper and every scalar is optional: X drops fields per account
(suspended, protected, limited) and between schema revisions. Instruction
and entry tags outside the known set validate into ``Other*`` variants
instead of failing the whole response.
"""

from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


# ── User result ─────────────────────────────────────────────


class UserLegacy(_Node):
    """Profile attributes carried over from the v1.1 user object."""

    screen_name: str | None = None
    name: str | None = None
    description: str | None = None
    location: str | None = None
    url: str | None = None
    protected: bool | None = None
    verified: bool | None = None
    followers_count: int | None = None
    friends_count: int | None = None
    statuses_count: int | None = None
    listed_count: int | None = None
    created_at: str | None = None
    profile_image_url_https: str | None = None
    profile_banner_url: str | None = None
    pinned_tweet_ids_str: list[str] | None = None


class UserCore(_Node):
    """Newer responses move handle, name and join date out of ``legacy``."""

    screen_name: str | None = None
    name: str | None = None
    created_at: str | None = None


class UserResult(_Node):
    typename: str | None = Field(default=None, alias="__typename")
    rest_id: str | None = None
    is_blue_verified: bool | None = None
    core: UserCore | None = None
    legacy: UserLegacy | None = None

    @property
    def is_unavailable(self) -> bool:
        return self.typename == "UserUnavailable"


class UserResults(_Node):
    result: UserResult | None = None


class ItemContent(_Node):
    item_type: str | None = Field(default=None, alias="itemType")
    user_results: UserResults | None = None


# ── Entry content (tagged by entryType) ─────────────────────


class TimelineItem(_Node):
    entry_type: str | None = Field(default=None, alias="entryType")
    item_content: ItemContent | None = Field(default=None, alias="itemContent")

    @property
    def user(self) -> UserResult | None:
        if self.item_content is None or self.item_content.user_results is None:
            return None
        return self.item_content.user_results.result


class TimelineCursor(_Node):
    entry_type: str | None = Field(default=None, alias="entryType")
    cursor_type: str | None = Field(default=None, alias="cursorType")
    value: str | None = None


class OtherContent(_Node):
    entry_type: Any = Field(default=None, alias="entryType")


_ENTRY_TAGS = {
    "TimelineTimelineItem": "item",
    "TimelineTimelineCursor": "cursor",
}


def _known_tag(tags: dict[str, str], tag: Any) -> str:
    # Non-string tags (lists, objects) fall through to the Other* variant
    if not isinstance(tag, str):
        return "other"
    return tags.get(tag, "other")


def _entry_content_tag(value: Any) -> str:
    if isinstance(value, TimelineItem):
        return "item"
    if isinstance(value, TimelineCursor):
        return "cursor"
    if not isinstance(value, dict):
        return "other"
    if "entryType" in value:
        return _known_tag(_ENTRY_TAGS, value["entryType"])
    # Untagged content: infer from shape
    if "itemContent" in value:
        return "item"
    if "value" in value:
        return "cursor"
    return "other"


EntryContent = Annotated[
    Union[
        Annotated[TimelineItem, Tag("item")],
        Annotated[TimelineCursor, Tag("cursor")],
        Annotated[OtherContent, Tag("other")],
    ],
    Discriminator(_entry_content_tag),
]


class Entry(_Node):
    entry_id: str | None = Field(default=None, alias="entryId")
    sort_index: str | None = Field(default=None, alias="sortIndex")
    content: Optional[EntryContent] = None


# ── Instructions (tagged by type) ───────────────────────────


class AddEntries(_Node):
    type: str = "TimelineAddEntries"
    entries: list[Entry] | None = None


class ReplaceEntry(_Node):
    type: str = "TimelineReplaceEntry"
    entry_id_to_replace: str | None = None
    entry: Entry | None = None


class OtherInstruction(_Node):
    type: Any = None


_INSTRUCTION_TAGS = {
    "TimelineAddEntries": "add",
    "TimelineReplaceEntry": "replace",
}


def _instruction_tag(value: Any) -> str:
    if isinstance(value, AddEntries):
        return "add"
    if isinstance(value, ReplaceEntry):
        return "replace"
    if not isinstance(value, dict):
        return "other"
    if "type" in value:
        return _known_tag(_INSTRUCTION_TAGS, value["type"])
    if "entries" in value:
        return "add"
    if "entry" in value:
        return "replace"
    return "other"


Instruction = Annotated[
    Union[
        Annotated[AddEntries, Tag("add")],
        Annotated[ReplaceEntry, Tag("replace")],
        Annotated[OtherInstruction, Tag("other")],
    ],
    Discriminator(_instruction_tag),
]


# ── Response wrappers ───────────────────────────────────────


class TimelineBody(_Node):
    instructions: list[Instruction] | None = None


class TimelineWrapper(_Node):
    timeline: TimelineBody | None = None


class UserTimelineResult(_Node):
    typename: str | None = Field(default=None, alias="__typename")
    timeline: TimelineWrapper | None = None


class UserTimelineResults(_Node):
    result: UserTimelineResult | None = None


class TimelineData(_Node):
    user: UserTimelineResults | None = None


class GraphQLError(_Node):
    message: str | None = None
    code: int | None = None
    kind: str | None = None


class RelationshipTimeline(_Node):
    """Root of a Following/Followers GraphQL response."""

    data: TimelineData | None = None
    errors: list[GraphQLError] = []

    @property
    def instructions(self) -> list[Instruction]:
        """Instruction stream, or an empty list when any wrapper is missing."""
        if self.data is None or self.data.user is None:
            return []
        result = self.data.user.result
        if result is None or result.timeline is None or result.timeline.timeline is None:
            return []
        return result.timeline.timeline.instructions or []


class UserLookupData(_Node):
    user: UserResults | None = None


class UserLookupResponse(_Node):
    """Root of a UserByScreenName GraphQL response."""

    data: UserLookupData | None = None
    errors: list[GraphQLError] = []

    @property
    def user(self) -> UserResult | None:
        if self.data is None or self.data.user is None:
            return None
        return self.data.user.result
