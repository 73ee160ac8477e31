"""Profile data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Profile(BaseModel):
    """Normalized X/Twitter account as it appears in a relationship timeline."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    name: str
    description: str | None = None
    location: str | None = None
    url: str | None = None
    protected: bool = False
    verified: bool = False
    is_blue_verified: bool = False
    followers_count: int = 0
    following_count: int = 0
    tweets_count: int = 0
    listed_count: int = 0
    created_at: datetime
    profile_image_url: str | None = None
    profile_banner_url: str | None = None
    pinned_tweet_id: str | None = None
