"""Timeline page model."""

from pydantic import BaseModel, ConfigDict

from xgraph.models.profile import Profile


class Page(BaseModel):
    """One page of a relationship timeline.

    ``next`` is the cursor for the following page (``None`` at the end),
    ``previous`` the cursor for the page before. A page may carry cursors
    without any profiles.
    """

    model_config = ConfigDict(frozen=True)

    profiles: tuple[Profile, ...] = ()
    next: str | None = None
    previous: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.profiles

    @property
    def has_more(self) -> bool:
        return self.next is not None
