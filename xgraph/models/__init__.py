"""Pydantic models for xgraph."""

from xgraph.models.profile import Profile
from xgraph.models.page import Page
from xgraph.models.timeline import RelationshipTimeline, UserLookupResponse

__all__ = [
    "Profile",
    "Page",
    "RelationshipTimeline",
    "UserLookupResponse",
]
