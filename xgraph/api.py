"""FastAPI web server for the xgraph client."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from xgraph import GraphClient, ClientConfig, __version__
from xgraph.core.pagination import MAX_PAGE_SIZE
from xgraph.exceptions import (
    ApiError,
    ConfigError,
    DecodeError,
    ProfileNotFoundError,
    TransportError,
    XGraphError,
)
from xgraph.models.profile import Profile


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


class RelationshipsResponse(BaseModel):
    """One page of following/followers."""

    user_id: str
    profiles: list[Profile]
    next_cursor: Optional[str] = None


class UserIdResponse(BaseModel):
    handle: str
    user_id: str


class MutationResponse(BaseModel):
    handle: str
    action: str
    success: bool = True


# Global client instance
_client: Optional[GraphClient] = None


def get_client() -> GraphClient:
    if _client is None:
        raise HTTPException(status_code=503, detail="Client not initialized")
    return _client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage client lifecycle."""
    global _client
    _client = GraphClient(ClientConfig())
    await _client.__aenter__()
    yield
    await _client.__aexit__(None, None, None)
    _client = None


app = FastAPI(
    title="xgraph API",
    description="X/Twitter social-graph API",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(XGraphError)
async def xgraph_error_handler(request, exc: XGraphError):
    """Map client errors onto HTTP statuses."""
    if isinstance(exc, ProfileNotFoundError):
        status = 404
    elif isinstance(exc, ConfigError):
        status = 503
    elif isinstance(exc, ApiError) and exc.status_code == 429:
        status = 429
    elif isinstance(exc, (ApiError, DecodeError, TransportError)):
        status = 502
    else:
        status = 500
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
    )


@app.get("/api/following/{user_id}", response_model=RelationshipsResponse, tags=["Graph"])
async def get_following(
    user_id: str,
    count: int = Query(MAX_PAGE_SIZE, ge=1, description="Page size, capped at 50"),
    cursor: Optional[str] = Query(None, description="Cursor from the previous page"),
):
    """One page of accounts ``user_id`` follows."""
    profiles, next_cursor = await get_client().following(user_id, count, cursor)
    return RelationshipsResponse(user_id=user_id, profiles=profiles, next_cursor=next_cursor)


@app.get("/api/followers/{user_id}", response_model=RelationshipsResponse, tags=["Graph"])
async def get_followers(
    user_id: str,
    count: int = Query(MAX_PAGE_SIZE, ge=1, description="Page size, capped at 50"),
    cursor: Optional[str] = Query(None, description="Cursor from the previous page"),
):
    """One page of ``user_id``'s followers."""
    profiles, next_cursor = await get_client().followers(user_id, count, cursor)
    return RelationshipsResponse(user_id=user_id, profiles=profiles, next_cursor=next_cursor)


@app.get("/api/users/{handle}/id", response_model=UserIdResponse, tags=["Graph"])
async def resolve_handle(handle: str):
    """Resolve a handle to its numeric account id."""
    user_id = await get_client().get_user_id(handle)
    return UserIdResponse(handle=handle.lstrip("@"), user_id=user_id)


@app.post("/api/follow/{handle}", response_model=MutationResponse, tags=["Graph"])
async def follow(handle: str):
    """Follow an account."""
    await get_client().follow(handle)
    return MutationResponse(handle=handle.lstrip("@"), action="follow")


@app.post("/api/unfollow/{handle}", response_model=MutationResponse, tags=["Graph"])
async def unfollow(handle: str):
    """Unfollow an account."""
    await get_client().unfollow(handle)
    return MutationResponse(handle=handle.lstrip("@"), action="unfollow")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
