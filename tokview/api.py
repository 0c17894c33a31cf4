"""Tokview HTTP API — privacy front-end endpoints.

Usage:
    uvicorn tokview.api:app --port 3000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse, StreamingResponse
from starlette.background import BackgroundTask

from .classifier import classify
from .client import UpstreamClient
from .errors import FetchFailure, TokviewError
from .proxy import guard_media_url, proxied_url
from .schemas import Lookup, TagInfo, UserInfo, VideoInfo
from .service import lookup_tag, lookup_user, lookup_video, resolve_short_link

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    # Browsers must never reach the upstream directly.
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; media-src 'self'; frame-ancestors 'none'; form-action 'self'"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.client = UpstreamClient()
    try:
        yield
    finally:
        app.state.client.close()


app = FastAPI(title="Tokview", version="0.1.0", lifespan=lifespan)


def get_client(request: Request) -> UpstreamClient:
    return request.app.state.client


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    return response


@app.exception_handler(TokviewError)
async def tokview_error(request: Request, exc: TokviewError) -> JSONResponse:
    if isinstance(exc, FetchFailure):
        logger.error("Upstream fetch failed for %s: %s", request.url.path, exc.detail)
    else:
        logger.info("%s for %s: %s", type(exc).__name__, request.url.path, exc.detail)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def _proxied_video(video: VideoInfo) -> VideoInfo:
    return video.model_copy(update={
        "video_url": video.proxied_video_url(),
        "thumbnail_url": video.proxied_thumbnail_url(),
        "author_avatar": video.proxied_author_avatar(),
    })


def proxied_lookup(lookup: Lookup) -> Lookup:
    """Rewrite every media URL in a lookup to go through /proxy."""
    entity = lookup.entity
    if isinstance(entity, VideoInfo):
        entity = _proxied_video(entity)
    elif isinstance(entity, UserInfo):
        entity = entity.model_copy(update={
            "avatar_url": proxied_url(entity.avatar_url),
            "videos": tuple(_proxied_video(v) for v in entity.videos),
        })
    elif isinstance(entity, TagInfo):
        entity = entity.model_copy(update={
            "videos": tuple(_proxied_video(v) for v in entity.videos),
        })
    return lookup.model_copy(update={"entity": entity})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/")
def home(q: Optional[str] = None):
    route = classify(q) if q else None
    if route is None:
        return {"hint": "search with ?q=@user, #tag, a video id or a TikTok URL", "query": q}
    return RedirectResponse(route.path, status_code=303)


@app.get("/redirect")
def short_link(url: str, client: UpstreamClient = Depends(get_client)):
    route = resolve_short_link(client, url)
    return RedirectResponse(route.path, status_code=303)


@app.get("/@{handle:path}")
def get_user(handle: str, client: UpstreamClient = Depends(get_client)):
    logger.info("Fetching user: %s", handle)
    return proxied_lookup(lookup_user(client, handle))


@app.get("/video/{video_id}")
def get_video(video_id: str, client: UpstreamClient = Depends(get_client)):
    logger.info("Fetching video: %s", video_id)
    return proxied_lookup(lookup_video(client, video_id))


@app.get("/tag/{tag_name}")
def get_tag(tag_name: str, client: UpstreamClient = Depends(get_client)):
    logger.info("Fetching tag: %s", tag_name)
    return proxied_lookup(lookup_tag(client, tag_name))


@app.get("/proxy")
def proxy_media(url: str, client: UpstreamClient = Depends(get_client)):
    target = guard_media_url(url)
    media = client.stream(target)
    return StreamingResponse(
        media.chunks(),
        media_type=media.content_type,
        headers={"Cache-Control": "public, max-age=86400"},
        background=BackgroundTask(media.close),
    )
