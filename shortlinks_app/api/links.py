from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from shortlinks_app.schemas.link import (
    ErrorResponse,
    LinkRecord,
    LinkStats,
    ShortenRequest,
    ShortenResponse,
)
from shortlinks_app.services.link_service import LinkService
from shortlinks_app.dependencies import get_link_service

router = APIRouter(prefix="/api", tags=["links"])


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def shorten_url(
    request: Request,
    payload: Optional[ShortenRequest] = None,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a new short link, with a custom code or a generated one"""
    payload = payload or ShortenRequest()
    link = link_service.shorten(payload.url, payload.customCode)
    return ShortenResponse(
        shortUrl=link_service.build_short_url(link.short_code, str(request.base_url)),
        shortCode=link.short_code,
        originalUrl=link.original_url,
    )


@router.get(
    "/stats/{short_code}",
    response_model=LinkStats,
    responses={404: {"model": ErrorResponse}},
)
def get_link_stats(
    short_code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get click statistics for a short link"""
    link = link_service.get_link(short_code)
    return LinkStats(
        shortCode=link.short_code,
        originalUrl=link.original_url,
        clicks=link.clicks,
        createdAt=link.created_at,
    )


@router.get("/links", response_model=List[LinkRecord])
def list_links(link_service: LinkService = Depends(get_link_service)):
    """List the most recent links, newest first"""
    return link_service.list_links()
