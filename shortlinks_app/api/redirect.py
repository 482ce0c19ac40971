from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, RedirectResponse

from shortlinks_app.config import Settings
from shortlinks_app.dependencies import get_link_service, get_settings
from shortlinks_app.exceptions import LinkNotFoundError
from shortlinks_app.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get("/", include_in_schema=False)
def home_page(settings: Settings = Depends(get_settings)):
    return FileResponse(settings.static_dir / "index.html")


# Registered before /{short_code}; '.' can never appear in a short code
@router.get("/stats.html", include_in_schema=False)
def stats_page(settings: Settings = Depends(get_settings)):
    return FileResponse(settings.static_dir / "stats.html")


@router.get("/{short_code}")
def redirect_to_original_url(
    short_code: str,
    link_service: LinkService = Depends(get_link_service),
    settings: Settings = Depends(get_settings)
):
    """
    Redirect to the original URL and count the click.

    The click is committed before the redirect is sent. Unknown codes get
    the not-found page and leave the store untouched.
    """
    try:
        original_url = link_service.resolve(short_code)
    except LinkNotFoundError:
        return FileResponse(
            settings.static_dir / "404.html",
            status_code=status.HTTP_404_NOT_FOUND
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
