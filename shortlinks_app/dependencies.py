"""
FastAPI dependencies for dependency injection.

The link store and link service are built once per application by
``create_app`` and kept on ``app.state``. Routes receive them through
these dependencies instead of importing module level singletons, so
every app (and every test) gets its own store.
"""

from fastapi import Request

from shortlinks_app.config import Settings
from shortlinks_app.services.link_service import LinkService
from shortlinks_app.services.link_store import LinkStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_link_store(request: Request) -> LinkStore:
    return request.app.state.link_store


def get_link_service(request: Request) -> LinkService:
    """
    Get the LinkService of this application.

    Controllers depend on the service; the service depends on the store.
    """
    return request.app.state.link_service
