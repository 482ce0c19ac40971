"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortlinks_app.api import links, redirect
from shortlinks_app.common.logging_config import get_logger, setup_logging
from shortlinks_app.config import Settings, load_settings
from shortlinks_app.database.connection import create_engine, create_session_factory, init_db
from shortlinks_app.exceptions import InvalidUrlError, ShortlinksError
from shortlinks_app.services.link_service import LinkService
from shortlinks_app.services.link_store import LinkStore
from shortlinks_app.services.short_code_strategies import RandomShortCodeStrategy

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release database connections on shutdown."""
    logger.info("Shortlinks service started")
    yield
    app.state.engine.dispose()
    logger.info("Shortlinks service stopped")


async def shortlinks_error_handler(request: Request, exc: ShortlinksError) -> JSONResponse:
    """Render domain errors as {"error": message} with their status code"""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors (400), not FastAPI's default 422"""
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": InvalidUrlError.default_message},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Opens (or creates) the database, builds the link store and service and
    keeps them on ``app.state`` for the dependencies in
    ``shortlinks_app.dependencies``.

    Args:
        settings: Settings to use; loaded from the environment when omitted

    Returns:
        Configured FastAPI app
    """
    settings = settings or load_settings()

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )

    logger.info("Opening link database at %s", settings.database_url)
    engine = create_engine(settings.database_url)
    init_db(engine)

    store = LinkStore(create_session_factory(engine))
    service = LinkService(
        store=store,
        short_code_strategy=RandomShortCodeStrategy(
            length=settings.short_code_length,
            max_retries=settings.max_retries,
        ),
        base_url=settings.base_url,
        custom_code_max_length=settings.custom_code_max_length,
        list_limit=settings.list_limit,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A link shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.link_store = store
    app.state.link_service = service

    app.add_exception_handler(ShortlinksError, shortlinks_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "links": store.count(),
        }

    ######## Include routers (redirect last: /{short_code} matches any path)
    app.include_router(links.router)
    app.include_router(redirect.router)

    return app
