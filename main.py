import uvicorn

from shortlinks_app.app_factory import create_app
from shortlinks_app.config import load_settings

settings = load_settings()

# Create FastAPI app (opens or creates the link database)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
