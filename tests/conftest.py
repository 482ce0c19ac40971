"""
Test configuration and fixtures for the shortlinks service.
Every test gets its own SQLite file, so tests never share links.
"""

import pytest
from fastapi.testclient import TestClient

from shortlinks_app.app_factory import create_app
from shortlinks_app.config import Settings
from shortlinks_app.database.connection import create_engine, create_session_factory, init_db
from shortlinks_app.services.link_service import LinkService
from shortlinks_app.services.link_store import LinkStore


@pytest.fixture(scope="function")
def database_url(tmp_path):
    """SQLite file in a directory that does not exist yet"""
    return f"sqlite:///{tmp_path / 'data' / 'shortlinks.db'}"


@pytest.fixture(scope="function")
def settings(database_url):
    return Settings(
        _env_file=None,
        database_url=database_url,
        log_level="DEBUG",
    )


@pytest.fixture(scope="function")
def engine(database_url):
    engine = create_engine(database_url)
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def store(engine):
    return LinkStore(create_session_factory(engine))


@pytest.fixture(scope="function")
def service(store):
    return LinkService(store)


@pytest.fixture(scope="function")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for a fresh application.
    This is the main fixture that API tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client
