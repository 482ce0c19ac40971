import os

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def create_engine(database_url: str) -> Engine:
    """
    Create the engine backing the link store.

    For file based SQLite URLs the parent directory is created when missing,
    so a fresh deployment starts with an empty database file.
    """
    url = make_url(database_url)
    connect_args = {}

    if url.get_backend_name() == "sqlite":
        # Requests are served from a thread pool
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            data_dir = os.path.dirname(os.path.abspath(url.database))
            if not os.path.exists(data_dir):
                os.makedirs(data_dir)

    return sa_create_engine(database_url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create the links table if it does not exist (load-or-create)."""
    # Models must be imported so they are registered with Base
    from shortlinks_app.models import Link  # noqa: F401

    Base.metadata.create_all(bind=engine)
