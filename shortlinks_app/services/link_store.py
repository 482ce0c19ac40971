"""
Durable store of links keyed by short code.

The store owns the session factory and is the only writer of the links
table. Each mutating call runs in its own transaction and commits before
returning, so a successful call is already on disk.
"""

import threading
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from shortlinks_app.common.logging_config import get_logger
from shortlinks_app.exceptions import DuplicateCodeError, LinkNotFoundError, StorageError
from shortlinks_app.models.link import Link

logger = get_logger(__name__)

MAX_LIST_LIMIT = 100


class LinkStore:
    """
    Unique-keyed mapping of short code -> Link.

    Writes are serialized with a lock: the API runs sync endpoints on a
    thread pool, and uniqueness checks plus increments must not interleave.
    Reads open their own session and only ever see committed rows.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._write_lock = threading.Lock()

    def create(self, short_code: str, original_url: str) -> Link:
        """
        Insert a new link.

        Raises:
            DuplicateCodeError: short_code already exists
            StorageError: the database failed
        """
        with self._write_lock:
            with self._session_factory() as session:
                link = Link(short_code=short_code, original_url=original_url, clicks=0)
                session.add(link)
                try:
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    raise DuplicateCodeError(short_code) from exc
                except SQLAlchemyError as exc:
                    session.rollback()
                    logger.exception("Failed to insert link %s", short_code)
                    raise StorageError() from exc
                session.refresh(link)
                return link

    def find_by_code(self, short_code: str) -> Optional[Link]:
        """Return the link for short_code, or None."""
        with self._session_factory() as session:
            try:
                return session.query(Link).filter(Link.short_code == short_code).first()
            except SQLAlchemyError as exc:
                logger.exception("Failed to look up link %s", short_code)
                raise StorageError() from exc

    def exists(self, short_code: str) -> bool:
        return self.find_by_code(short_code) is not None

    def list_recent(self, limit: int = MAX_LIST_LIMIT) -> List[Link]:
        """Most recently created links first, at most ``limit`` (capped at 100)."""
        limit = max(0, min(limit, MAX_LIST_LIMIT))
        with self._session_factory() as session:
            try:
                return (
                    session.query(Link)
                    .order_by(Link.created_at.desc(), Link.id.desc())
                    .limit(limit)
                    .all()
                )
            except SQLAlchemyError as exc:
                logger.exception("Failed to list links")
                raise StorageError() from exc

    def increment_clicks(self, short_code: str) -> None:
        """
        Add one click to the link.

        The increment is a single UPDATE so concurrent redirects are never lost.

        Raises:
            LinkNotFoundError: no link has this short code
        """
        with self._write_lock:
            with self._session_factory() as session:
                try:
                    updated = (
                        session.query(Link)
                        .filter(Link.short_code == short_code)
                        .update({Link.clicks: Link.clicks + 1}, synchronize_session=False)
                    )
                    session.commit()
                except SQLAlchemyError as exc:
                    session.rollback()
                    logger.exception("Failed to increment clicks for %s", short_code)
                    raise StorageError() from exc

        if not updated:
            raise LinkNotFoundError()

    def count(self) -> int:
        """Number of links in the store."""
        with self._session_factory() as session:
            try:
                return session.query(func.count(Link.id)).scalar()
            except SQLAlchemyError as exc:
                logger.exception("Failed to count links")
                raise StorageError() from exc
