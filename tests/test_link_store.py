"""
Tests for the durable link store.
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from shortlinks_app.database.connection import create_engine, create_session_factory, init_db
from shortlinks_app.exceptions import DuplicateCodeError, LinkNotFoundError, StorageError
from shortlinks_app.services.link_store import LinkStore


class TestCreateAndFind:
    """Test inserting and looking up links"""

    def test_create_then_find(self, store):
        link = store.create("abc123", "https://example.com/a/b?x=1")

        found = store.find_by_code("abc123")

        assert found is not None
        assert found.id == link.id
        assert found.original_url == "https://example.com/a/b?x=1"
        assert found.clicks == 0
        assert found.created_at.utcoffset() == timedelta(0)

    def test_find_missing_code(self, store):
        assert store.find_by_code("nonexistent") is None
        assert store.exists("nonexistent") is False

    def test_ids_increase(self, store):
        first = store.create("first", "https://example.com/1")
        second = store.create("second", "https://example.com/2")

        assert second.id > first.id

    def test_duplicate_code_rejected(self, store):
        store.create("taken", "https://example.com/1")

        with pytest.raises(DuplicateCodeError) as exc_info:
            store.create("taken", "https://example.com/2")

        assert isinstance(exc_info.value, StorageError)
        assert exc_info.value.short_code == "taken"
        assert store.count() == 1
        assert store.find_by_code("taken").original_url == "https://example.com/1"


class TestListRecent:
    """Test listing most recent links"""

    def test_empty_store(self, store):
        assert store.list_recent(100) == []

    def test_newest_first(self, store):
        for code in ("one", "two", "three"):
            store.create(code, f"https://example.com/{code}")

        links = store.list_recent(100)

        assert [link.short_code for link in links] == ["three", "two", "one"]

    def test_limit_is_capped_at_100(self, store):
        for i in range(105):
            store.create(f"code{i}", f"https://example.com/{i}")

        assert len(store.list_recent(100)) == 100
        assert len(store.list_recent(500)) == 100
        assert len(store.list_recent(3)) == 3
        assert store.list_recent(1)[0].short_code == "code104"


class TestIncrementClicks:
    """Test click counting"""

    def test_sequential_increments(self, store):
        store.create("clicky", "https://example.com/")

        for _ in range(7):
            store.increment_clicks("clicky")

        assert store.find_by_code("clicky").clicks == 7

    def test_unknown_code(self, store):
        with pytest.raises(LinkNotFoundError):
            store.increment_clicks("nonexistent")
        assert store.count() == 0

    def test_concurrent_increments_are_not_lost(self, store):
        store.create("busy", "https://example.com/")

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(lambda _: store.increment_clicks("busy"), range(50)))

        assert store.find_by_code("busy").clicks == 50


class TestDurability:
    """Test that committed data survives a new store on the same file"""

    def test_reopen_database(self, database_url, store):
        store.create("keep", "https://example.com/keep")
        store.increment_clicks("keep")

        engine = create_engine(database_url)
        init_db(engine)  # must not wipe existing rows
        try:
            reopened = LinkStore(create_session_factory(engine))
            link = reopened.find_by_code("keep")
        finally:
            engine.dispose()

        assert link.original_url == "https://example.com/keep"
        assert link.clicks == 1
