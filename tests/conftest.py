"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import select
from sqlalchemy.pool import NullPool
from pymongo.errors import PyMongoError
from typing import Any, Dict, List, Optional
from models.base import Base
from models.book import Book
from schemas.book import BookRecord


class FakeCursor:
    """Async cursor over a snapshot of documents"""

    def __init__(self, documents: List[Dict[str, Any]], fail_at: Optional[int] = None):
        self._documents = documents
        self._position = 0
        self._fail_at = fail_at
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._fail_at is not None and self._position == self._fail_at:
            raise PyMongoError("connection reset")
        if self._position >= len(self._documents):
            raise StopAsyncIteration
        document = self._documents[self._position]
        self._position += 1
        return dict(document)

    async def close(self):
        self.closed = True


class FakeCollection:
    """
    In-memory stand-in for an async Mongo collection.

    Supports the calls the readers and writers make: find() with a sort
    and update_one() with $set and upsert.
    """

    def __init__(self, name: str = "books", fail_after_writes: Optional[int] = None,
                 fail_read_at: Optional[int] = None):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.fail_after_writes = fail_after_writes
        self.fail_read_at = fail_read_at
        self.write_calls = 0
        self.cursors: List[FakeCursor] = []

    def find(self, filter: Dict[str, Any], sort=None) -> FakeCursor:
        documents = list(self.documents)
        for field, _direction in reversed(sort or []):
            # Missing fields sort first, as in Mongo
            documents.sort(key=lambda d: (field in d, d.get(field, "")))
        cursor = FakeCursor(documents, fail_at=self.fail_read_at)
        self.cursors.append(cursor)
        return cursor

    async def update_one(self, filter: Dict[str, Any], update: Dict[str, Any], upsert: bool = False):
        if self.fail_after_writes is not None and self.write_calls >= self.fail_after_writes:
            raise PyMongoError("write concern error")
        self.write_calls += 1

        for document in self.documents:
            if all(document.get(k) == v for k, v in filter.items()):
                document.update(update["$set"])
                return
        if upsert:
            self.documents.append({"_id": len(self.documents) + 1, **filter, **update["$set"]})


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a SQLite test database with the books table"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'batch_test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
def books():
    """Twelve sample records"""
    return [BookRecord(id=i, name=f"Book {i}") for i in range(1, 13)]


@pytest.fixture
def write_lines(tmp_path):
    """Write lines to a file under tmp_path and return its path"""
    def _write(lines, filename="books.csv"):
        path = tmp_path / filename
        path.write_text("".join(f"{line}\n" for line in lines))
        return path
    return _write


@pytest.fixture
def fetch_books(session_maker):
    """All rows of the books table as (id, name) pairs, ordered by id"""
    async def _fetch():
        async with session_maker() as session:
            result = await session.execute(select(Book.id, Book.name).order_by(Book.id))
            return [tuple(row) for row in result.all()]
    return _fetch
