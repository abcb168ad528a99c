"""
Relational reader streaming the books table through one cursor
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from batch.base import ItemReader
from batch.mapping import decode_fields
from models.book import Book
from schemas.book import BookRecord
from core.exceptions import SourceUnavailable
import logging

logger = logging.getLogger(__name__)


class SQLItemReader(ItemReader):
    """
    Read every row of the books table.

    The query runs once at open() as a server-side stream; rows come back
    in the store's default cursor order.
    """

    def __init__(self, session_maker: async_sessionmaker, name: str = "sqlItemReader"):
        self.session_maker = session_maker
        self.name = name
        self._session = None
        self._result = None

    async def open(self):
        self._session = self.session_maker()
        try:
            self._result = await self._session.stream(select(Book.id, Book.name))
        except SQLAlchemyError as e:
            raise SourceUnavailable(
                "Cannot query books table",
                context={"source": self.name, "operation": "open", "table_name": Book.__tablename__},
                original_exception=e
            )

    async def read(self) -> Optional[BookRecord]:
        try:
            row = await self._result.fetchone()
        except SQLAlchemyError as e:
            raise SourceUnavailable(
                "Cursor over books table failed",
                context={"source": self.name, "operation": "read", "table_name": Book.__tablename__},
                original_exception=e
            )

        if row is None:
            return None
        return decode_fields(list(row))

    async def close(self):
        try:
            if self._result is not None:
                await self._result.close()
        finally:
            self._result = None
            if self._session is not None:
                await self._session.close()
                self._session = None
