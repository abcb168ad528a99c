"""
Insert books into the relational table, one transaction per chunk
"""

from typing import List
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from batch.base import ItemWriter
from models.book import Book
from schemas.book import BookRecord
from core.exceptions import WriteError
import logging

logger = logging.getLogger(__name__)


class SQLItemWriter(ItemWriter):
    """
    Load books with plain INSERT statements.

    Ensures:
    - One transaction per chunk: every row of the chunk commits or none does
    - Duplicate ids are rejected by the primary key, never silently merged
    """

    def __init__(self, session_maker: async_sessionmaker, name: str = "sqlItemWriter"):
        self.session_maker = session_maker
        self.name = name

    async def write(self, items: List[BookRecord]):
        """
        Insert the chunk inside a single transaction.

        Raises:
            WriteError: Any statement failed; the chunk was rolled back
        """
        if not items:
            return

        try:
            async with self.session_maker() as session:
                async with session.begin():
                    for item in items:
                        await session.execute(
                            insert(Book).values(id=item.id, name=item.name)
                        )
        except SQLAlchemyError as e:
            raise WriteError(
                "Chunk insert rolled back",
                context={
                    "sink": self.name,
                    "operation": "INSERT",
                    "table_name": Book.__tablename__,
                    "chunk_size": len(items),
                    "first_id": items[0].id
                },
                original_exception=e
            )

        logger.debug(f"Inserted {len(items)} books into {Book.__tablename__}")
