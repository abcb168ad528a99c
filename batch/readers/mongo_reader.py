"""
Document reader over the whole books collection
"""

from typing import Optional
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from batch.base import ItemReader
from batch.mapping import decode_document
from schemas.book import BookRecord
from core.exceptions import SourceUnavailable
import logging

logger = logging.getLogger(__name__)


class MongoItemReader(ItemReader):
    """
    Read every document of a collection, sorted ascending by a store-side
    field (``status`` by default) so consecutive runs see the same order.

    The sort field is store metadata; it is not part of BookRecord.
    """

    def __init__(self, collection, sort_field: str = "status", name: str = "mongoItemReader"):
        self.collection = collection
        self.sort_field = sort_field
        self.name = name
        self._cursor = None

    async def open(self):
        # find() is lazy; connectivity errors surface on the first read
        self._cursor = self.collection.find({}, sort=[(self.sort_field, ASCENDING)])

    async def read(self) -> Optional[BookRecord]:
        try:
            document = await anext(self._cursor, None)
        except PyMongoError as e:
            raise SourceUnavailable(
                "Cursor over collection failed",
                context={"source": self.name, "operation": "read", "collection": self.collection.name},
                original_exception=e
            )

        if document is None:
            return None
        return decode_document(document)

    async def close(self):
        if self._cursor is not None:
            await self._cursor.close()
            self._cursor = None
