"""
Upsert books into the document collection
"""

from typing import List
from pymongo.errors import PyMongoError
from batch.base import ItemWriter
from schemas.book import BookRecord
from core.exceptions import WriteError
import logging

logger = logging.getLogger(__name__)


class MongoItemWriter(ItemWriter):
    """
    Upsert each book keyed on its id.

    Only ``name`` is set on an existing document; store-side fields such as
    ``status`` are left alone. There is no multi-document transaction:
    documents upserted before a failure inside the chunk stay upserted, and
    WriteError.context["written_count"] says how many that was.
    """

    def __init__(self, collection, name: str = "mongoItemWriter"):
        self.collection = collection
        self.name = name

    async def write(self, items: List[BookRecord]):
        written_count = 0

        for item in items:
            try:
                await self.collection.update_one(
                    {"id": item.id},
                    {"$set": {"name": item.name}},
                    upsert=True
                )
            except PyMongoError as e:
                raise WriteError(
                    "Upsert failed inside chunk",
                    context={
                        "sink": self.name,
                        "collection": self.collection.name,
                        "chunk_size": len(items),
                        "written_count": written_count,
                        "failed_id": item.id
                    },
                    original_exception=e
                )
            written_count += 1

        logger.debug(f"Upserted {written_count} documents into {self.collection.name}")
