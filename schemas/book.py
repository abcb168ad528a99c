"""
Pydantic schema for the record moved between stores
"""

from pydantic import BaseModel


class BookRecord(BaseModel):
    """
    One book as it travels through the pipeline.

    Immutable once read. The id is unique within a store only when the
    store enforces it; the pipeline never deduplicates.
    """

    id: int
    name: str

    class Config:
        frozen = True
