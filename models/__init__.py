"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class and the BatchStatus enum
    book: The books table filled by the file load step and read by the
          migrate step

Usage:
    from models.base import Base, BatchStatus
    from models.book import Book

Example:
    # Create the schema
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
"""

__all__ = [
    "Base",
    "BatchStatus",
    "Book",
]
