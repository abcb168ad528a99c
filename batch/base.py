"""
Abstract readers and writers the chunk processor drives
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from schemas.book import BookRecord


class ItemReader(ABC):
    """
    Forward-only cursor over a source.

    Lifecycle: open() once before the first read, read() until it returns
    None, close() exactly once on every exit path. No seeking, no re-reads.
    """

    name: str = "reader"

    async def open(self):
        """Acquire the underlying resource (file, cursor, session)."""
        pass

    @abstractmethod
    async def read(self) -> Optional[BookRecord]:
        """
        Return the next record, or None once the source is exhausted.

        Raises:
            ParseError: The current item cannot be mapped to a BookRecord
            SourceUnavailable: The backend cannot be reached or queried
        """
        pass

    async def close(self):
        """Release the underlying resource."""
        pass


class ItemWriter(ABC):
    """
    Sink accepting one chunk at a time.

    Transactional writers commit the whole chunk or nothing. Writers without
    transactions may leave a prefix of a failed chunk behind; they document
    it and report what they know in WriteError.context.
    """

    name: str = "writer"

    async def open(self):
        """Acquire the underlying resource."""
        pass

    @abstractmethod
    async def write(self, items: List[BookRecord]):
        """
        Write one chunk, preserving item order.

        Raises:
            WriteError: The destination rejected the chunk
        """
        pass

    async def close(self):
        """Release the underlying resource."""
        pass
