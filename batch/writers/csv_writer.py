"""
Delimited file writer appending one (id, name) row per record
"""

import pandas as pd
from typing import List
from pathlib import Path
from batch.base import ItemWriter
from batch.mapping import FIELD_NAMES, encode_fields
from schemas.book import BookRecord
from core.exceptions import WriteError
import logging

logger = logging.getLogger(__name__)


class CSVItemWriter(ItemWriter):
    """
    Write books to a delimited text file without a header.

    open() truncates the destination so every run starts from an empty file.
    Each chunk is appended and flushed before write() returns. The file is
    not transactional: if the append fails part-way, a prefix of the chunk
    may already be on disk.
    """

    def __init__(
        self,
        file_path: str,
        delimiter: str = ",",
        name: str = "csvItemWriter"
    ):
        self.file_path = Path(file_path)
        self.delimiter = delimiter
        self.name = name

    async def open(self):
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text("")
        except OSError as e:
            raise WriteError(
                "Cannot prepare output file",
                context={"sink": self.name, "file_path": str(self.file_path)},
                original_exception=e
            )
        logger.info(f"Writing books to {self.file_path}")

    async def write(self, items: List[BookRecord]):
        if not items:
            return

        frame = pd.DataFrame([encode_fields(item) for item in items], columns=list(FIELD_NAMES))

        try:
            frame.to_csv(
                self.file_path,
                mode="a",
                sep=self.delimiter,
                header=False,
                index=False
            )
        except OSError as e:
            raise WriteError(
                "Failed to append chunk to output file",
                context={"sink": self.name, "file_path": str(self.file_path), "chunk_size": len(items)},
                original_exception=e
            )

        logger.debug(f"Appended {len(items)} books to {self.file_path}")
