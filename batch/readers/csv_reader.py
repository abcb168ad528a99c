"""
Delimited file reader: one headerless (id, name) row per read
"""

import pandas as pd
from typing import Optional
from pathlib import Path
from batch.base import ItemReader
from batch.mapping import FIELD_NAMES, decode_fields
from schemas.book import BookRecord
from core.exceptions import ParseError, SourceUnavailable
import logging

logger = logging.getLogger(__name__)

# Extra column catching any field past the book fields, so the layout never
# depends on the first row of the file
OVERFLOW_COLUMN = "_overflow"


class CSVItemReader(ItemReader):
    """
    Read books from a delimited text file.

    The file has no header row. pandas parses it lazily one row at a time
    against a fixed layout, so a malformed row surfaces exactly at its
    position in the stream and never changes how later rows are parsed.
    Blank lines are ignored.
    """

    def __init__(
        self,
        file_path: str,
        delimiter: str = ",",
        name: str = "csvItemReader"
    ):
        self.file_path = Path(file_path)
        self.delimiter = delimiter
        self.name = name
        self._rows = None
        self._row_number = 0

    async def open(self):
        if not self.file_path.is_file():
            raise SourceUnavailable(
                "Input file not found",
                context={"source": self.name, "file_path": str(self.file_path), "operation": "open"}
            )

        logger.info(f"Reading books from {self.file_path}")
        self._row_number = 0

        try:
            self._rows = pd.read_csv(
                self.file_path,
                sep=self.delimiter,
                header=None,
                names=[*FIELD_NAMES, OVERFLOW_COLUMN],
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                engine="python",
                chunksize=1
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"Input file is empty: {self.file_path}")
            self._rows = None
        except OSError as e:
            raise SourceUnavailable(
                "Cannot open input file",
                context={"source": self.name, "file_path": str(self.file_path), "operation": "open"},
                original_exception=e
            )

    async def read(self) -> Optional[BookRecord]:
        if self._rows is None:
            return None

        try:
            frame = next(self._rows)
            # An empty file yields one empty frame before stopping
            while frame.empty:
                frame = next(self._rows)
        except StopIteration:
            return None
        except pd.errors.ParserError as e:
            self._row_number += 1
            raise ParseError(
                "Malformed line in input file",
                context={"file_path": str(self.file_path), "row_number": self._row_number},
                original_exception=e
            )
        except OSError as e:
            raise SourceUnavailable(
                "Input file became unreadable",
                context={"source": self.name, "file_path": str(self.file_path), "operation": "read"},
                original_exception=e
            )

        self._row_number += 1
        return self._decode(frame.iloc[0].tolist())

    async def close(self):
        if self._rows is not None:
            self._rows.close()
            self._rows = None

    def _decode(self, values) -> BookRecord:
        # Missing trailing fields come back as NaN; present ones are strings
        fields = [value for value in values if isinstance(value, str)]

        if len(fields) > len(FIELD_NAMES):
            raise ParseError(
                f"Expected {len(FIELD_NAMES)} fields, got more than {len(FIELD_NAMES)}",
                context={
                    "file_path": str(self.file_path),
                    "row_number": self._row_number,
                    "fields": fields
                }
            )
        return decode_fields(fields, row_number=self._row_number)
