"""
Wiring of the book transfer job: file -> relational -> document -> file
"""

from typing import List
from pathlib import Path
from sqlalchemy.ext.asyncio import async_sessionmaker
from batch.chunk import ChunkPolicy
from batch.listeners import ReadLoggingListener
from batch.readers import CSVItemReader, SQLItemReader, MongoItemReader
from batch.step import Step
from batch.writers import CSVItemWriter, SQLItemWriter, MongoItemWriter
from core.config import Settings
from core.exceptions import ConfigurationError

JOB_NAME = "bookTransferJob"


def build_book_steps(
    settings: Settings,
    session_maker: async_sessionmaker,
    collection
) -> List[Step]:
    """
    Build the three steps in run order.

    Args:
        settings: Paths, delimiter and chunk policy
        session_maker: Session factory for the relational store
        collection: Collection of the document store

    Raises:
        ConfigurationError: Input and output files are the same path
    """
    input_file = Path(settings.BATCH_INPUT_FILE)
    output_file = Path(settings.BATCH_OUTPUT_FILE)

    if input_file.resolve() == output_file.resolve():
        raise ConfigurationError(
            "Output file must differ from the input file",
            context={"input_file": str(input_file), "output_file": str(output_file)}
        )

    chunk_size = settings.BATCH_CHUNK_SIZE
    policy = ChunkPolicy(
        retry_limit=settings.BATCH_RETRY_LIMIT,
        skip_limit=settings.BATCH_SKIP_LIMIT
    )

    return [
        Step(
            "csvToSqlStep",
            reader=CSVItemReader(str(input_file), delimiter=settings.BATCH_DELIMITER),
            writer=SQLItemWriter(session_maker),
            chunk_size=chunk_size,
            policy=policy
        ),
        Step(
            "migrateStep",
            reader=SQLItemReader(session_maker),
            writer=MongoItemWriter(collection),
            chunk_size=chunk_size,
            policy=policy,
            listeners=[ReadLoggingListener("relational store")]
        ),
        Step(
            "mongoToCsvStep",
            reader=MongoItemReader(collection),
            writer=CSVItemWriter(str(output_file), delimiter=settings.BATCH_DELIMITER),
            chunk_size=chunk_size,
            policy=policy
        ),
    ]
