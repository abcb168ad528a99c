"""
Chunk-oriented processing of one reader/writer pair.

The processor alternates between two phases until the reader is exhausted
or an error stops it:

    Filling   read items into the current chunk until it holds chunk_size
              items or the reader returns None
    Flushing  hand the chunk to the writer exactly once, then discard it

A failed read discards the chunk being filled, so none of its items reach
the writer. An empty final chunk is never written.
"""

from typing import List, Sequence
from pydantic import BaseModel, Field
from batch.base import ItemReader, ItemWriter
from batch.listeners import StepListener, notify
from schemas.book import BookRecord
from schemas.execution import StepExecution
from core.exceptions import ItemReadError, ParseError, WriteError
import logging

logger = logging.getLogger(__name__)


class ChunkPolicy(BaseModel):
    """
    Fault tolerance for a step. The defaults disable both retry and skip:
    any bad item or rejected chunk fails the step.

    Attributes:
        retry_limit: Extra attempts to write a rejected chunk. Writers
            without transactions may land the same prefix more than once.
        skip_limit: ParseError items that may be dropped before the step
            fails. SourceUnavailable is never skipped.
    """

    retry_limit: int = Field(0, ge=0)
    skip_limit: int = Field(0, ge=0)

    class Config:
        frozen = True


class ChunkProcessor:
    """Drive one reader into one writer, chunk by chunk."""

    def __init__(
        self,
        reader: ItemReader,
        writer: ItemWriter,
        chunk_size: int = 5,
        policy: ChunkPolicy = ChunkPolicy(),
        listeners: Sequence[StepListener] = ()
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.reader = reader
        self.writer = writer
        self.chunk_size = chunk_size
        self.policy = policy
        self.listeners = list(listeners)

    async def process(self, step_execution: StepExecution) -> StepExecution:
        """
        Move every item from reader to writer.

        Counters on ``step_execution`` are updated as chunks commit.

        Raises:
            ItemReadError: A read failed and could not be skipped
            WriteError: A chunk was rejected after all retries
        """
        while True:
            chunk, exhausted = await self._fill(step_execution)

            if chunk:
                await self._flush(chunk, step_execution)

            if exhausted:
                return step_execution

    async def _fill(self, step_execution: StepExecution):
        chunk: List[BookRecord] = []

        while len(chunk) < self.chunk_size:
            notify(self.listeners, "before_read")
            try:
                item = await self.reader.read()
            except ParseError as e:
                notify(self.listeners, "on_read_error", e)
                if step_execution.skip_count >= self.policy.skip_limit:
                    raise
                step_execution.skip_count += 1
                logger.warning(
                    f"Skipping unreadable item ({step_execution.skip_count}/{self.policy.skip_limit}): {e.message}"
                )
                notify(self.listeners, "on_skip", e)
                continue
            except ItemReadError as e:
                notify(self.listeners, "on_read_error", e)
                raise

            if item is None:
                return chunk, True

            step_execution.read_count += 1
            chunk.append(item)
            notify(self.listeners, "after_read", item)

        return chunk, False

    async def _flush(self, chunk: List[BookRecord], step_execution: StepExecution):
        attempt = 0

        while True:
            try:
                await self.writer.write(chunk)
                break
            except WriteError as e:
                notify(self.listeners, "on_write_error", chunk, e)
                if attempt >= self.policy.retry_limit:
                    raise
                attempt += 1
                step_execution.retry_count += 1
                logger.warning(
                    f"Retrying chunk of {len(chunk)} items ({attempt}/{self.policy.retry_limit}): {e.message}"
                )

        step_execution.write_count += len(chunk)
        step_execution.commit_count += 1
        logger.debug(
            f"{step_execution.step_name}: committed chunk {step_execution.commit_count} "
            f"({len(chunk)} items)"
        )
        notify(self.listeners, "after_write", chunk)
