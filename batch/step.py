"""
A named unit running one chunk processor to completion
"""

from typing import Sequence
from batch.base import ItemReader, ItemWriter
from batch.chunk import ChunkPolicy, ChunkProcessor
from batch.listeners import StepListener, notify
from schemas.execution import StepExecution
from core.exceptions import BatchException
import logging

logger = logging.getLogger(__name__)


class Step:
    """
    Bind one reader to one writer.

    The reader and writer arrive ready to use; the step only opens them
    before the first read and closes them on every exit path. The step has
    no retry of its own: the processor's terminal state is the outcome.
    """

    def __init__(
        self,
        name: str,
        reader: ItemReader,
        writer: ItemWriter,
        chunk_size: int = 5,
        policy: ChunkPolicy = ChunkPolicy(),
        listeners: Sequence[StepListener] = ()
    ):
        self.name = name
        self.reader = reader
        self.writer = writer
        self.listeners = list(listeners)
        self.processor = ChunkProcessor(
            reader,
            writer,
            chunk_size=chunk_size,
            policy=policy,
            listeners=self.listeners
        )

    async def execute(self) -> StepExecution:
        """Run the step. Never raises: failures are reported on the execution."""
        step_execution = StepExecution(step_name=self.name)
        logger.info(f"Executing step: [{self.name}]")
        notify(self.listeners, "before_step", step_execution)

        try:
            await self._open()
            await self.processor.process(step_execution)
            step_execution.complete()

        except BatchException as e:
            logger.error(
                f"Step {self.name} failed: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            step_execution.fail(e)

        except Exception as e:
            logger.exception(f"Unexpected error in step {self.name}")
            step_execution.fail(e)

        finally:
            await self._close()

        logger.info(
            f"Step [{self.name}] {step_execution.status.value}: "
            f"read={step_execution.read_count}, written={step_execution.write_count}, "
            f"chunks={step_execution.commit_count}, skipped={step_execution.skip_count}"
        )
        notify(self.listeners, "after_step", step_execution)
        return step_execution

    async def _open(self):
        await self.reader.open()
        await self.writer.open()

    async def _close(self):
        for resource in (self.reader, self.writer):
            try:
                await resource.close()
            except Exception:
                logger.exception(f"Failed to close {resource.name} in step {self.name}")
