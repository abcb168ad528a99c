"""
Script to run the book transfer job once.

Exit code 0 when every step completed, 1 otherwise.
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import create_engine, create_session_maker, create_mongo_client, get_book_collection
from core.exceptions import BatchException
from core.logging import setup_logging
from batch.job import JOB_NAME, build_book_steps
from batch.listeners import JobLoggingListener
from batch.runner import JobRunner

logger = logging.getLogger(__name__)


async def run_batch() -> int:
    """Run the job and map its outcome to an exit code"""

    engine = create_engine(settings)
    mongo_client = create_mongo_client(settings)

    try:
        steps = build_book_steps(
            settings,
            create_session_maker(engine),
            get_book_collection(mongo_client, settings)
        )
        runner = JobRunner(listeners=[JobLoggingListener()])
        job_execution = await runner.run(steps, job_name=JOB_NAME)

        if job_execution.succeeded:
            for step_execution in job_execution.step_executions:
                logger.info(
                    f"{step_execution.step_name}: "
                    f"Read={step_execution.read_count}, Written={step_execution.write_count}"
                )
            return 0

        failed = job_execution.failed_step
        if failed:
            logger.error(f"Job failed at {failed.step_name}: {failed.exception}")
        else:
            logger.error(f"Job ended with status {job_execution.status.value}")
        return 1

    except BatchException as e:
        logger.error(f"Batch pipeline error: {e}", extra={"error_context": e.to_dict()})
        return 1
    finally:
        await mongo_client.close()
        await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(run_batch()))
