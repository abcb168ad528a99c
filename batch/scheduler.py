import logging
from typing import Callable, List
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from batch.job import JOB_NAME
from batch.listeners import JobLoggingListener
from batch.runner import JobRunner
from batch.step import Step
from schemas.execution import JobExecution

logger = logging.getLogger(__name__)


class BatchScheduler:
    """
    Run the job on a fixed interval.

    ``step_factory`` is called for every run; steps hold forward-only
    readers, so each run needs fresh ones.
    """

    def __init__(self, step_factory: Callable[[], List[Step]], interval_minutes: int = 30):
        self.step_factory = step_factory
        self.interval_minutes = interval_minutes
        self.runner = JobRunner(listeners=[JobLoggingListener()])
        self.scheduler = AsyncIOScheduler()

    async def run_batch_job(self) -> JobExecution:
        """Job to run the pipeline once"""
        logger.info("Scheduler: Starting batch job")
        job_execution = await self.runner.run(self.step_factory(), job_name=JOB_NAME)

        if job_execution.succeeded:
            logger.info("Scheduler: batch job completed")
        else:
            failed = job_execution.failed_step
            logger.error(
                f"Scheduler: batch job {job_execution.status.value}"
                + (f" at {failed.step_name} - {failed.exit_message}" if failed else "")
            )
        return job_execution

    def start(self):
        """Start the scheduler"""
        self.scheduler.add_job(
            self.run_batch_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id="batch_job",
            max_instances=1,
            replace_existing=True
        )
        self.scheduler.start()
        logger.info(f"Batch scheduler started (every {self.interval_minutes} minutes)")

    def stop(self):
        self.runner.stop()
        self.scheduler.shutdown()
        logger.info("Batch scheduler stopped")
