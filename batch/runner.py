"""
Job runner - executes steps in declared order.

Steps never overlap: each one reads what the previous one wrote. The first
failed step ends the run and later steps are not attempted.
"""

from typing import Sequence
from datetime import datetime
from batch.listeners import JobListener, notify
from batch.step import Step
from models.base import BatchStatus
from schemas.execution import JobExecution
import logging

logger = logging.getLogger(__name__)


class JobRunner:
    """
    Sequential job orchestrator

    Responsibilities:
    - Run steps strictly one after another
    - Stop at the first failed step
    - Honour stop requests between steps
    - Notify job listeners before the first step and after the last one
    """

    def __init__(self, listeners: Sequence[JobListener] = ()):
        self.listeners = list(listeners)
        self._stop_requested = False

    def stop(self):
        """Ask the current run to end after the step in progress."""
        logger.info("Stop requested; no further steps will start")
        self._stop_requested = True

    async def run(self, steps: Sequence[Step], job_name: str = "bookTransferJob") -> JobExecution:
        """
        Run the steps and return the job execution.

        The execution lists exactly the steps that were attempted. Its
        status is COMPLETED, FAILED (first failed step) or STOPPED.
        """
        self._stop_requested = False
        job_execution = JobExecution(job_name=job_name)
        notify(self.listeners, "before_job", job_execution)

        try:
            for step in steps:
                if self._stop_requested:
                    job_execution.status = BatchStatus.STOPPED
                    logger.warning(f"Job {job_name} stopped before step {step.name}")
                    break

                step_execution = await step.execute()
                job_execution.step_executions.append(step_execution)

                if step_execution.failed:
                    job_execution.status = BatchStatus.FAILED
                    logger.error(
                        f"Job {job_name} failed at step {step.name}: {step_execution.exit_message}"
                    )
                    break
            else:
                job_execution.status = BatchStatus.COMPLETED

        finally:
            if job_execution.status == BatchStatus.STARTED:
                job_execution.status = BatchStatus.FAILED
            job_execution.ended_at = datetime.utcnow()
            notify(self.listeners, "after_job", job_execution)

        return job_execution
