"""
Observer hooks for jobs and steps.

Every hook has a no-op default, so a listener overrides only what it needs.
Hooks are called synchronously at fixed points and are observational only:
an exception raised by a listener is logged by the caller and never changes
the outcome of a read, a write, a step or a job.
"""

from typing import List
from schemas.book import BookRecord
from schemas.execution import JobExecution, StepExecution
import logging

logger = logging.getLogger(__name__)


class JobListener:
    """Run-level notifications"""

    def before_job(self, job_execution: JobExecution):
        pass

    def after_job(self, job_execution: JobExecution):
        pass


class StepListener:
    """Step, read and write notifications"""

    def before_step(self, step_execution: StepExecution):
        pass

    def after_step(self, step_execution: StepExecution):
        pass

    def before_read(self):
        pass

    def after_read(self, item: BookRecord):
        pass

    def on_read_error(self, exc: Exception):
        pass

    def on_skip(self, exc: Exception):
        pass

    def after_write(self, items: List[BookRecord]):
        pass

    def on_write_error(self, items: List[BookRecord], exc: Exception):
        pass


def notify(listeners, hook: str, *args):
    """Call ``hook`` on each listener; listener failures are logged and dropped."""
    for listener in listeners:
        try:
            getattr(listener, hook)(*args)
        except Exception:
            logger.exception(f"Listener {type(listener).__name__}.{hook} raised")


# ============================================================================
# Logging listeners
# ============================================================================

class JobLoggingListener(JobListener):
    """Log the start and end of a run"""

    def before_job(self, job_execution: JobExecution):
        logger.info(f"Job started: {job_execution.job_name}")

    def after_job(self, job_execution: JobExecution):
        logger.info(
            f"Job finished: {job_execution.job_name} "
            f"({job_execution.status.value}, {len(job_execution.step_executions)} steps)"
        )


class ReadLoggingListener(StepListener):
    """Log every record as it is read"""

    def __init__(self, label: str):
        self.label = label

    def after_read(self, item: BookRecord):
        logger.info(f"READ from {self.label}: {item}")
