"""
Pydantic schemas describing one run of the pipeline.

Executions live in memory for a single invocation; nothing here is
persisted.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from models.base import BatchStatus
from core.exceptions import JobExecutionError


class StepExecution(BaseModel):
    """Outcome and counters of one step"""

    step_name: str
    status: BatchStatus = BatchStatus.STARTED

    read_count: int = 0
    write_count: int = 0
    commit_count: int = 0
    skip_count: int = 0
    retry_count: int = 0

    started_at: datetime = Field(default_factory=datetime.utcnow)
    ended_at: Optional[datetime] = None

    exception: Optional[Exception] = None
    exit_message: Optional[str] = None

    class Config:
        arbitrary_types_allowed = True

    @property
    def failed(self) -> bool:
        return self.status == BatchStatus.FAILED

    def complete(self):
        self.status = BatchStatus.COMPLETED
        self.ended_at = datetime.utcnow()

    def fail(self, exc: Exception):
        self.status = BatchStatus.FAILED
        self.exception = exc
        self.exit_message = str(exc)
        self.ended_at = datetime.utcnow()


class JobExecution(BaseModel):
    """
    The run: ordered outcomes of exactly the steps that were attempted.
    """

    job_name: str
    status: BatchStatus = BatchStatus.STARTED
    step_executions: List[StepExecution] = Field(default_factory=list)

    started_at: datetime = Field(default_factory=datetime.utcnow)
    ended_at: Optional[datetime] = None

    class Config:
        arbitrary_types_allowed = True

    @property
    def succeeded(self) -> bool:
        return self.status == BatchStatus.COMPLETED

    @property
    def failed_step(self) -> Optional[StepExecution]:
        for step_execution in self.step_executions:
            if step_execution.failed:
                return step_execution
        return None

    @property
    def exception(self) -> Optional[Exception]:
        failed = self.failed_step
        return failed.exception if failed else None

    def raise_for_status(self):
        """Raise JobExecutionError if the run did not complete."""
        if self.succeeded:
            return

        failed = self.failed_step
        raise JobExecutionError(
            f"Job {self.job_name} ended with status {self.status.value}",
            context={
                "job_name": self.job_name,
                "step_name": failed.step_name if failed else None
            },
            original_exception=failed.exception if failed else None
        )
