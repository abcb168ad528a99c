"""
Unit tests for the job runner
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from batch.listeners import JobListener
from batch.runner import JobRunner
from models.base import BatchStatus
from schemas.execution import StepExecution
from core.exceptions import JobExecutionError, WriteError


def make_step(name, fail=False, calls=None):
    """Step double whose execute() returns a terminal StepExecution"""
    async def execute():
        if calls is not None:
            calls.append(name)
        step_execution = StepExecution(step_name=name)
        if fail:
            step_execution.fail(WriteError(f"{name} rejected"))
        else:
            step_execution.complete()
        return step_execution

    step = MagicMock()
    step.name = name
    step.execute = AsyncMock(side_effect=execute)
    return step


class RecordingJobListener(JobListener):

    def __init__(self):
        self.events = []

    def before_job(self, job_execution):
        self.events.append(("before", job_execution.status))

    def after_job(self, job_execution):
        self.events.append(("after", job_execution.status))


@pytest.mark.asyncio
async def test_steps_run_in_declared_order():
    calls = []
    steps = [make_step(n, calls=calls) for n in ("load", "migrate", "export")]

    job_execution = await JobRunner().run(steps)

    assert calls == ["load", "migrate", "export"]
    assert job_execution.status == BatchStatus.COMPLETED
    assert job_execution.succeeded
    assert [s.step_name for s in job_execution.step_executions] == calls
    assert job_execution.failed_step is None
    job_execution.raise_for_status()


@pytest.mark.asyncio
async def test_first_failure_stops_the_run():
    calls = []
    steps = [
        make_step("load", calls=calls),
        make_step("migrate", fail=True, calls=calls),
        make_step("export", calls=calls),
    ]

    job_execution = await JobRunner().run(steps)

    assert calls == ["load", "migrate"]
    assert job_execution.status == BatchStatus.FAILED
    assert [s.step_name for s in job_execution.step_executions] == ["load", "migrate"]
    assert job_execution.failed_step.step_name == "migrate"
    assert isinstance(job_execution.exception, WriteError)


@pytest.mark.asyncio
async def test_raise_for_status_names_the_failed_step():
    job_execution = await JobRunner().run([make_step("load", fail=True)], job_name="books")

    with pytest.raises(JobExecutionError) as exc_info:
        job_execution.raise_for_status()

    assert exc_info.value.context["step_name"] == "load"
    assert isinstance(exc_info.value.original_exception, WriteError)


@pytest.mark.asyncio
async def test_listeners_notified_on_success_and_failure():
    listener = RecordingJobListener()
    runner = JobRunner(listeners=[listener])

    await runner.run([make_step("load")])
    await runner.run([make_step("load", fail=True)])

    assert listener.events == [
        ("before", BatchStatus.STARTED), ("after", BatchStatus.COMPLETED),
        ("before", BatchStatus.STARTED), ("after", BatchStatus.FAILED),
    ]


@pytest.mark.asyncio
async def test_failing_listener_does_not_abort_run():
    listener = MagicMock(spec=JobListener)
    listener.before_job.side_effect = RuntimeError("console offline")

    job_execution = await JobRunner(listeners=[listener]).run([make_step("load")])

    assert job_execution.succeeded
    listener.after_job.assert_called_once()


@pytest.mark.asyncio
async def test_stop_between_steps():
    runner = JobRunner()
    calls = []
    first = make_step("load", calls=calls)
    original = first.execute.side_effect

    async def execute_then_stop():
        result = await original()
        runner.stop()
        return result

    first.execute = AsyncMock(side_effect=execute_then_stop)

    job_execution = await runner.run([first, make_step("migrate", calls=calls)])

    assert calls == ["load"]
    assert job_execution.status == BatchStatus.STOPPED
    assert len(job_execution.step_executions) == 1


@pytest.mark.asyncio
async def test_empty_job_completes():
    job_execution = await JobRunner().run([])

    assert job_execution.succeeded
    assert job_execution.step_executions == []
