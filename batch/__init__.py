"""
Chunk-oriented batch pipeline moving books between stores.

Modules:
    base: ItemReader and ItemWriter abstractions
    mapping: Positional decode/encode between store rows and BookRecord
    chunk: ChunkProcessor and ChunkPolicy (commit boundary, retry/skip)
    step: Step, one reader/writer pair run to completion
    runner: JobRunner, sequential execution with stop-on-failure
    listeners: Observer hooks with no-op defaults
    job: Wiring of the three steps from settings
    scheduler: APScheduler integration for interval runs

Subpackages:
    readers: CSV, SQL and Mongo readers
    writers: CSV, SQL and Mongo writers

Architecture:
    The job runs three steps in a fixed order:

    1. csvToSqlStep   - delimited input file into the books table
    2. migrateStep    - books table into the document collection
    3. mongoToCsvStep - document collection into the output file

    Each step reads items into chunks (default 5) and hands each full
    chunk to its writer. The first failed step ends the run.

Usage:
    from batch.job import build_book_steps
    from batch.runner import JobRunner

Example:
    steps = build_book_steps(settings, session_maker, collection)
    job_execution = await JobRunner().run(steps)

    if not job_execution.succeeded:
        print(job_execution.failed_step.step_name, job_execution.exception)

Error Handling:
    Readers raise ParseError or SourceUnavailable, writers raise
    WriteError (see core.exceptions). Under the default policy each is
    fatal to its step and the cause is kept on the StepExecution.
"""

__all__ = [
    "ItemReader",
    "ItemWriter",
    "ChunkPolicy",
    "ChunkProcessor",
    "Step",
    "JobRunner",
    "JobListener",
    "StepListener",
    "build_book_steps",
    "BatchScheduler",
]
