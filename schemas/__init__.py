"""
Pydantic schemas for records and run results.

Schemas:
    book: BookRecord, the two-field record every reader produces and every
          writer accepts
    execution: StepExecution and JobExecution, the in-memory outcome of a run

Usage:
    from schemas.book import BookRecord
    from schemas.execution import JobExecution, StepExecution

Example:
    record = BookRecord(id="1", name="Alice")
    assert record.id == 1
"""

__all__ = [
    "BookRecord",
    "StepExecution",
    "JobExecution",
]
