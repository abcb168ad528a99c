"""
Custom exceptions for the batch pipeline with structured error context.

Every exception carries a context dictionary for debugging and keeps the
driver-level exception that caused it, so the step that failed can report
the original cause.

Exception Hierarchy:
    BatchException (base)
    ├── ItemReadError
    │   ├── ParseError
    │   └── SourceUnavailable
    ├── WriteError
    ├── ConfigurationError
    └── JobExecutionError
"""

from typing import Optional, Dict, Any
from datetime import datetime


class BatchException(Exception):
    """
    Base exception for all batch-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (step, row number, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.utcnow()

        # Add timestamp to context
        self.context["error_timestamp"] = self.timestamp.isoformat()

        # Chain original exception if provided
        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Read Errors
# ============================================================================

class ItemReadError(BatchException):
    """Base exception for failures while reading an item from a source."""
    pass


class ParseError(ItemReadError):
    """
    Exception raised when a single item cannot be mapped to a BookRecord.

    Context should include:
        - row_number: Position of the item in the source (if applicable)
        - fields: The raw field values that failed to decode
    """
    pass


class SourceUnavailable(ItemReadError):
    """
    Exception raised when the source cannot be opened or queried.

    Context should include:
        - source: Reader name
        - operation: open or read
    """
    pass


# ============================================================================
# Write Errors
# ============================================================================

class WriteError(BatchException):
    """
    Exception raised when a sink rejects or cannot durably accept a chunk.

    Context should include:
        - sink: Writer name
        - chunk_size: Number of items in the rejected chunk
        - written_count: Items already written before the failure
          (non-transactional sinks only)
    """
    pass


# ============================================================================
# Wiring and Job Errors
# ============================================================================

class ConfigurationError(BatchException):
    """Exception raised when steps cannot be built from the settings."""
    pass


class JobExecutionError(BatchException):
    """
    Exception raised by JobExecution.raise_for_status for a failed run.

    Context should include:
        - job_name: Name of the job
        - step_name: Name of the step that failed
    """
    pass
