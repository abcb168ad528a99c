"""
Core utilities and configuration for the book batch pipeline.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    database: Relational engine/session factories and the Mongo collection
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import create_engine, create_session_maker
    from core.exceptions import ParseError, WriteError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Build a session factory
    engine = create_engine(settings)
    session_maker = create_session_maker(engine)
"""

__all__ = [
    "settings",
    "create_engine",
    "create_session_maker",
    "create_mongo_client",
    "get_book_collection",
    "setup_logging",
    # Exceptions
    "BatchException",
    "ItemReadError",
    "ParseError",
    "SourceUnavailable",
    "WriteError",
    "ConfigurationError",
    "JobExecutionError",
]
