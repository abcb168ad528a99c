"""
Unit tests for job wiring and settings
"""

import pytest
from pydantic import ValidationError
from batch.job import build_book_steps
from batch.listeners import ReadLoggingListener
from batch.readers import CSVItemReader, SQLItemReader, MongoItemReader
from batch.writers import CSVItemWriter, SQLItemWriter, MongoItemWriter
from core.config import Settings
from core.exceptions import ConfigurationError


def make_settings(tmp_path, **overrides):
    values = {
        "BATCH_INPUT_FILE": str(tmp_path / "books.csv"),
        "BATCH_OUTPUT_FILE": str(tmp_path / "books2.csv"),
    }
    values.update(overrides)
    return Settings(**values)


def test_three_steps_in_run_order(tmp_path, fake_collection):
    steps = build_book_steps(make_settings(tmp_path), session_maker=object(), collection=fake_collection)

    assert [step.name for step in steps] == ["csvToSqlStep", "migrateStep", "mongoToCsvStep"]
    assert [(type(s.reader), type(s.writer)) for s in steps] == [
        (CSVItemReader, SQLItemWriter),
        (SQLItemReader, MongoItemWriter),
        (MongoItemReader, CSVItemWriter),
    ]


def test_settings_reach_every_step(tmp_path, fake_collection):
    settings = make_settings(tmp_path, BATCH_CHUNK_SIZE=7, BATCH_RETRY_LIMIT=2, BATCH_DELIMITER=";")

    steps = build_book_steps(settings, session_maker=object(), collection=fake_collection)

    assert all(step.processor.chunk_size == 7 for step in steps)
    assert all(step.processor.policy.retry_limit == 2 for step in steps)
    assert steps[0].reader.delimiter == ";"
    assert steps[2].writer.delimiter == ";"


def test_migrate_step_logs_reads(tmp_path, fake_collection):
    steps = build_book_steps(make_settings(tmp_path), session_maker=object(), collection=fake_collection)

    assert any(isinstance(listener, ReadLoggingListener) for listener in steps[1].listeners)


def test_output_must_differ_from_input(tmp_path, fake_collection):
    same = str(tmp_path / "books.csv")

    with pytest.raises(ConfigurationError):
        build_book_steps(
            make_settings(tmp_path, BATCH_OUTPUT_FILE=same),
            session_maker=object(),
            collection=fake_collection
        )


def test_defaults():
    settings = Settings()

    assert settings.BATCH_CHUNK_SIZE == 5
    assert settings.BATCH_RETRY_LIMIT == 0
    assert settings.BATCH_SKIP_LIMIT == 0
    assert settings.BATCH_DELIMITER == ","


def test_chunk_size_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(BATCH_CHUNK_SIZE=0)
