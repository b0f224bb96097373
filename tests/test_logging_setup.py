"""Tests for logging configuration."""

import logging

import pytest

from notescribe.logging_setup import setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger after each test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_setup_logging_with_file(root_logger, tmp_path):
    """Test console and file handlers are attached and records reach the file."""
    log_file = tmp_path / "logs" / "notescribe.log"

    setup_logging("DEBUG", log_file)
    logging.getLogger("notescribe.test").debug("hello log")
    for handler in root_logger.handlers:
        handler.flush()

    assert root_logger.level == logging.DEBUG
    file_handlers = [
        h for h in root_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    assert "hello log" in log_file.read_text()


def test_setup_logging_replaces_handlers(root_logger, tmp_path):
    """Test calling setup again doesn't stack handlers."""
    setup_logging("INFO", tmp_path / "first.log")
    setup_logging("WARNING", tmp_path / "second.log")

    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 2
    file_handlers = [
        h for h in root_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    assert [h.baseFilename for h in file_handlers] == [
        str(tmp_path / "second.log")
    ]


def test_setup_logging_console_only(root_logger):
    """Test no file handler is added without a log file."""
    setup_logging("ERROR")

    assert len(root_logger.handlers) == 1
    assert not isinstance(root_logger.handlers[0], logging.FileHandler)
