#!/usr/bin/env python3
"""
Tests for logging configuration.
"""

import io
import logging

import pytest

from ragllm.logging import LOGGER_NAME, configure_logging, parse_level, reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    yield
    reset_logging()
    logging.getLogger(LOGGER_NAME).setLevel(logging.NOTSET)


class TestParseLevel:
    """Tests for parse_level."""

    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level(" WARNING ") == logging.WARNING

    def test_numbers_pass_through(self):
        assert parse_level(logging.ERROR) == logging.ERROR

    def test_unknown_name(self):
        assert parse_level("chatty") == logging.INFO


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_messages_are_formatted(self):
        """Test package loggers write through the installed handler."""
        stream = io.StringIO()
        configure_logging("debug", stream=stream)

        logging.getLogger("ragllm.backends.ollama").debug("POST %s", "/api/chat")

        output = stream.getvalue()
        assert "[DEBUG] ragllm.backends.ollama: POST /api/chat" in output

    def test_level_filters(self):
        stream = io.StringIO()
        configure_logging("warning", stream=stream)
        logging.getLogger("ragllm.core").info("hidden")
        assert stream.getvalue() == ""

    def test_reconfigure_replaces_handler(self):
        """Test calling twice does not duplicate output."""
        first, second = io.StringIO(), io.StringIO()
        configure_logging("info", stream=first)
        logger = configure_logging("info", stream=second)

        logger.info("once")

        assert first.getvalue() == ""
        assert second.getvalue().count("once") == 1
        assert len(logger.handlers) == 1

    def test_reset_logging(self):
        logger = configure_logging("info", stream=io.StringIO())
        reset_logging()
        assert logger.handlers == []
