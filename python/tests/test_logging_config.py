"""Unit tests for logging_config module."""

import logging
import os
import sys
from unittest.mock import patch

import pytest

from content_negotiation.logging_config import get_logger


class TestGetLogger:
    """Test get_logger function."""

    def test_default_error_level(self):
        """Test that logger defaults to ERROR level when no env var set."""
        with patch.dict(os.environ, {}, clear=True):
            test_logger = get_logger("test_default_logger")
            try:
                assert len(test_logger.handlers) > 0
                assert test_logger.level == logging.ERROR
            finally:
                test_logger.handlers.clear()

    @pytest.mark.parametrize(
        "level_name, level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
        ],
    )
    def test_package_log_level(self, level_name, level):
        """Test that CONTENT_NEGOTIATION_LOG_LEVEL sets the level."""
        with patch.dict(
            os.environ, {"CONTENT_NEGOTIATION_LOG_LEVEL": level_name}, clear=True
        ):
            test_logger = get_logger(f"test_{level_name.lower()}_logger")
            try:
                assert test_logger.level == level
            finally:
                test_logger.handlers.clear()

    def test_lowercase_level(self):
        with patch.dict(os.environ, {"CONTENT_NEGOTIATION_LOG_LEVEL": "debug"}, clear=True):
            test_logger = get_logger("test_lowercase_logger")
            try:
                assert test_logger.level == logging.DEBUG
            finally:
                test_logger.handlers.clear()

    def test_numeric_level(self):
        with patch.dict(os.environ, {"CONTENT_NEGOTIATION_LOG_LEVEL": "10"}, clear=True):
            test_logger = get_logger("test_numeric_logger")
            try:
                assert test_logger.level == logging.DEBUG
            finally:
                test_logger.handlers.clear()

    def test_log_level_fallback(self):
        """Test that LOG_LEVEL is used when the package variable is not set."""
        with patch.dict(os.environ, {"LOG_LEVEL": "INFO"}, clear=True):
            test_logger = get_logger("test_fallback_logger")
            try:
                assert test_logger.level == logging.INFO
            finally:
                test_logger.handlers.clear()

    def test_package_level_takes_precedence(self):
        with patch.dict(
            os.environ,
            {"CONTENT_NEGOTIATION_LOG_LEVEL": "DEBUG", "LOG_LEVEL": "ERROR"},
            clear=True,
        ):
            test_logger = get_logger("test_precedence_logger")
            try:
                assert test_logger.level == logging.DEBUG
            finally:
                test_logger.handlers.clear()

    def test_handler_configuration(self):
        with patch.dict(os.environ, {}, clear=True):
            test_logger = get_logger("test_handler_logger")
            try:
                handler = test_logger.handlers[0]
                assert isinstance(handler, logging.StreamHandler)
                assert handler.stream == sys.stdout
                assert "%(levelname)s" in handler.formatter._fmt
                assert test_logger.propagate is False
            finally:
                test_logger.handlers.clear()

    def test_not_reconfigured(self):
        """Test that a configured logger keeps its handlers on repeat calls."""
        with patch.dict(os.environ, {}, clear=True):
            test_logger = get_logger("test_reuse_logger")
            try:
                handler_count = len(test_logger.handlers)
                assert get_logger("test_reuse_logger") is test_logger
                assert len(test_logger.handlers) == handler_count
            finally:
                test_logger.handlers.clear()
