"""Tests for logging setup."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from cloud_nuke.utils.logging import setup_logging


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_installs_rich_handler(self) -> None:
        """Test the root logger gets a single Rich handler at the requested level."""
        setup_logging(level="warning")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)

    def test_quiets_third_party_loggers(self) -> None:
        """Test SDK loggers are capped at WARNING unless verbose."""
        logging.getLogger("botocore").setLevel(logging.NOTSET)

        setup_logging(level="DEBUG")

        assert logging.getLogger("botocore").level == logging.WARNING

    def test_verbose_leaves_third_party_loggers(self) -> None:
        """Test verbose mode does not touch SDK loggers."""
        logging.getLogger("google").setLevel(logging.NOTSET)

        setup_logging(level="DEBUG", verbose=True)

        assert logging.getLogger("google").level == logging.NOTSET

    def test_invalid_level(self) -> None:
        """Test an unknown level name is rejected."""
        with pytest.raises(ValueError):
            setup_logging(level="LOUD")
