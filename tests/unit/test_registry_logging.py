"""Tests for structured registry logging."""

from pathlib import Path
from uuid import uuid4

import pytest

from template_registry.logging import LoggingContextManager, RegistryLogger, create_registry_logger


class TestRegistryLogger:
    """Test registry logger functionality."""

    def test_logger_initialization(self):
        """Test basic logger initialization."""
        logger = RegistryLogger()
        assert logger.run_id is None
        assert logger.log_file is None

    def test_create_registry_logger_factory(self):
        """Test logger factory function."""
        run_id = uuid4()
        logger = create_registry_logger(run_id=run_id, log_level="INFO", enable_console=False)
        assert logger.run_id == run_id

    def test_fetch_logging_methods(self):
        """Test fetch logging does not raise."""
        logger = RegistryLogger(enable_console=False)

        logger.fetch_started("https://example.com/registry.json")
        logger.fetch_completed("https://example.com/registry.json", "1.0.0", 3, 120)
        logger.fetch_completed("https://example.com/registry.json", None, 0, 80)
        logger.fetch_failed("https://example.com/registry.json", "timeout", 504)

    def test_scan_and_diff_logging(self):
        """Test scan and diff logging does not raise."""
        logger = RegistryLogger(enable_console=False)

        logger.scan_completed(Path("templates"), 4)
        logger.diff_evaluated("1.0.0", "1.1.0", 2, 1)
        logger.cache_operation("get", "key", hit=False)

    def test_log_file_output(self, tmp_path):
        """Events are written to the configured log file."""
        log_file = tmp_path / "logs" / "registry.log"
        logger = RegistryLogger(log_level="INFO", enable_console=False, log_file=log_file,
                                run_id=uuid4())

        logger.diff_evaluated("1.0.0", "1.1.0", 1)

        content = log_file.read_text()
        assert "Registry diff evaluated" in content
        assert str(logger.run_id) in content

    def test_error_logging(self):
        logger = RegistryLogger(enable_console=False)

        logger.error("Fetch failed", error=ValueError("bad"), context={"source": "x"})


class TestLoggingContextManager:
    """Test timed operation context manager."""

    def test_success_records_duration(self):
        logger = RegistryLogger(enable_console=False)

        with LoggingContextManager(logger, "scan", templates_dir="templates") as timer:
            pass

        assert timer.duration_ms is not None
        assert timer.duration_ms >= 0

    def test_failure_propagates(self):
        logger = RegistryLogger(enable_console=False)

        with pytest.raises(ValueError):
            with LoggingContextManager(logger, "fetch"):
                raise ValueError("boom")
