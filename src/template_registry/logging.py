"""Structured logging for registry fetches, scans and version decisions."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import UUID

import structlog

LOGGER_NAME = "template_registry"


class RegistryLogger:
    """Structured logger for registry operations with configurable verbosity."""

    def __init__(
        self,
        log_level: str = "INFO",
        enable_console: bool = True,
        log_file: Path | None = None,
        run_id: UUID | None = None,
    ):
        """Initialize registry logger.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_console: Whether to render human-readable console output
            log_file: Optional file path for log output
            run_id: Optional run ID for correlation
        """
        self.run_id = run_id
        self.log_file = log_file
        self._configure_logging(log_level, enable_console, log_file)
        self.logger = structlog.get_logger(LOGGER_NAME)

    def _configure_logging(
        self, log_level: str, enable_console: bool, log_file: Path | None
    ) -> None:
        """Configure structlog with processors and outputs."""
        level = getattr(logging, log_level.upper())

        # stderr keeps stdout free for command output
        logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
        logging.getLogger(LOGGER_NAME).setLevel(level)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_file))
            file_handler.setLevel(level)
            logging.getLogger(LOGGER_NAME).addHandler(file_handler)

        processors = [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            self._add_run_id,
            lambda _, __, event_dict: {
                k: v for k, v in event_dict.items() if v is not None
            },
        ]

        if log_level.upper() == "DEBUG":
            processors.append(
                structlog.processors.CallsiteParameterAdder(
                    parameters=[
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                        structlog.processors.CallsiteParameter.LINENO,
                    ]
                )
            )

        if enable_console:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        structlog.configure(
            processors=processors,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    def _add_run_id(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        """Add run_id to log events if available."""
        if self.run_id:
            event_dict["run_id"] = str(self.run_id)
        return event_dict

    def fetch_started(self, source: str) -> None:
        """Log registry fetch start."""
        self.logger.info(
            "Registry fetch started",
            operation="fetch",
            source=source,
            stage="registry",
        )

    def fetch_completed(
        self, source: str, version: str | None, template_count: int, duration_ms: int
    ) -> None:
        """Log registry fetch completion; version is None when nothing is published."""
        self.logger.info(
            "Registry fetch completed",
            operation="fetch",
            source=source,
            version=version,
            template_count=template_count,
            duration_ms=duration_ms,
            stage="registry",
            status="success",
        )

    def fetch_failed(self, source: str, error: str, status_code: int = None) -> None:
        """Log registry fetch failure."""
        self.logger.error(
            "Registry fetch failed",
            operation="fetch",
            source=source,
            error=error,
            status_code=status_code,
            stage="registry",
            status="error",
        )

    def cache_operation(
        self, operation: str, key: str, hit: bool = None, stale: bool = None
    ) -> None:
        """Log snapshot cache operations."""
        self.logger.debug(
            "Cache operation",
            operation="cache",
            action=operation,
            key=key,
            hit=hit,
            stale=stale,
            stage="caching",
        )

    def scan_completed(self, templates_dir: Path, template_count: int) -> None:
        """Log local template scan."""
        self.logger.info(
            "Template scan completed",
            operation="scan",
            templates_dir=str(templates_dir),
            template_count=template_count,
            stage="scan",
        )

    def diff_evaluated(
        self, base_version: str, next_version: str, new_count: int, removed_count: int = 0
    ) -> None:
        """Log the version decision."""
        self.logger.info(
            "Registry diff evaluated",
            operation="diff",
            base_version=base_version,
            next_version=next_version,
            new_count=new_count,
            removed_count=removed_count,
            bumped=next_version != base_version,
            stage="diff",
        )

    def error(
        self, message: str, error: Exception = None, context: dict[str, Any] = None
    ) -> None:
        """Log errors with context."""
        error_info = {}
        if error:
            error_info = {
                "error_type": type(error).__name__,
                "error_message": str(error),
            }

        self.logger.error(
            message, error_info=error_info, context=context or {}, status="error"
        )

    def debug(self, message: str, **kwargs) -> None:
        """Log debug information."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info level message."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(message, **kwargs)


class LoggingContextManager:
    """Times an operation and logs its start, completion or failure."""

    def __init__(self, logger: RegistryLogger, operation: str, **kwargs):
        self.logger = logger
        self.operation = operation
        self.context = kwargs
        self.start_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"{self.operation} started", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = int((datetime.now() - self.start_time).total_seconds() * 1000)

        if exc_type is None:
            self.logger.debug(
                f"{self.operation} completed",
                duration_ms=self.duration_ms,
                status="success",
                **self.context,
            )
        else:
            context_with_error = {
                **self.context,
                "duration_ms": self.duration_ms,
                "status": "error",
                "error_type": exc_type.__name__,
                "error_message": str(exc_val),
            }
            self.logger.error(f"{self.operation} failed", context=context_with_error)


def create_registry_logger(
    run_id: UUID = None,
    log_level: str = "INFO",
    enable_console: bool = True,
    log_file: Path | None = None,
) -> RegistryLogger:
    """Create and configure a registry logger instance.

    Args:
        run_id: Run ID for correlation
        log_level: Logging level
        enable_console: Whether to enable console output
        log_file: Optional log file path

    Returns:
        Configured registry logger instance
    """
    return RegistryLogger(
        log_level=log_level,
        enable_console=enable_console,
        log_file=log_file,
        run_id=run_id,
    )
