"""
Structured JSON Logging for the Kanban simulator

Provides JSON-structured logging with run correlation so that every record
emitted by the engine during one CLI invocation or session can be traced
back to it.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import IO, List, Optional, Union

PACKAGE_LOGGER_NAME = "kanban_engine"
LOG_FILE_NAME = "kanban_sim.log"


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs"""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "run_id": self.run_id,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            # exc_info may be True if the caller passed exc_info=True outside an except block
            exc_info = (
                record.exc_info if isinstance(record.exc_info, tuple) else sys.exc_info()
            )
            if exc_info and exc_info[0] is not None:
                log_data["exception"] = {
                    "type": exc_info[0].__name__,
                    "message": str(exc_info[1]) if exc_info[1] else None,
                    "traceback": self.formatException(exc_info),
                }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ProductionLogger:
    """
    Run-correlated logger for the simulator.

    Handlers are attached to the ``kanban_engine`` package logger, so records
    from every engine module (which log via ``logging.getLogger(__name__)``)
    flow through them. Console output goes to stderr, human-readable unless
    ``json_console`` is set. A rotating JSON file log is added when
    ``log_dir`` is given.
    """

    def __init__(
        self,
        run_id: Optional[str] = None,
        log_level: str = "INFO",
        log_dir: Optional[Union[str, Path]] = None,
        json_console: bool = False,
        stream: Optional[IO[str]] = None,
    ):
        """
        Args:
            run_id: Unique identifier for this run. Generated if not provided.
            log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for the rotating JSON log file; None disables it
            json_console: Emit JSON instead of plain text on the console
            stream: Console stream, defaults to stderr
        """
        self.run_id = run_id or self._generate_run_id()
        self.log_level = getattr(logging, log_level.upper())
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self._handlers: List[logging.Handler] = []
        self._setup_logging(json_console, stream)

    def _generate_run_id(self) -> str:
        """Generate unique run ID with timestamp and UUID"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        unique_suffix = str(uuid.uuid4())[:8]
        return f"{timestamp}-{unique_suffix}"

    def _setup_logging(self, json_console: bool, stream: Optional[IO[str]]) -> None:
        self.logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        self.logger.setLevel(self.log_level)

        console_handler = logging.StreamHandler(stream or sys.stderr)
        if json_console:
            console_handler.setFormatter(JSONFormatter(self.run_id))
        else:
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        console_handler.setLevel(self.log_level)
        self._add_handler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            # 10MB per file, keep 5
            json_handler = RotatingFileHandler(
                self.log_dir / LOG_FILE_NAME,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            json_handler.setFormatter(JSONFormatter(self.run_id))
            json_handler.setLevel(self.log_level)
            self._add_handler(json_handler)

        self.logger.propagate = False

    def _add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)
        self._handlers.append(handler)

    def log_event(self, level: str, message: str, **kwargs) -> None:
        """
        Log structured event with additional context

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Human-readable log message
            **kwargs: Additional structured data to include in JSON
        """
        self.logger.log(
            getattr(logging, level.upper()), message, extra={"extra_data": kwargs}
        )

    def debug(self, message: str, **kwargs) -> None:
        self.log_event("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log_event("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log_event("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log_event("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self.log_event("CRITICAL", message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback"""
        self.logger.error(message, exc_info=True, extra={"extra_data": kwargs})

    def get_run_id(self) -> str:
        return self.run_id

    def close(self) -> None:
        """Detach and close the handlers this instance installed"""
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        self.logger.propagate = True


def get_logger(
    run_id: Optional[str] = None,
    log_level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None,
    json_console: bool = False,
) -> ProductionLogger:
    """
    Factory function to get a configured production logger

    Args:
        run_id: Optional run ID. Generated if not provided.
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Optional directory for rotating JSON logs

    Returns:
        Configured ProductionLogger instance
    """
    return ProductionLogger(
        run_id=run_id, log_level=log_level, log_dir=log_dir, json_console=json_console
    )
