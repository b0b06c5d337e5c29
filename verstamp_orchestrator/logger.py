"""
Structured JSON Logging for verstamp

Every propagation run gets a run id; records go to a rotating JSON file for
post-release auditing and to the console in human-readable form.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union
import sys


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs"""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "run_id": self.run_id,
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_info = (
                record.exc_info if isinstance(record.exc_info, tuple) else sys.exc_info()
            )
            if exc_info and isinstance(exc_info, tuple):
                log_data["exception"] = {
                    "type": exc_info[0].__name__ if exc_info[0] else None,
                    "message": str(exc_info[1]) if exc_info[1] else None,
                    "traceback": self.formatException(exc_info),
                }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ProductionLogger:
    """
    Run-scoped logger with structured JSON output.

    Features:
    - Structured JSON logging for machine parsing
    - Run ID correlation across one set-version invocation
    - Dual output: JSON to file, human-readable to console
    - Automatic log rotation
    """

    def __init__(
        self,
        run_id: Optional[str] = None,
        log_level: str = "INFO",
        log_dir: Union[str, Path] = "logs",
        json_file: bool = True,
        console: bool = True,
    ):
        """
        Initialize the logger

        Args:
            run_id: Unique identifier for this run. Generated if not provided.
            log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory receiving verstamp.log
            json_file: Write the rotating JSON log file
            console: Echo records to stderr
        """
        self.run_id = run_id or self._generate_run_id()
        self.log_level = getattr(logging, log_level.upper())
        self.log_dir = Path(log_dir)
        self.json_file = json_file
        self.console = console
        self._setup_logging()

    def _generate_run_id(self) -> str:
        """Generate unique run ID with timestamp and UUID"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        unique_suffix = str(uuid.uuid4())[:8]
        return f"{timestamp}-{unique_suffix}"

    def _setup_logging(self) -> None:
        """Setup console + file logging with rotation"""
        self.logger = logging.getLogger(f"verstamp.{self.run_id}")
        self.logger.setLevel(self.log_level)

        # Prevent duplicate handlers if logger already exists
        if self.logger.handlers:
            return

        if self.json_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            json_handler = RotatingFileHandler(
                self.log_dir / "verstamp.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=10,
                encoding="utf-8",
            )
            json_handler.setFormatter(JSONFormatter(self.run_id))
            json_handler.setLevel(self.log_level)
            self.logger.addHandler(json_handler)

        if self.console:
            console_handler = logging.StreamHandler()
            console_formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            console_handler.setFormatter(console_formatter)
            console_handler.setLevel(self.log_level)
            self.logger.addHandler(console_handler)

        self.logger.propagate = False

    def log_event(self, level: str, message: str, **kwargs) -> None:
        """
        Log structured event with additional context

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Human-readable log message
            **kwargs: Additional structured data to include in JSON
        """
        record = self.logger.makeRecord(
            name=self.logger.name,
            level=getattr(logging, level.upper()),
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
        record.extra_data = kwargs
        self.logger.handle(record)

    def debug(self, message: str, **kwargs) -> None:
        self.log_event("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log_event("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log_event("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log_event("ERROR", message, **kwargs)

    def get_run_id(self) -> str:
        return self.run_id

    def close(self) -> None:
        """Close all handlers and cleanup"""
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)


def get_logger(
    run_id: Optional[str] = None,
    log_level: str = "INFO",
    log_dir: Union[str, Path] = "logs",
    json_file: bool = True,
    console: bool = True,
) -> ProductionLogger:
    """
    Factory function to get a configured logger

    Args:
        run_id: Optional run ID. Generated if not provided.
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the JSON log file
        json_file: Whether to write the JSON log file
        console: Whether to echo to the console

    Returns:
        Configured ProductionLogger instance
    """
    return ProductionLogger(
        run_id=run_id,
        log_level=log_level,
        log_dir=log_dir,
        json_file=json_file,
        console=console,
    )
