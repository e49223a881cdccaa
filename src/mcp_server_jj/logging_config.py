import json
import logging
import sys
from pathlib import Path
from typing import Optional


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that gracefully handles closed streams during shutdown.
    """

    def handleError(self, record):
        # StreamHandler.emit routes write failures here
        error = sys.exc_info()[1]
        if isinstance(error, (ValueError, OSError)):
            text = str(error).lower()
            if "closed file" in text or "bad file descriptor" in text:
                return
        super().handleError(record)


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured JSON with contextual fields.
    """

    CONTEXT_FIELDS = (
        "request_id",
        "tool",
        "duration_ms",
        "error_code",
        "error_type",
        "returncode",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in self.CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_record["exception"] = record.exc_text
        return json.dumps(log_record, ensure_ascii=False)


def configure_logging(log_level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Centralized logging configuration for MCP jj Server.

    Sets up the root logger with structured JSON output on stderr (stdout
    carries the protocol) and, optionally, a DEBUG-level file handler.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(StructuredLogFormatter())
    handler.setLevel(log_level.upper())
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredLogFormatter())
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)

    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("mcp").setLevel("WARNING")
