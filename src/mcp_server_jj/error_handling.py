"""Error taxonomy and classification for MCP jj Server."""

import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class JjServerError(Exception):
    """Base class for every error a tool call can report to the caller."""

    code = "JjServerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedParameters(JjServerError):
    """Tool arguments are missing, of the wrong type, or out of range."""

    code = "MalformedParameters"


class ToolNotFound(JjServerError):
    """The jj executable could not be located or started."""

    code = "ToolNotFound"


class ExecutionFailed(JjServerError):
    """jj started but exited with a non-zero status (or timed out)."""

    code = "ExecutionFailed"

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class UnknownTool(JjServerError):
    """No tool is registered under the requested name."""

    code = "UnknownTool"


class ErrorSeverity(Enum):
    """Classification of error severity levels."""

    CRITICAL = "critical"  # Bug in the server itself
    HIGH = "high"  # Environment broken, every call will fail
    MEDIUM = "medium"  # This call failed, the next may succeed
    LOW = "low"  # Caller mistake


class ErrorContext:
    """Context information about an error for logging decisions."""

    def __init__(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        operation: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        self.severity = severity
        self.operation = operation
        self.metadata = metadata or {}

    @property
    def code(self) -> str:
        return getattr(self.error, "code", type(self.error).__name__)

    def log_extra(self) -> Dict[str, Any]:
        """Fields attached to the log record for this error"""
        return {"tool": self.operation, "error_code": self.code, **self.metadata}

    @property
    def log_level(self) -> int:
        return {
            ErrorSeverity.CRITICAL: logging.ERROR,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.LOW: logging.WARNING,
        }[self.severity]


def classify_error(error: Exception, operation: str = "") -> ErrorContext:
    """Classify an error by type into an ErrorContext."""
    if isinstance(error, (MalformedParameters, UnknownTool)):
        severity = ErrorSeverity.LOW
    elif isinstance(error, ExecutionFailed):
        severity = ErrorSeverity.MEDIUM
    elif isinstance(error, ToolNotFound):
        severity = ErrorSeverity.HIGH
    else:
        severity = ErrorSeverity.CRITICAL

    metadata: Dict[str, Any] = {"error_type": type(error).__name__}
    if isinstance(error, ExecutionFailed) and error.returncode is not None:
        metadata["returncode"] = error.returncode

    return ErrorContext(
        error=error,
        severity=severity,
        operation=operation,
        metadata=metadata,
    )
