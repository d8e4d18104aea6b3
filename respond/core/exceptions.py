"""Structured exception hierarchy for response helper failures.

Every failure a helper can hit while producing a response is raised as a
subclass of :class:`RespondError`, carrying a machine-readable error code,
a severity and structured context for logging.

Key components:
- **ErrorCode enum**: Standardized error identifiers for programmatic handling
- **Severity enum**: Error classification for monitoring and alerting
- **RespondError**: Base exception with rich context and cause chaining
- **Specialized exceptions**: Encoding, template execution and write failures

Errors are raised to the immediate caller and are never retried. When a
helper fails after the status line was committed, the committed status and
headers stand; callers must not expect to change them afterwards.
"""

from enum import Enum
from respond.core.types import ErrorContext


class ErrorCode(Enum):
    """Standardized error codes for response helper failures."""

    ENCODING_ERROR = "ENCODING_ERROR"
    """The payload cannot be represented in the requested format."""

    TEMPLATE_EXECUTION_ERROR = "TEMPLATE_EXECUTION_ERROR"
    """A template failed while being rendered."""

    WRITE_ERROR = "WRITE_ERROR"
    """The underlying response writer failed to accept bytes."""


class Severity(Enum):
    """Severity levels for response helper failures."""

    LOW = "LOW"
    """Low severity errors that don't significantly impact functionality."""

    MEDIUM = "MEDIUM"
    """Medium severity errors that may affect some features but not critical ops."""

    HIGH = "HIGH"
    """High severity errors impacting critical functionality or data integrity."""

    CRITICAL = "CRITICAL"
    """Critical errors requiring immediate attention, may cause system failures."""


class RespondError(Exception):
    """Base exception class for all response helper exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    @property
    def is_expected(self) -> bool:
        """Determine if this is an expected error based on severity.

        Expected errors come from caller input, such as a payload that cannot
        be serialized, rather than from the transport.

        Returns:
            bool: True if the error is expected (LOW or MEDIUM severity)
        """
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        """Return a string representation of the exception.

        Returns:
            str: A formatted string containing the error code and message
        """
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception.

        Returns:
            str: A string showing the class name, error code, message, severity,
                and context
        """
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class EncodingError(RespondError):
    """Exception raised when a payload cannot be serialized.

    Args:
        message: Description of the encoding failure
        content_type: The MIME type the payload was being encoded to
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        content_type: str | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        context = dict(context or {})
        if content_type is not None:
            context["content_type"] = content_type
        super().__init__(
            ErrorCode.ENCODING_ERROR, message, Severity.LOW, context, cause
        )
        self.content_type = content_type


class TemplateExecutionError(RespondError):
    """Exception raised when a template fails while rendering.

    Output rendered before the failure may already be in the response body.

    Args:
        message: Description of the template failure
        template_name: Name of the failing template, if it has one
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        template_name: str | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        context = dict(context or {})
        if template_name is not None:
            context["template_name"] = template_name
        super().__init__(
            ErrorCode.TEMPLATE_EXECUTION_ERROR,
            message,
            Severity.MEDIUM,
            context,
            cause,
        )
        self.template_name = template_name


class ResponseWriteError(RespondError):
    """Exception raised when the response writer fails, e.g. client disconnect.

    Args:
        message: Description of the write failure
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.WRITE_ERROR, message, Severity.HIGH, context, cause)
