"""
Exception hierarchy for the docchat service.

Provides layered exception structure for pipeline errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocChatException(Exception):
    """Base exception for all docchat errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(DocChatException):
    """Raised when chunking parameters or request fields are invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            field: Parameter or field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class InvalidRequestError(ConfigurationError):
    """Raised when a required request field is missing or malformed."""

    pass


class ParsingError(DocChatException):
    """Raised when the source document cannot be loaded."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            file_path: Path of the document that failed
            details: Additional context
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        self.file_path = file_path
        super().__init__(message, details)


class EmbeddingError(DocChatException):
    """Raised when the embedding capability fails during build or query."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding error.

        Args:
            message: Error message
            operation: Operation that failed (build, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class GenerationError(DocChatException):
    """Raised when the generative capability fails."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation error.

        Args:
            message: Error message
            stage: Pipeline stage that failed (rewrite, generate)
            details: Additional context
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        self.stage = stage
        super().__init__(message, details)


class StageTimeoutError(DocChatException, TimeoutError):
    """Raised when a pipeline stage exceeds its configured timeout."""

    def __init__(
        self,
        stage: str,
        timeout: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize stage timeout error.

        Args:
            stage: Pipeline stage that timed out
            timeout: Timeout in seconds that was exceeded
            details: Additional context
        """
        details = details or {}
        details["stage"] = stage
        details["timeout_s"] = timeout
        self.stage = stage
        self.timeout = timeout
        super().__init__(f"Stage '{stage}' timed out after {timeout}s", details)


class SessionNotFoundError(DocChatException):
    """Raised when a session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class IndexNotReadyError(DocChatException):
    """Raised when a request arrives before the vector index is built."""

    pass
