"""
Exception hierarchy for the portfolio assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and
carry the HTTP status the API layer renders them with.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PortfolioRAGException(Exception):
    """Base exception for all portfolio assistant errors."""

    status_code: int = 500

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


class ValidationError(PortfolioRAGException):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message explaining how to fix the input
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UnsupportedFileTypeError(ValidationError):
    """Raised when an uploaded file is not plain text or markdown."""

    def __init__(self, file_name: str, file_type: str | None = None) -> None:
        details: dict[str, Any] = {"file_name": file_name}
        if file_type:
            details["file_type"] = file_type
        message = "Unsupported file type. Supported: TXT, MD"
        if file_name.lower().endswith(".pdf") or file_type == "application/pdf":
            message = "PDF files are not supported. Convert the PDF to a .txt or .md file and upload that instead"
        super().__init__(message, field="file", details=details)


class EmptyContentError(ValidationError):
    """Raised when a document has no text after trimming whitespace."""

    def __init__(self, file_name: str) -> None:
        super().__init__(
            "No text content found in file",
            field="file",
            details={"file_name": file_name},
        )


class NotFoundError(PortfolioRAGException):
    """Raised when a delete or lookup target does not exist."""

    status_code = 404


class UpstreamError(PortfolioRAGException):
    """Base exception for failed calls to external services."""

    status_code = 500

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message, including the upstream error text
            service: Name of the external service that failed
            details: Additional context
        """
        details = details or {}
        if service:
            details["service"] = service
        super().__init__(message, details)


class EmbeddingError(UpstreamError):
    """Raised when embedding generation fails or returns malformed vectors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, service="embeddings", details=details)


class VectorStoreError(UpstreamError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete, stats)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, service="vector_store", details=details)


class ChatModelError(UpstreamError):
    """Raised when the chat completion stream cannot be produced."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, service="chat_model", details=details)


class AuthError(PortfolioRAGException):
    """Raised when an admin password is rejected."""

    status_code = 401


class AuthDisabledError(AuthError):
    """Raised when no admin password is configured."""

    status_code = 503
