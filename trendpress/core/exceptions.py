"""Custom exceptions for TrendPress.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from TrendPressError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
"""

from typing import Any


class TrendPressError(Exception):
    """Base exception for all TrendPress errors.

    Provides a context dictionary for structured error information.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise TrendPressError("Something went wrong", context={"keyword": "손흥민"})
        ... except TrendPressError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize TrendPressError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "TrendPressError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Database Errors
# ============================================


class DatabaseError(TrendPressError):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Database operation that failed (e.g., "insert", "mark_processed")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


# ============================================
# Configuration Errors
# ============================================


class ConfigError(TrendPressError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Error message
            key: Offending configuration key
            context: Additional context
        """
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message, context=ctx)


# ============================================
# Service Errors
# ============================================


class ServiceError(TrendPressError):
    """Base exception for service-related errors."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ServiceError.

        Args:
            message: Error message
            service_name: Name of the service
            context: Additional context
        """
        ctx = context or {}
        if service_name:
            ctx["service_name"] = service_name
        super().__init__(message, context=ctx)


class ExternalAPIError(ServiceError):
    """Raised when an external API call fails.

    Attributes:
        service: Name of the external service
        status_code: HTTP status code (if applicable)
        endpoint: API endpoint that was called
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        response_body: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ExternalAPIError.

        Args:
            service: Name of the external service
            message: Error message
            status_code: HTTP status code (optional)
            endpoint: API endpoint (optional)
            response_body: Response body for debugging (optional)
            context: Additional context
        """
        ctx = context or {}
        ctx["service"] = service
        if status_code is not None:
            ctx["status_code"] = status_code
        if endpoint:
            ctx["endpoint"] = endpoint
        if response_body:
            ctx["response_body"] = response_body[:500]

        self.service = service
        self.status_code = status_code
        self.endpoint = endpoint

        super().__init__(f"{service} API error: {message}", service_name=service, context=ctx)


class SourceFetchError(ServiceError):
    """Raised inside a trend source when fetching or parsing fails.

    Never escapes ``BaseTrendSource.fetch``; the source logs it and
    contributes zero candidates.

    Attributes:
        source: Source adapter name
    """

    def __init__(
        self,
        source: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["source"] = source
        self.source = source
        super().__init__(f"{source}: {message}", service_name="collector", context=ctx)


class ArticleGenerationError(ServiceError):
    """Raised when the LLM cannot produce a usable article."""

    def __init__(
        self,
        message: str,
        keyword: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if keyword:
            ctx["keyword"] = keyword
        super().__init__(message, service_name="generator", context=ctx)


class PublishError(ServiceError):
    """Raised when writing published artifacts fails."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, service_name="publisher", context=ctx)


# ============================================
# Pipeline Errors
# ============================================


class PipelineError(TrendPressError):
    """Raised when a pipeline stage fails as a whole.

    Attributes:
        stage: Stage that was running when the failure happened
    """

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if stage:
            ctx["stage"] = stage
        self.stage = stage
        super().__init__(message, context=ctx)


__all__ = [
    "ArticleGenerationError",
    "ConfigError",
    "DatabaseError",
    "ExternalAPIError",
    "PipelineError",
    "PublishError",
    "ServiceError",
    "SourceFetchError",
    "TrendPressError",
]
